"""
PDF report engine for government tender analytics.

Turns one analytics payload into a multi-page A4 report: KPIs, charts,
paginated tables and narrative sections, filtered by caller selection.
"""

from .composer import TenderReport, build_report
from .config import DEFAULT_REPORT_DIR, FILTER_SECTIONS
from .context import FilterSelection, ReportContext
from .errors import ReportInputError, ReportRenderError, TenderReportError, UnknownPresetError
from .payload import ReportInput, load_report_input
from .report_store import report_filename, save_report_pdf

__all__ = [
    "DEFAULT_REPORT_DIR",
    "FILTER_SECTIONS",
    "FilterSelection",
    "ReportContext",
    "ReportInput",
    "ReportInputError",
    "ReportRenderError",
    "TenderReport",
    "TenderReportError",
    "UnknownPresetError",
    "build_report",
    "load_report_input",
    "report_filename",
    "save_report_pdf",
]
