"""Command-line entry point: render one payload file to a PDF on disk."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .composer import build_report
from .config import DEFAULT_REPORT_DIR, DEFAULT_TEMPLATE, DEFAULT_THEME, FILTER_SECTIONS
from .errors import TenderReportError
from .logging_utils import setup_logging
from .report_presets import SECTION_TEMPLATES, THEMES
from .report_store import save_report_pdf

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tender-report",
        description="Render a government tender analysis report as a PDF.",
    )
    parser.add_argument("payload", type=Path, help="Path to the analytics payload JSON")
    parser.add_argument(
        "--sections",
        default=None,
        help="Comma-separated optional sections to include (default: all). Known: " + ", ".join(FILTER_SECTIONS),
    )
    parser.add_argument("--theme", default=DEFAULT_THEME, choices=sorted(THEMES))
    parser.add_argument("--template", default=DEFAULT_TEMPLATE, choices=sorted(SECTION_TEMPLATES))
    parser.add_argument("--output-dir", type=Path, default=DEFAULT_REPORT_DIR, help="Where to write the PDF")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write a DEBUG log to this file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.INFO, args.log_file)

    selection = None
    if args.sections is not None:
        selection = [s for s in args.sections.split(",") if s.strip()]

    try:
        report = build_report(args.payload, selection=selection, theme=args.theme, template=args.template)
        path = save_report_pdf(report, args.output_dir)
    except (TenderReportError, OSError) as exc:
        logger.error("Report generation failed: %s", exc, exc_info=args.debug)
        return 1

    print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
