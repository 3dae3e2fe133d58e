import json
import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import Optional, Union

from .composer import TenderReport
from .config import DEFAULT_REPORT_DIR

logger = logging.getLogger(__name__)


def report_filename(seller_name: str, when: Optional[Union[date, datetime]] = None) -> str:
    """``<Seller_Name>_Report_<YYYY-MM-DD>.pdf`` with whitespace runs turned into underscores."""
    when = when or datetime.now()
    stem = re.sub(r"\s+", "_", (seller_name or "").strip())
    stem = re.sub(r"[^\w.-]", "", stem) or "Seller"
    return f"{stem}_Report_{when.strftime('%Y-%m-%d')}.pdf"


def save_report_pdf(
    report: TenderReport,
    report_dir: Path = DEFAULT_REPORT_DIR,
    when: Optional[datetime] = None,
) -> Path:
    """
    Persist a generated PDF and a small metadata sidecar under ./reports.
    Returns the PDF path.
    """
    report_dir = Path(report_dir)
    report_dir.mkdir(parents=True, exist_ok=True)
    ctx = report.context
    pdf_path = report_dir / report_filename(ctx.seller_name, when)
    meta_path = pdf_path.with_suffix(".json")

    pdf_path.write_bytes(report.to_bytes())
    logger.info("Saved report to %s", pdf_path)

    metadata = {
        "seller_name": ctx.seller_name,
        "generated_at": ctx.issued_at or datetime.now().isoformat(),
        "theme": ctx.theme,
        "template": ctx.template,
        "sections": report.rendered_sections,
        "selection": list(ctx.selection.ordered()),
        "pages": report.page_count,
        "cache_key": ctx.cache_key(),
        "path": str(pdf_path),
    }
    try:
        meta_path.write_text(json.dumps(metadata, indent=2), encoding="utf-8")
    except OSError as exc:
        # The PDF is already on disk; a missing sidecar is not fatal.
        logger.warning("Could not write report metadata %s: %s", meta_path, exc)
    return pdf_path
