"""
Report composer: walks the section template in order, applies the caller's
filter selection and each section's empty-data rule, and hands back a
finished document.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from .canvas import LayoutContext, ReportPDF
from .config import DEFAULT_TEMPLATE, DEFAULT_THEME
from .context import FilterSelection, ReportContext
from .errors import ReportRenderError
from .formatting import format_date
from .metrics import PerformanceKpis, derive_kpis
from .payload import ReportInput, load_report_input
from .primitives import empty_message, section_header
from .report_presets import get_template, get_theme
from .sections import SECTIONS_BY_ID, EmptyBehavior, SectionData, SectionSpec

logger = logging.getLogger(__name__)

PayloadSource = Union[str, Path, Dict, ReportInput]
SelectionSource = Union[FilterSelection, Iterable[str], None]


class TenderReport:
    """A closed PDF plus what went into it."""

    def __init__(self, pdf: ReportPDF, context: ReportContext, kpis: PerformanceKpis, rendered: List[str]):
        self.pdf = pdf
        self.context = context
        self.kpis = kpis
        self.rendered_sections = rendered
        self._bytes: Optional[bytes] = None

    def to_bytes(self) -> bytes:
        if self._bytes is None:
            self._bytes = bytes(self.pdf.output())
        return self._bytes

    def save(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.to_bytes())
        return path

    @property
    def page_count(self) -> int:
        return self.pdf.page_no()

    def page_text(self, page: int) -> List[str]:
        return self.pdf.page_text(page)

    def text(self) -> str:
        return "\n".join(s for page in range(1, self.page_count + 1) for s in self.page_text(page))


def _coerce_selection(selection: SelectionSource) -> FilterSelection:
    if selection is None:
        return FilterSelection.all()
    if isinstance(selection, FilterSelection):
        return selection
    if isinstance(selection, str):
        selection = selection.split(",")
    return FilterSelection.of(selection)


def _should_render(spec: SectionSpec, data: SectionData) -> bool:
    if spec.filter_id is not None and spec.filter_id not in data.selection:
        logger.debug("Section %s filtered out", spec.id)
        return False
    return True


def _render_section(ctx: LayoutContext, spec: SectionSpec, data: SectionData) -> bool:
    """Draw one section. Returns False when it was skipped for lack of data."""
    has_data = spec.has_data(data) if spec.has_data is not None else True
    if not has_data and spec.empty_behavior is EmptyBehavior.SKIP:
        logger.debug("Section %s has no data, skipping", spec.id)
        return False

    if spec.force_new_page:
        ctx.start_new_page()
    elif spec.show_header:
        ctx.ensure_space(spec.reserve)

    if spec.show_header:
        section_header(ctx, spec.title, ctx.color(spec.accent))
    if has_data:
        spec.renderer(ctx, data)
    else:
        empty_message(ctx, spec.empty_text)
    return True


def build_report(
    payload: PayloadSource,
    selection: SelectionSource = None,
    theme: str = DEFAULT_THEME,
    template: str = DEFAULT_TEMPLATE,
    now: Optional[datetime] = None,
) -> TenderReport:
    """
    Compose the full report for one payload.

    ``selection`` names the optional sections to include (all of them when
    None). ``now`` pins the clock used for open/closed status. A failing
    section aborts the whole build with ``ReportRenderError``.
    """
    report = load_report_input(payload)
    chosen = _coerce_selection(selection)
    look = get_theme(theme)
    order = get_template(template).order
    now = now or datetime.now(timezone.utc)

    kpis = derive_kpis(report.data.missed_but_winnable, report.meta.params_used.days)
    context = ReportContext(
        seller_name=report.seller_name,
        selection=chosen,
        theme=theme,
        template=template,
        issued_at=report.meta.report_generated_at or now.isoformat(),
    )
    logger.info(
        "Building report for %r: theme=%s template=%s sections=%s",
        context.seller_name,
        theme,
        template,
        ",".join(chosen.ordered()) or "-",
    )

    pdf = ReportPDF(look, context.seller_name, format_date(report.meta.report_generated_at))
    ctx = LayoutContext(pdf=pdf, theme=look)
    ctx.open_cover()
    data = SectionData(report=report, kpis=kpis, selection=chosen, now=now)

    rendered: List[str] = []
    for sid in order:
        spec = SECTIONS_BY_ID[sid]
        if not _should_render(spec, data):
            continue
        try:
            if _render_section(ctx, spec, data):
                rendered.append(sid)
        except Exception as exc:
            logger.exception("Section %s failed", sid)
            raise ReportRenderError(sid, exc) from exc

    result = TenderReport(pdf, context, kpis, rendered)
    # Closing the document stamps the last footer, so finish before callers read page text.
    result.to_bytes()
    logger.info("Report complete: %d pages, %d sections", result.page_count, len(rendered))
    return result
