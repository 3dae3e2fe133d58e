"""
Tabular renderer with row-level pagination.

Rows are single-line: cell strings arrive pre-formatted and are cut to the
column width here. When a row would cross the safe bottom the renderer
opens a new page, repeats the header band and carries on.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .canvas import LayoutContext
from .formatting import fit_text
from .report_presets import RGB

PT_TO_MM = 0.3528
CELL_PAD = 2.0


@dataclass(frozen=True)
class ColumnSpec:
    title: str
    width: float
    align: str = "L"
    color: Optional[RGB] = None
    bold: bool = False
    font_size: Optional[float] = None


@dataclass(frozen=True)
class TableStyle:
    header_fill: RGB
    stripe_fill: RGB
    header_text: RGB = (255, 255, 255)
    body_text: RGB = (31, 41, 55)
    header_font_size: float = 8.0
    body_font_size: float = 7.0
    header_height: float = 9.0
    row_height: float = 7.0


@dataclass(frozen=True)
class TableResult:
    """Where the table ended; callers resume below ``final_y``."""

    final_y: float
    pages: Tuple[int, ...]
    rows_drawn: int


def _baseline(top: float, height: float, size: float) -> float:
    cap = size * PT_TO_MM * 0.7
    return top + (height + cap) / 2


def _cell_x(x: float, width: float, align: str) -> float:
    if align == "C":
        return x + width / 2
    if align == "R":
        return x + width - CELL_PAD
    return x + CELL_PAD


def _draw_header(ctx: LayoutContext, columns: Sequence[ColumnSpec], style: TableStyle) -> None:
    pdf = ctx.pdf
    total_w = sum(c.width for c in columns)
    pdf.fill_rect(ctx.margin, ctx.y, total_w, style.header_height, style.header_fill)
    pdf.use_font(style.header_font_size, "B", style.header_text)
    x = ctx.margin
    baseline = _baseline(ctx.y, style.header_height, style.header_font_size)
    for col in columns:
        title = fit_text(col.title, col.width - 2 * CELL_PAD, pdf.get_string_width)
        pdf.place_text(x + col.width / 2, baseline, title, align="C")
        x += col.width
    ctx.advance(style.header_height)


def _draw_row(
    ctx: LayoutContext, columns: Sequence[ColumnSpec], row: Sequence[str], index: int, style: TableStyle
) -> None:
    pdf = ctx.pdf
    if index % 2 == 1:
        pdf.fill_rect(ctx.margin, ctx.y, sum(c.width for c in columns), style.row_height, style.stripe_fill)
    x = ctx.margin
    for col, cell in zip(columns, row):
        size = col.font_size or style.body_font_size
        pdf.use_font(size, "B" if col.bold else "", col.color or style.body_text)
        text = fit_text(cell, col.width - 2 * CELL_PAD, pdf.get_string_width)
        pdf.place_text(_cell_x(x, col.width, col.align), _baseline(ctx.y, style.row_height, size), text, align=col.align)
        x += col.width
    ctx.advance(style.row_height)


def render_table(
    ctx: LayoutContext,
    columns: Sequence[ColumnSpec],
    rows: Sequence[Sequence[str]],
    style: TableStyle,
    on_page_break: Optional[Callable[[LayoutContext], None]] = None,
) -> TableResult:
    """
    Draw a header band and striped body rows starting at the cursor.

    ``on_page_break`` runs after every page the table itself opens, including
    one opened to keep the header with its first row, before the header is
    drawn. The returned ``final_y`` is also stored on ``ctx.last_table_y``.
    """
    # Keep the header together with at least one body row.
    if ctx.ensure_space(style.header_height + style.row_height) and on_page_break is not None:
        on_page_break(ctx)
    pages: List[int] = [ctx.page_no]
    _draw_header(ctx, columns, style)

    for index, row in enumerate(rows):
        if ctx.y + style.row_height > ctx.safe_bottom:
            ctx.start_new_page()
            pages.append(ctx.page_no)
            if on_page_break is not None:
                on_page_break(ctx)
            _draw_header(ctx, columns, style)
        _draw_row(ctx, columns, row, index, style)

    ctx.last_table_y = ctx.y
    return TableResult(final_y=ctx.y, pages=tuple(pages), rows_drawn=len(rows))
