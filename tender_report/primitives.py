"""
Emission primitives shared by the section renderers.

Every primitive that moves the cursor asks the page-break controller for
its height first, then draws at ``ctx.y`` and advances past itself.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from .canvas import LayoutContext, ReportPDF
from .formatting import clean_text, wrap_text
from .report_presets import RGB

SECTION_HEADER_HEIGHT = 14.0
SECTION_HEADER_RESERVE = 25.0
PT_TO_MM = 0.3528


def line_height(size: float, leading: float = 1.4) -> float:
    return size * PT_TO_MM * leading


def draw_card(pdf: ReportPDF, x: float, y: float, w: float, h: float, accent: Optional[RGB] = None) -> None:
    """White rounded card with a drop shadow, a border and an optional left accent bar."""
    t = pdf.theme
    r = t.card_radius
    pdf.fill_rect(x + 1, y + 2, w, h, t.color("shadow"), r)
    pdf.fill_rect(x, y, w, h, t.color("white"), r)
    pdf.stroke_rect(x, y, w, h, t.color("border_gray"), r)
    if accent is not None:
        pdf.fill_rect(x, y, 3, h, accent)


def section_header(ctx: LayoutContext, title: str, color: Optional[RGB] = None) -> None:
    ctx.ensure_space(SECTION_HEADER_RESERVE)
    pdf = ctx.pdf
    x, y, w = ctx.margin, ctx.y, ctx.content_width
    pdf.fill_rect(x, y, w, SECTION_HEADER_HEIGHT, ctx.color("white"), 3)
    pdf.fill_rect(x, y, 3, SECTION_HEADER_HEIGHT, color or ctx.color("deep_blue"))
    pdf.stroke_rect(x, y, w, SECTION_HEADER_HEIGHT, ctx.color("border_gray"), 3)
    pdf.use_font(11, "B", ctx.color("dark_gray"))
    pdf.place_text(x + 8, y + 9, title)
    ctx.advance(SECTION_HEADER_HEIGHT + 4)


def kpi_card(
    pdf: ReportPDF,
    x: float,
    y: float,
    w: float,
    h: float,
    value: str,
    label: str,
    color: RGB,
    tint: RGB,
    value_size: float = 24,
) -> None:
    t = pdf.theme
    draw_card(pdf, x, y, w, h, accent=color)
    pdf.fill_rect(x + 3, y, w - 3, h, tint, t.card_radius)
    pdf.use_font(value_size, "B", color)
    pdf.place_text(x + w / 2, y + 15, value, align="C")
    pdf.use_font(9, "", t.color("medium_gray"))
    pdf.place_text(x + w / 2, y + 22, label, align="C")


def kpi_grid(
    ctx: LayoutContext,
    cards: Sequence[Tuple[str, str, RGB, RGB, float]],
    columns: int = 2,
    gap: float = 12.0,
    row_gap: float = 8.0,
) -> None:
    """
    Lay KPI cards out in rows of ``columns``; each card is
    (value, label, colour, tint, value font size).
    """
    h = ctx.theme.kpi_card_height
    w = (ctx.content_width - gap * (columns - 1)) / columns
    for start in range(0, len(cards), columns):
        ctx.ensure_space(h)
        for offset, (value, label, color, tint, size) in enumerate(cards[start : start + columns]):
            kpi_card(ctx.pdf, ctx.margin + offset * (w + gap), ctx.y, w, h, value, label, color, tint, size)
        ctx.advance(h + row_gap)
    ctx.advance(ctx.theme.section_gap - row_gap)


def paragraph(
    ctx: LayoutContext,
    text: str,
    size: float = 9,
    style: str = "",
    color: Optional[RGB] = None,
    indent: float = 0.0,
    after: float = 2.0,
) -> List[str]:
    """Wrap text to the content width and emit it line by line."""
    pdf = ctx.pdf
    pdf.use_font(size, style, color or ctx.color("dark_gray"))
    lh = line_height(size)
    lines = wrap_text(text, ctx.content_width - indent, pdf.get_string_width)
    for line in lines:
        if ctx.ensure_space(lh):
            pdf.use_font(size, style, color or ctx.color("dark_gray"))
        pdf.place_text(ctx.margin + indent, ctx.y + lh * 0.75, line)
        ctx.advance(lh)
    ctx.advance(after)
    return lines


def bullets(ctx: LayoutContext, items: Iterable[str], size: float = 9, color: Optional[RGB] = None) -> None:
    pdf = ctx.pdf
    lh = line_height(size)
    for item in clean_lines(items):
        pdf.use_font(size, "", color or ctx.color("dark_gray"))
        lines = wrap_text(item, ctx.content_width - 6, pdf.get_string_width)
        for i, line in enumerate(lines):
            if ctx.ensure_space(lh):
                pdf.use_font(size, "", color or ctx.color("dark_gray"))
            if i == 0:
                pdf.place_text(ctx.margin + 1, ctx.y + lh * 0.75, "-")
            pdf.place_text(ctx.margin + 6, ctx.y + lh * 0.75, line)
            ctx.advance(lh)
    ctx.advance(2)


def empty_message(ctx: LayoutContext, text: str) -> None:
    lh = line_height(9)
    ctx.ensure_space(lh + 4)
    ctx.pdf.use_font(9, "I", ctx.color("medium_gray"))
    ctx.pdf.place_text(ctx.margin + 4, ctx.y + lh * 0.75, text)
    ctx.advance(lh + ctx.theme.section_gap / 2)


def stat_strip(ctx: LayoutContext, stats: Sequence[Tuple[str, str, RGB]], height: float = 18.0) -> None:
    """A single-row card of 'Label: value' pairs spread evenly across the page."""
    ctx.ensure_space(height)
    pdf = ctx.pdf
    draw_card(pdf, ctx.margin, ctx.y, ctx.content_width, height)
    slot = (ctx.content_width - 20) / max(len(stats), 1)
    for i, (label, value, color) in enumerate(stats):
        x = ctx.margin + 10 + i * slot
        pdf.use_font(8, "B", ctx.color("medium_gray"))
        shown = pdf.place_text(x, ctx.y + 8, f"{label}:")
        pdf.set_text_color(*color)
        pdf.place_text(x + pdf.get_string_width(shown) + 2, ctx.y + 8, value)
    ctx.advance(height + 5)


def text_card(
    ctx: LayoutContext,
    title: str,
    text: str,
    accent: RGB,
    max_lines: int = 7,
    size: float = 8,
) -> int:
    """
    Card holding a titled block of wrapped text. Its height follows the
    wrapped line count (capped at ``max_lines``). Returns the lines shown.
    """
    pdf = ctx.pdf
    pdf.use_font(size, "")
    lines = wrap_text(text, ctx.content_width - 25, pdf.get_string_width)[:max_lines]
    lh = line_height(size)
    height = 15 + max(len(lines), 1) * lh + 6
    ctx.ensure_space(height)
    draw_card(pdf, ctx.margin, ctx.y, ctx.content_width, height, accent=accent)
    pdf.use_font(9, "B", accent)
    pdf.place_text(ctx.margin + 10, ctx.y + 8, title)
    pdf.use_font(size, "", ctx.color("dark_gray"))
    for i, line in enumerate(lines):
        pdf.place_text(ctx.margin + 10, ctx.y + 15 + i * lh, line)
    ctx.advance(height + ctx.theme.section_gap)
    return len(lines)


def key_value_lines(ctx: LayoutContext, rows: Sequence[Tuple[str, str]], label_w: float = 55.0, size: float = 8) -> None:
    """Bold label column next to a value column, one pair per line."""
    pdf = ctx.pdf
    lh = line_height(size, 1.8)
    for label, value in rows:
        ctx.ensure_space(lh)
        pdf.use_font(size, "B", ctx.color("medium_gray"))
        pdf.place_text(ctx.margin + 4, ctx.y + lh * 0.7, label)
        pdf.use_font(size, "", ctx.color("dark_gray"))
        shown = wrap_text(value, ctx.content_width - label_w - 4, pdf.get_string_width)
        pdf.place_text(ctx.margin + label_w, ctx.y + lh * 0.7, shown[0] if shown else "-")
        ctx.advance(lh)
    ctx.advance(2)


def clean_lines(values: Iterable[str]) -> List[str]:
    return [v for v in (clean_text(x) for x in values) if v]
