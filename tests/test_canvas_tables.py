import pytest

from tender_report.canvas import LayoutContext, ReportPDF
from tender_report.report_presets import get_theme
from tender_report.tables import ColumnSpec, TableStyle, render_table

COLUMNS = [ColumnSpec("#", 10, "C"), ColumnSpec("Bid Number", 60), ColumnSpec("Value", 40, "R")]
STYLE = TableStyle(header_fill=(30, 64, 175), stripe_fill=(239, 246, 255))


def rows(n):
    return [[str(i + 1), f"GEM/2025/B/{i:04d}", "Rs 5,000"] for i in range(n)]


def test_safe_bottom_reserves_footer_band(layout):
    assert layout.safe_bottom == pytest.approx(297 - 15 - 10)
    assert layout.top_offset == pytest.approx(26)


def test_ensure_space_breaks_only_when_needed(layout):
    layout.y = 100
    assert layout.ensure_space(50) is False
    assert layout.page_no == 1

    layout.y = 265
    assert layout.ensure_space(10) is True
    assert layout.page_no == 2
    assert layout.y == pytest.approx(layout.top_offset)


def test_cover_has_no_decorations_but_later_pages_do(layout):
    layout.start_new_page()
    layout.pdf.output()
    assert "Page 1" not in layout.pdf.page_text(1)
    second = layout.pdf.page_text(2)
    assert "Page 2" in second
    assert "Confidential" in second
    assert "Acme Supplies Pvt Ltd" in second
    assert "Government Tender Analysis Report" in second


def test_compact_theme_changes_geometry():
    theme = get_theme("compact")
    ctx = LayoutContext(pdf=ReportPDF(theme, "Seller", "05 Mar 2025"), theme=theme)
    assert ctx.safe_bottom == pytest.approx(297 - 12 - 6)
    assert ctx.content_width == pytest.approx(210 - 28)


def test_short_table_stays_on_one_page(layout):
    layout.start_new_page()
    result = render_table(layout, COLUMNS, rows(5), STYLE)
    assert result.pages == (2,)
    assert result.rows_drawn == 5
    assert result.final_y == pytest.approx(layout.top_offset + 9 + 5 * 7)
    assert layout.last_table_y == result.final_y


def test_long_table_paginates_and_repeats_header(layout):
    layout.start_new_page()
    breaks = []
    result = render_table(layout, COLUMNS, rows(60), STYLE, on_page_break=lambda ctx: breaks.append(ctx.page_no))

    assert result.pages == (2, 3)
    assert breaks == [3]
    assert layout.page_no == 3
    assert layout.pdf.page_text(2).count("Bid Number") == 1
    assert layout.pdf.page_text(3).count("Bid Number") == 1
    assert "GEM/2025/B/0059" in layout.pdf.page_text(3)
    assert result.final_y <= layout.safe_bottom


def test_table_header_moves_to_next_page_when_no_row_fits(layout):
    layout.start_new_page()
    layout.y = layout.safe_bottom - 10
    breaks = []
    result = render_table(layout, COLUMNS, rows(1), STYLE, on_page_break=lambda ctx: breaks.append(ctx.page_no))
    assert result.pages == (3,)
    assert breaks == [3]


def test_rows_keep_their_order_across_pages(layout):
    layout.start_new_page()
    render_table(layout, COLUMNS, rows(60), STYLE)
    seen = [
        int(text.rsplit("/", 1)[1])
        for page in (2, 3)
        for text in layout.pdf.page_text(page)
        if text.startswith("GEM/2025/B/")
    ]
    assert seen == list(range(60))
    first_on_page_3 = next(t for t in layout.pdf.page_text(3) if t.startswith("GEM/2025/B/"))
    last_on_page_2 = [t for t in layout.pdf.page_text(2) if t.startswith("GEM/2025/B/")][-1]
    assert int(first_on_page_3[-4:]) == int(last_on_page_2[-4:]) + 1
