import math

import pytest

from tender_report import sections
from tender_report.charts import (
    MIN_BAR_LENGTH,
    ChartDatum,
    bar_length,
    draw_bar_chart,
    draw_donut,
    pie_slices,
    slice_triangles,
)

GREEN = (16, 185, 129)
RED = (239, 68, 68)


def test_slices_cover_full_circle_clockwise_from_top():
    slices = pie_slices([ChartDatum("Wins", 3, GREEN), ChartDatum("Losses", 1, RED)])
    assert slices[0].start == pytest.approx(-math.pi / 2)
    assert sum(s.span for s in slices) == pytest.approx(2 * math.pi)
    assert slices[0].span == pytest.approx(1.5 * math.pi)
    assert slices[1].start == pytest.approx(slices[0].end)


def test_zero_total_yields_no_slices():
    assert pie_slices([ChartDatum("Wins", 0, GREEN), ChartDatum("Losses", 0, RED)]) == []
    assert pie_slices([]) == []


def test_slice_triangle_step_is_bounded():
    quarter = pie_slices([ChartDatum("a", 1, GREEN), ChartDatum("b", 3, RED)])[0]
    wedges = slice_triangles(50, 50, 20, 0, quarter)
    assert len(wedges) in (45, 46)
    assert math.degrees(quarter.span) / len(wedges) <= 2.0 + 1e-9
    # A ring needs two triangles per step.
    assert len(slice_triangles(50, 50, 20, 12, quarter)) == 2 * len(wedges)


def test_empty_donut_draws_caption(layout):
    drawn = draw_donut(layout.pdf, 50, 50, 20, 12, [ChartDatum("Wins", 0, GREEN)])
    assert drawn == []
    assert "No data" in layout.pdf.page_text(1)


@pytest.mark.parametrize(
    "value, max_value, expected",
    [
        (5, 10, 50.0),
        (10, 10, 100.0),
        (0, 10, MIN_BAR_LENGTH),
        (0.01, 10, MIN_BAR_LENGTH),
        (20, 10, 100.0),
        (5, 0, MIN_BAR_LENGTH),
        (5, -3, MIN_BAR_LENGTH),
    ],
)
def test_bar_length_clamps(value, max_value, expected):
    assert bar_length(value, max_value, 100) == pytest.approx(expected)


def test_all_zero_series_renders_floor_bars(layout):
    bars = draw_bar_chart(layout.pdf, 20, 40, 100, [ChartDatum("A", 0, GREEN), ChartDatum("B", 0, RED)])
    assert [b.length for b in bars] == [MIN_BAR_LENGTH, MIN_BAR_LENGTH]


def test_bar_labels_are_fitted_and_values_drawn(layout):
    data = [ChartDatum("An extremely long organization name that will not fit", 4, GREEN, 80.0)]
    bars = draw_bar_chart(layout.pdf, 20, 40, 100, data, value_label=lambda d: f"{d.percentage:.1f}%")
    assert bars[0].label.endswith("...")
    assert bars[0].length == pytest.approx(100.0)
    assert "80.0%" in layout.pdf.page_text(1)


def test_full_length_bar_keeps_value_label_inside_card(layout):
    layout.y = 40
    data = [ChartDatum("Only", 5, GREEN, 100.0), ChartDatum("Half", 2, RED, 40.0)]
    bars = sections._chart_card(layout, data, sections._pct_label)
    card_inner_right = layout.margin + layout.content_width - 4
    assert all(b.label_end <= card_inner_right for b in bars)
    assert "100.0%" in layout.pdf.page_text(1)


def test_wide_value_label_falls_back_inside_the_bar(layout):
    bars = draw_bar_chart(
        layout.pdf, 20, 40, 100, [ChartDatum("A", 10, GREEN)], value_label=lambda d: "12,34,56,789", max_x=185
    )
    assert bars[0].label_end == pytest.approx(bars[0].x + bars[0].length)
    assert "12,34,56,789" in layout.pdf.page_text(1)
