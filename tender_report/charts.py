"""
Chart renderers drawn from primitives (filled triangles and rectangles) so
output does not depend on native arc support or an image pipeline.

Geometry is computed by plain functions first; the ``draw_*`` helpers only
paint what they return. Renderers take an origin and never move the layout
cursor.
"""

import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .canvas import ReportPDF
from .formatting import fit_text, to_number
from .report_presets import RGB

SLICE_STEP_DEGREES = 2.0

BAR_HEIGHT = 12.0
BAR_SPACING = 8.0
LABEL_WIDTH = 55.0
TRACK_OFFSET = 60.0
MIN_BAR_LENGTH = 2.0
VALUE_LABEL_ROOM = 18.0

Point = Tuple[float, float]


@dataclass(frozen=True)
class ChartDatum:
    label: str
    value: float
    color: RGB
    percentage: Optional[float] = None


@dataclass(frozen=True)
class PieSlice:
    label: str
    color: RGB
    start: float
    span: float

    @property
    def end(self) -> float:
        return self.start + self.span


@dataclass(frozen=True)
class BarGeometry:
    label: str
    x: float
    y: float
    length: float
    label_end: float


# ---- pie / donut
def pie_slices(data: Sequence[ChartDatum]) -> List[PieSlice]:
    """
    Slices in input order, clockwise from 12 o'clock. Negative values count
    as zero. A series whose total is not positive yields no slices.
    """
    values = [max(to_number(d.value), 0.0) for d in data]
    total = sum(values)
    if total <= 0:
        return []
    angle = -math.pi / 2
    slices = []
    for datum, value in zip(data, values):
        span = 2 * math.pi * value / total
        slices.append(PieSlice(label=datum.label, color=datum.color, start=angle, span=span))
        angle += span
    return slices


def slice_triangles(
    cx: float,
    cy: float,
    outer: float,
    inner: float,
    piece: PieSlice,
    step_degrees: float = SLICE_STEP_DEGREES,
) -> List[Tuple[Point, Point, Point]]:
    """Fan one slice into triangles of at most ``step_degrees`` each."""
    if piece.span <= 0:
        return []
    steps = max(1, math.ceil(math.degrees(piece.span) / step_degrees))
    tris = []
    for i in range(steps):
        a1 = piece.start + piece.span * i / steps
        a2 = piece.start + piece.span * (i + 1) / steps
        o1 = (cx + outer * math.cos(a1), cy + outer * math.sin(a1))
        o2 = (cx + outer * math.cos(a2), cy + outer * math.sin(a2))
        if inner > 0:
            i1 = (cx + inner * math.cos(a1), cy + inner * math.sin(a1))
            i2 = (cx + inner * math.cos(a2), cy + inner * math.sin(a2))
            tris.append((o1, o2, i1))
            tris.append((o2, i2, i1))
        else:
            tris.append(((cx, cy), o1, o2))
    return tris


def draw_donut(
    pdf: ReportPDF,
    cx: float,
    cy: float,
    outer: float,
    inner: float,
    data: Sequence[ChartDatum],
    empty_label: str = "No data",
) -> List[PieSlice]:
    """
    Paint a donut (or a pie when ``inner`` is 0). With nothing to divide,
    an empty grey ring and ``empty_label`` are drawn instead.
    """
    theme = pdf.theme
    slices = pie_slices(data)
    if not slices:
        pdf.fill_circle(cx, cy, outer, theme.color("border_gray"))
        if inner > 0:
            pdf.fill_circle(cx, cy, inner, theme.color("white"))
        pdf.use_font(7, "I", theme.color("medium_gray"))
        pdf.place_text(cx, cy + 1, empty_label, align="C")
        return []
    for piece in slices:
        for tri in slice_triangles(cx, cy, outer, inner, piece):
            pdf.fill_triangle(tri, piece.color)
    if inner > 0:
        pdf.fill_circle(cx, cy, inner, theme.color("white"))
    return slices


# ---- horizontal bars
def bar_length(value: float, max_value: float, track_width: float) -> float:
    """
    Proportional bar length clamped to [MIN_BAR_LENGTH, track_width].
    A non-positive maximum renders every bar at the floor.
    """
    if max_value <= 0:
        return MIN_BAR_LENGTH
    length = track_width * max(to_number(value), 0.0) / max_value
    return min(max(length, MIN_BAR_LENGTH), track_width)


def bar_chart_height(rows: int) -> float:
    return rows * (BAR_HEIGHT + BAR_SPACING)


def _lighten(color: RGB, amount: int = 30) -> RGB:
    return tuple(min(c + amount, 255) for c in color)  # type: ignore[return-value]


def draw_bar_chart(
    pdf: ReportPDF,
    x: float,
    y: float,
    track_width: float,
    data: Sequence[ChartDatum],
    value_label: Optional[Callable[[ChartDatum], str]] = None,
    max_value: Optional[float] = None,
    max_x: Optional[float] = None,
) -> List[BarGeometry]:
    """
    Horizontal bars with labels in a fixed left column. Value labels sit
    past the bar end; with ``max_x`` set, a label that would cross it is
    drawn inside the bar.
    """
    theme = pdf.theme
    if not data:
        return []
    if max_value is None:
        max_value = max(to_number(d.value) for d in data)
    track_x = x + TRACK_OFFSET
    inner_h = BAR_HEIGHT - 4
    bars = []
    for index, datum in enumerate(data):
        row_y = y + index * (BAR_HEIGHT + BAR_SPACING)

        pdf.use_font(9, "", theme.color("dark_gray"))
        label = fit_text(datum.label, LABEL_WIDTH, pdf.get_string_width)
        pdf.place_text(x, row_y + 8, label)

        length = bar_length(datum.value, max_value, track_width)
        radius = min(3.0, inner_h / 2)
        pdf.fill_rect(track_x, row_y + 2, track_width, inner_h, theme.color("border_gray"), radius)
        bar_radius = min(radius, length / 2)
        pdf.fill_rect(track_x, row_y + 2, length, inner_h, datum.color, bar_radius)
        pdf.fill_rect(track_x, row_y + 2, length, inner_h / 2, _lighten(datum.color), min(bar_radius, inner_h / 4))

        label_end = track_x + length
        if value_label is not None:
            pdf.use_font(9, "B", datum.color)
            text = value_label(datum)
            width = pdf.get_string_width(text)
            if max_x is not None and track_x + length + 2 + width > max_x:
                # No room past the bar end: right-align inside the bar instead.
                pdf.set_text_color(*theme.color("white"))
                pdf.place_text(track_x + length - 2, row_y + 8, text, align="R")
            else:
                pdf.place_text(track_x + length + 2, row_y + 8, text)
                label_end = track_x + length + 2 + width

        bars.append(BarGeometry(label=label, x=track_x, y=row_y + 2, length=length, label_end=label_end))
    return bars
