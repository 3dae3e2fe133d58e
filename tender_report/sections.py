"""
Report sections and their registry.

Each ``SectionSpec`` names the filter id that guards it (None means always
on), how it behaves without data, and a renderer that draws the body below
the header band the composer has already emitted.
"""

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional

import pandas as pd

from . import config
from .canvas import LayoutContext
from .charts import (
    TRACK_OFFSET,
    VALUE_LABEL_ROOM,
    BarGeometry,
    ChartDatum,
    bar_chart_height,
    draw_bar_chart,
    draw_donut,
)
from .context import FilterSelection
from .formatting import (
    clean_text,
    format_count,
    format_currency,
    format_date,
    format_percent,
    to_number,
    truncate,
    wrap_text,
)
from .metrics import (
    PerformanceKpis,
    SeriesPoint,
    bids_frame,
    department_summary,
    dept_value_series,
    org_affinity_series,
    ranked_counts,
    rivalry_scorecard,
)
from .payload import BidRecord, ReportInput
from .primitives import (
    bullets,
    draw_card,
    empty_message,
    key_value_lines,
    kpi_grid,
    line_height,
    paragraph,
    stat_strip,
    text_card,
)
from .tables import ColumnSpec, TableStyle, render_table


class EmptyBehavior(enum.Enum):
    MESSAGE = "message"
    SKIP = "skip"


@dataclass(frozen=True)
class SectionData:
    """Everything a section renderer may read. Built once per invocation."""

    report: ReportInput
    kpis: PerformanceKpis
    selection: FilterSelection
    now: datetime

    @property
    def mbw(self):
        return self.report.data.missed_but_winnable

    @property
    def ai(self):
        return self.report.data.missed_but_winnable.ai

    @property
    def params(self):
        return self.report.meta.params_used


Renderer = Callable[[LayoutContext, SectionData], None]


@dataclass(frozen=True)
class SectionSpec:
    id: str
    title: str
    renderer: Renderer
    filter_id: Optional[str] = None
    has_data: Optional[Callable[[SectionData], bool]] = None
    empty_behavior: EmptyBehavior = EmptyBehavior.MESSAGE
    empty_text: str = "No data available for this section."
    accent: str = "deep_blue"
    show_header: bool = True
    force_new_page: bool = False
    reserve: float = 25.0


# ---- shared pieces
def _share_color(ctx: LayoutContext, pct: float):
    if pct > 40:
        return ctx.color("success_green")
    if pct > 20:
        return ctx.color("bright_blue")
    return ctx.color("warning_orange")


def _chart_card(
    ctx: LayoutContext,
    data: List[ChartDatum],
    value_label: Optional[Callable[[ChartDatum], str]],
) -> List[BarGeometry]:
    """Bar chart inside a card; value labels stay within the card's inner edge."""
    height = bar_chart_height(len(data)) + 10
    ctx.ensure_space(height)
    draw_card(ctx.pdf, ctx.margin, ctx.y, ctx.content_width, height)
    inner_right = ctx.margin + ctx.content_width - 4
    track = inner_right - (ctx.margin + 10 + TRACK_OFFSET) - VALUE_LABEL_ROOM
    bars = draw_bar_chart(
        ctx.pdf, ctx.margin + 10, ctx.y + 8, track, data, value_label, max_x=inner_right
    )
    ctx.advance(height + ctx.theme.section_gap)
    return bars


def _pct_label(datum: ChartDatum) -> str:
    return format_percent(datum.percentage or 0.0)


def _count_label(datum: ChartDatum) -> str:
    return format_count(datum.value)


def _table_style(ctx: LayoutContext, fill: str, stripe: str) -> TableStyle:
    return TableStyle(
        header_fill=ctx.color(fill),
        stripe_fill=ctx.color(stripe),
        header_text=ctx.color("white"),
        body_text=ctx.color("dark_gray"),
    )


def _finish_table(ctx: LayoutContext, final_y: float) -> None:
    ctx.y = final_y + ctx.theme.section_gap


def _subheading(ctx: LayoutContext, text: str, color=None) -> None:
    lh = line_height(10)
    ctx.ensure_space(lh + 10)
    ctx.pdf.use_font(10, "B", color or ctx.color("dark_gray"))
    ctx.pdf.place_text(ctx.margin, ctx.y + lh * 0.75, truncate(text, 90))
    ctx.advance(lh + 1)


def _field(row: Dict, *keys: str):
    for key in keys:
        value = row.get(key)
        if value not in (None, ""):
            return value
    return None


# ---- cover
def render_cover(ctx: LayoutContext, sd: SectionData) -> None:
    pdf = ctx.pdf
    w = ctx.page_width
    margin = ctx.margin
    params = sd.params

    pdf.fill_rect(0, 0, w, 80, ctx.color("deep_blue"))
    pdf.fill_rect(0, 0, w, 40, ctx.color("deep_blue_dark"))
    pdf.fill_circle(w + 10, 10, 50, ctx.color("deep_blue_dark"))
    pdf.fill_circle(-20, 60, 40, ctx.color("deep_blue_dark"))

    pdf.set_draw_color(*ctx.color("bright_blue"))
    pdf.set_line_width(3)
    pdf.line(0, 5, w, 5)
    pdf.set_line_width(1)
    pdf.line(0, 7, w, 7)

    pdf.use_font(8, "", ctx.color("light_blue"))
    pdf.place_text(w / 2, 18, config.COVER_KICKER, align="C")
    pdf.use_font(14, "B", ctx.color("white"))
    pdf.place_text(w / 2, 28, config.COVER_TITLE, align="C")

    box_w = w - 60
    pdf.fill_rect((w - box_w) / 2, 40, box_w, 18, ctx.color("deep_blue_dark"), 3)
    pdf.stroke_rect((w - box_w) / 2, 40, box_w, 18, ctx.color("bright_blue"), 3, width=0.5)
    pdf.use_font(14, "B", ctx.color("bright_blue"))
    pdf.place_text(w / 2, 52, truncate(sd.report.seller_name or "Unnamed Seller", 48), align="C")

    top = 90
    draw_card(pdf, margin, top, ctx.content_width, 45)
    value_w = ctx.content_width - 80
    details = [
        ("REPORT GENERATED:", format_date(sd.report.meta.report_generated_at)),
        ("ANALYSIS PERIOD:", f"{format_count(params.days)} days"),
        ("DEPARTMENT:", params.department or "All departments"),
    ]
    for i, (label, value) in enumerate(details):
        pdf.use_font(8, "B", ctx.color("medium_gray"))
        pdf.place_text(margin + 10, top + 10 + i * 7, label)
        pdf.use_font(8, "", ctx.color("dark_gray"))
        first = wrap_text(value, value_w, pdf.get_string_width)
        pdf.place_text(margin + 65, top + 10 + i * 7, first[0] if first else "-")

    pdf.use_font(8, "B", ctx.color("medium_gray"))
    pdf.place_text(margin + 10, top + 31, "ITEMS:")
    pdf.use_font(8, "", ctx.color("dark_gray"))
    items = wrap_text(params.offered_item or "Various items", value_w, pdf.get_string_width)[:2]
    for i, line in enumerate(items):
        pdf.place_text(margin + 65, top + 31 + i * 4, line)

    ctx.y = 150


# ---- performance overview
def render_performance(ctx: LayoutContext, sd: SectionData) -> None:
    k = sd.kpis
    kpi_grid(
        ctx,
        [
            (format_percent(k.win_rate), "Win Rate", ctx.color("success_green"), ctx.color("tint_green"), 24),
            (str(k.total_bids), "Total Bids", ctx.color("bright_blue"), ctx.color("light_blue"), 24),
            (str(k.wins), "Successful Wins", ctx.color("purple"), ctx.color("tint_purple"), 24),
            (format_currency(k.total_value), "Total Value", ctx.color("warning_orange"), ctx.color("tint_amber"), 16),
        ],
    )

    card_h = 65.0
    ctx.ensure_space(card_h + 5)
    pdf = ctx.pdf
    top = ctx.y
    draw_card(pdf, ctx.margin, top, ctx.content_width, card_h)
    pdf.use_font(10, "B", ctx.color("dark_gray"))
    pdf.place_text(ctx.margin + 10, top + 10, "Win/Loss Distribution")

    cx, cy = ctx.margin + 35, top + 38
    slices = draw_donut(
        pdf,
        cx,
        cy,
        20,
        12,
        [
            ChartDatum("Wins", k.wins, ctx.color("success_green")),
            ChartDatum("Losses", k.losses, ctx.color("error_red")),
        ],
    )
    if slices:
        pdf.use_font(14, "B", ctx.color("dark_gray"))
        pdf.place_text(cx, cy + 3, format_percent(k.win_rate), align="C")
        pdf.use_font(7, "", ctx.color("medium_gray"))
        pdf.place_text(cx, cy + 8, "Win Rate", align="C")

    lx, ly = ctx.margin + 70, top + 25
    pdf.fill_rect(lx, ly, 4, 4, ctx.color("success_green"), 1)
    pdf.use_font(9, "", ctx.color("dark_gray"))
    pdf.place_text(lx + 8, ly + 3, f"Wins: {k.wins} ({format_percent(k.win_rate)})")
    ly += 8
    pdf.fill_rect(lx, ly, 4, 4, ctx.color("error_red"), 1)
    pdf.place_text(lx + 8, ly + 3, f"Losses: {k.losses} ({format_percent(k.loss_rate)})")

    ly += 12
    for label, value in (
        ("Avg Order Value:", format_currency(k.avg_value)),
        ("Avg Bids/Day:", f"{k.avg_bids_per_day:.2f}"),
    ):
        pdf.use_font(8, "B", ctx.color("medium_gray"))
        pdf.place_text(lx, ly, label)
        pdf.use_font(8, "")
        pdf.place_text(lx + 35, ly, value)
        ly += 6

    ctx.advance(card_h + ctx.theme.section_gap)


# ---- AI narrative
def render_ai_overview(ctx: LayoutContext, sd: SectionData) -> None:
    text_card(ctx, "Strategic Summary", sd.ai.strategy_summary, ctx.color("purple"))
    if sd.ai.guidance.note:
        paragraph(ctx, sd.ai.guidance.note, size=8, style="I", color=ctx.color("medium_gray"))


def render_org_affinity(ctx: LayoutContext, sd: SectionData) -> None:
    points = org_affinity_series(
        sd.ai.signals.org_affinity, sd.mbw.recent_wins, sd.kpis.total_bids, config.MAX_AFFINITY_ROWS
    )
    data = [ChartDatum(p.label, p.value, _share_color(ctx, p.percentage), p.percentage) for p in points]
    _chart_card(ctx, data, _pct_label)


def render_dept_affinity(ctx: LayoutContext, sd: SectionData) -> None:
    points = dept_value_series(
        sd.ai.signals.dept_affinity, sd.mbw.recent_wins, sd.kpis.total_value, config.MAX_AFFINITY_ROWS
    )
    data = [ChartDatum(p.label, p.value, _share_color(ctx, p.percentage), p.percentage) for p in points]
    _chart_card(ctx, data, _pct_label)


# ---- own bids
def _win_row(index: int, win: BidRecord) -> List[str]:
    return [
        str(index + 1),
        truncate(win.bid_number or "N/A", 18),
        truncate(win.org or "N/A", 25),
        truncate(win.dept or "N/A", 20),
        format_count(win.quantity),
        format_currency(win.total_price),
        format_date(win.date),
    ]


def render_bids_summary(ctx: LayoutContext, sd: SectionData) -> None:
    k = sd.kpis
    green = ctx.color("success_green")
    stat_strip(
        ctx,
        [
            ("Total Wins", str(k.wins), green),
            ("Total Value", format_currency(k.total_value), green),
            ("Average", format_currency(k.avg_value), green),
        ],
        height=20,
    )
    columns = [
        ColumnSpec("#", 8, "C", bold=True),
        ColumnSpec("Bid Number", 30, font_size=6),
        ColumnSpec("Organization", 42),
        ColumnSpec("Department", 35),
        ColumnSpec("Qty", 12, "R"),
        ColumnSpec("Value", 22, "R", color=green, bold=True),
        ColumnSpec("Date", 20, "C"),
    ]
    rows = [_win_row(i, w) for i, w in enumerate(sd.mbw.recent_wins[: config.MAX_WIN_ROWS])]
    result = render_table(ctx, columns, rows, _table_style(ctx, "deep_blue", "light_blue"))
    _finish_table(ctx, result.final_y)

    summary = department_summary(sd.mbw.recent_wins)
    if summary:
        _subheading(ctx, "Department-wise Summary")
        dept_rows = [
            [
                truncate(r["dept"], 45),
                str(int(r["wins"])),
                format_currency(r["value"]),
                format_percent((r["value"] / k.total_value) * 100 if k.total_value > 0 else 0.0),
            ]
            for r in summary
        ]
        result = render_table(
            ctx,
            [
                ColumnSpec("Department", 85),
                ColumnSpec("Wins", 20, "R"),
                ColumnSpec("Value", 35, "R", color=green, bold=True),
                ColumnSpec("Share", 30, "R"),
            ],
            dept_rows,
            _table_style(ctx, "success_green", "tint_green"),
        )
        _finish_table(ctx, result.final_y)


# ---- market
def _market_has_data(sd: SectionData) -> bool:
    sig = sd.ai.signals
    return bool(sd.report.data.price_band or sd.mbw.market_wins or sig.quantity_ranges or sig.price_ranges)


def render_market_overview(ctx: LayoutContext, sd: SectionData) -> None:
    band = sd.report.data.price_band
    if band is not None:
        kpi_grid(
            ctx,
            [
                (format_currency(band.highest), "Highest Price", ctx.color("error_red"), ctx.color("tint_red"), 14),
                (format_currency(band.average), "Average Price", ctx.color("bright_blue"), ctx.color("light_blue"), 14),
                (format_currency(band.lowest), "Lowest Price", ctx.color("success_green"), ctx.color("tint_green"), 14),
            ],
            columns=3,
            gap=6,
        )
    market = bids_frame(sd.mbw.market_wins)
    if not market.empty:
        sellers = market["seller_name"].map(clean_text)
        stat_strip(
            ctx,
            [
                ("Market Wins", str(len(market)), ctx.color("bright_blue")),
                ("Market Value", format_currency(market["total_price"].sum()), ctx.color("bright_blue")),
                ("Sellers", str(sellers[sellers != ""].nunique()), ctx.color("bright_blue")),
            ],
        )
    sig = sd.ai.signals
    rows = []
    if sig.quantity_ranges:
        rows.append(("Quantity ranges", "; ".join(sig.quantity_ranges)))
    if sig.price_ranges:
        rows.append(("Price ranges", "; ".join(sig.price_ranges)))
    if rows:
        key_value_lines(ctx, rows)
    ctx.advance(ctx.theme.section_gap / 2)


def render_top_performer(ctx: LayoutContext, sd: SectionData) -> None:
    rows = sd.report.data.top_sellers_by_dept[: config.MAX_CHART_ROWS]
    lead = rows[0]
    lead_name = clean_text(_field(lead, "seller_name", "seller", "name")) or "N/A"
    lead_dept = clean_text(_field(lead, "department", "dept")) or sd.params.department or "N/A"
    lead_wins = format_count(_field(lead, "total_wins", "count", "wins"))
    paragraph(ctx, f"Leading seller: {lead_name} in {lead_dept} with {lead_wins} wins.", size=9, style="B")

    body = [
        [
            str(i + 1),
            truncate(_field(r, "seller_name", "seller", "name") or "N/A", 40),
            truncate(_field(r, "department", "dept") or "N/A", 35),
            format_count(_field(r, "total_wins", "count", "wins")),
            format_currency(_field(r, "total_value", "value")),
        ]
        for i, r in enumerate(rows)
    ]
    result = render_table(
        ctx,
        [
            ColumnSpec("#", 8, "C", bold=True),
            ColumnSpec("Seller", 62),
            ColumnSpec("Department", 52),
            ColumnSpec("Wins", 18, "R"),
            ColumnSpec("Value", 30, "R", color=ctx.color("deep_blue"), bold=True),
        ],
        body,
        _table_style(ctx, "deep_blue", "light_blue"),
    )
    _finish_table(ctx, result.final_y)


def _evidence_row(win: BidRecord) -> List[str]:
    return [
        truncate(win.bid_number or "N/A", 20),
        truncate(win.org or "N/A", 28),
        truncate(win.seller_name or "N/A", 24),
        format_count(win.quantity),
        format_currency(win.total_price),
        format_date(win.date),
    ]


def render_missed_tenders(ctx: LayoutContext, sd: SectionData) -> None:
    columns = [
        ColumnSpec("Bid Number", 32, font_size=6),
        ColumnSpec("Organization", 45),
        ColumnSpec("Winning Seller", 38),
        ColumnSpec("Qty", 12, "R"),
        ColumnSpec("Value", 23, "R", color=ctx.color("warning_orange"), bold=True),
        ColumnSpec("Date", 20, "C"),
    ]
    for i, win in enumerate(sd.ai.likely_wins[: config.MAX_LIKELY_WINS]):
        _subheading(ctx, f"{i + 1}. {clean_text(win.offered_item) or 'Unnamed item'}", ctx.color("warning_orange"))
        if win.reason:
            paragraph(ctx, win.reason, size=8, indent=4)
        evidence = win.matching_market_wins[: config.MAX_EVIDENCE_ROWS]
        if not evidence:
            empty_message(ctx, "No matching market wins recorded.")
            continue
        result = render_table(
            ctx, columns, [_evidence_row(w) for w in evidence], _table_style(ctx, "warning_orange", "tint_amber")
        )
        ctx.y = result.final_y + 6
    ctx.advance(ctx.theme.section_gap / 2)


# ---- buyers and rivals
def _buyer_has_data(sd: SectionData) -> bool:
    sig = sd.ai.signals
    return bool(sig.ministry_affinity or sig.org_affinity or sig.dept_affinity or sd.ai.guidance.expansion_areas)


def render_buyer_insights(ctx: LayoutContext, sd: SectionData) -> None:
    sig = sd.ai.signals
    rows = []
    limit = config.MAX_AFFINITY_ROWS
    for kind, items in (
        ("Ministry", sig.ministry_affinity),
        ("Organization", sig.org_affinity),
        ("Department", sig.dept_affinity),
    ):
        rows.extend([kind, truncate(a.name, 40), truncate(a.signal or "-", 60)] for a in items[:limit])
    if rows:
        result = render_table(
            ctx,
            [
                ColumnSpec("Type", 25, bold=True),
                ColumnSpec("Buyer", 60),
                ColumnSpec("Engagement Signal", 85),
            ],
            rows,
            _table_style(ctx, "purple", "tint_purple"),
        )
        _finish_table(ctx, result.final_y)
    if sd.ai.guidance.expansion_areas:
        _subheading(ctx, "Expansion Areas", ctx.color("purple"))
        bullets(ctx, sd.ai.guidance.expansion_areas, size=8)


def render_rivalry(ctx: LayoutContext, sd: SectionData) -> None:
    rivals = rivalry_scorecard(sd.mbw.market_wins, config.MAX_RIVAL_ROWS)
    red = ctx.color("error_red")
    stat_strip(
        ctx,
        [
            ("Competitors", str(len(rivals)), red),
            ("Market Wins", str(sd.kpis.losses), red),
            ("Your Win Rate", format_percent(sd.kpis.win_rate), ctx.color("success_green")),
        ],
    )
    body = [
        [str(i + 1), truncate(r.seller, 45), str(r.wins), format_currency(r.value), format_percent(r.share)]
        for i, r in enumerate(rivals)
    ]
    result = render_table(
        ctx,
        [
            ColumnSpec("#", 8, "C", bold=True),
            ColumnSpec("Competitor", 82),
            ColumnSpec("Wins", 20, "R"),
            ColumnSpec("Value", 32, "R", color=red, bold=True),
            ColumnSpec("Share", 28, "R"),
        ],
        body,
        _table_style(ctx, "error_red", "tint_red"),
    )
    _finish_table(ctx, result.final_y)


# ---- recommendations
def render_recommendations(ctx: LayoutContext, sd: SectionData) -> None:
    pdf = ctx.pdf
    steps = sd.ai.guidance.next_steps[: config.MAX_RECOMMENDATIONS]
    gap = 12.0
    card_w = (ctx.content_width - gap) / 2
    card_h = 45.0
    tints = [ctx.color("light_blue"), ctx.color("tint_green"), ctx.color("tint_amber")]
    accents = [ctx.color("bright_blue"), ctx.color("success_green"), ctx.color("warning_orange")]

    for index, step in enumerate(steps):
        col = index % 2
        if col == 0:
            ctx.ensure_space(card_h + 8)
        x, y = ctx.margin + col * (card_w + gap), ctx.y
        tint, accent = tints[index % 3], accents[index % 3]

        pdf.fill_rect(x, y, card_w, card_h, tint, ctx.theme.card_radius)
        pdf.fill_rect(x, y, 3, card_h, accent)
        pdf.stroke_rect(x, y, card_w, card_h, ctx.color("border_gray"), ctx.theme.card_radius)
        pdf.fill_circle(x + 12, y + 10, 5, accent)
        pdf.use_font(10, "B", ctx.color("white"))
        pdf.place_text(x + 12, y + 12, str(index + 1), align="C")
        pdf.use_font(9, "B", ctx.color("dark_gray"))
        pdf.place_text(x + 20, y + 10, f"Action {index + 1}")
        pdf.use_font(7, "", ctx.color("medium_gray"))
        for i, line in enumerate(wrap_text(step, card_w - 25, pdf.get_string_width)[:4]):
            pdf.place_text(x + 10, y + 18 + i * 4, line)

        if col == 1 or index == len(steps) - 1:
            ctx.advance(card_h + 8)
    ctx.advance(ctx.theme.section_gap - 8)


# ---- opportunities and market distribution
def _opportunity_status(raw_end, now: datetime) -> str:
    end = pd.to_datetime(raw_end, errors="coerce", utc=True) if raw_end else pd.NaT
    if pd.isna(end):
        return "Unknown"
    current = pd.Timestamp(now)
    current = current.tz_localize("UTC") if current.tzinfo is None else current.tz_convert("UTC")
    return "Closed" if end < current else "Open"


def render_low_competition(ctx: LayoutContext, sd: SectionData) -> None:
    opportunities = sd.report.data.low_competition
    single = sum(1 for o in opportunities if to_number(o.get("seller_count")) == 1)
    stat_strip(
        ctx,
        [
            ("Total Opportunities", str(len(opportunities)), ctx.color("amber")),
            ("Single Competitor", str(single), ctx.color("success_green")),
        ],
    )
    rows = []
    for i, opp in enumerate(opportunities[: config.MAX_OPPORTUNITY_ROWS]):
        end = opp.get("bid_end_ts")
        rows.append(
            [
                str(i + 1),
                truncate(opp.get("bid_number") or "N/A", 20),
                truncate(opp.get("organisation") or opp.get("org") or "N/A", 30),
                format_count(opp.get("quantity")),
                clean_text(opp.get("seller_count")) or "0",
                format_date(end),
                _opportunity_status(end, sd.now),
            ]
        )
    result = render_table(
        ctx,
        [
            ColumnSpec("#", 8, "C", bold=True),
            ColumnSpec("Bid Number", 38, font_size=6),
            ColumnSpec("Organization", 55),
            ColumnSpec("Qty", 12, "R"),
            ColumnSpec("Rivals", 15, "C", color=ctx.color("success_green"), bold=True),
            ColumnSpec("End Date", 22, "C"),
            ColumnSpec("Status", 19, "C"),
        ],
        rows,
        _table_style(ctx, "amber", "tint_amber"),
    )
    _finish_table(ctx, result.final_y)


def _series_chart(ctx: LayoutContext, points: List[SeriesPoint], color: str, value_label) -> None:
    data = [ChartDatum(p.label, p.value, ctx.color(color), p.percentage) for p in points]
    _chart_card(ctx, data, value_label)


# Each series builder backs both the renderer and its has_data check.
def _category_points(sd: SectionData) -> List[SeriesPoint]:
    return ranked_counts(sd.report.data.category_listing, "category", "count", config.MAX_CHART_ROWS)


def _state_points(sd: SectionData) -> List[SeriesPoint]:
    return ranked_counts(sd.report.data.top_states, "state_name", "total_tenders", config.MAX_CHART_ROWS)


def _department_points(sd: SectionData) -> List[SeriesPoint]:
    return ranked_counts(sd.report.data.all_departments, "department", "total_tenders", config.MAX_CHART_ROWS)


def render_categories(ctx: LayoutContext, sd: SectionData) -> None:
    _series_chart(ctx, _category_points(sd), "bright_blue", _pct_label)


def render_states(ctx: LayoutContext, sd: SectionData) -> None:
    _series_chart(ctx, _state_points(sd), "success_green", _count_label)


def render_departments(ctx: LayoutContext, sd: SectionData) -> None:
    _series_chart(ctx, _department_points(sd), "deep_blue", _count_label)


# ---- closing
def render_disclaimer(ctx: LayoutContext, sd: SectionData) -> None:
    pdf = ctx.pdf
    height = 50.0
    ctx.ensure_space(height + 15)
    x, y, w = ctx.margin, ctx.y, ctx.content_width
    pdf.fill_rect(x, y, w, height, ctx.color("tint_red"), ctx.theme.card_radius)
    pdf.stroke_rect(x, y, w, height, ctx.color("error_red"), ctx.theme.card_radius, width=0.5)
    pdf.use_font(10, "B", ctx.color("error_red"))
    pdf.place_text(x + 10, y + 10, config.DISCLAIMER_TITLE)
    pdf.use_font(7, "", ctx.color("dark_gray"))
    for i, line in enumerate(wrap_text(config.DISCLAIMER_TEXT, w - 25, pdf.get_string_width)):
        pdf.place_text(x + 10, y + 18 + i * 3.5, line)
    ctx.advance(height + 10)

    pdf.use_font(7, "", ctx.color("medium_gray"))
    pdf.place_text(ctx.page_width / 2, ctx.y, config.COPYRIGHT_LINE, align="C")
    pdf.place_text(ctx.page_width / 2, ctx.y + 5, config.SUPPORT_LINE, align="C")
    ctx.advance(10)


SECTION_REGISTRY: List[SectionSpec] = [
    SectionSpec("cover", "Cover", render_cover, show_header=False),
    SectionSpec("performanceOverview", "Performance Overview", render_performance),
    SectionSpec(
        "aiInsights",
        "AI-Powered Strategic Insights",
        render_ai_overview,
        has_data=lambda sd: bool(clean_text(sd.ai.strategy_summary)),
        empty_text="No AI strategy summary was produced for this report.",
        accent="purple",
        force_new_page=True,
    ),
    SectionSpec(
        "orgAffinity",
        "Organization Affinity Analysis",
        render_org_affinity,
        has_data=lambda sd: bool(sd.ai.signals.org_affinity),
        empty_text="No organization affinity signals available.",
        accent="bright_blue",
        reserve=80,
    ),
    SectionSpec(
        "deptAffinity",
        "Department Performance",
        render_dept_affinity,
        has_data=lambda sd: bool(sd.ai.signals.dept_affinity),
        empty_text="No department affinity signals available.",
        accent="success_green",
        reserve=80,
    ),
    SectionSpec(
        "bidsSummary",
        "Recent Successful Bids",
        render_bids_summary,
        filter_id="bidsSummary",
        has_data=lambda sd: bool(sd.mbw.recent_wins),
        empty_behavior=EmptyBehavior.SKIP,
        accent="success_green",
        reserve=100,
    ),
    SectionSpec(
        "marketOverview",
        "Overall Market Overview",
        render_market_overview,
        filter_id="marketOverview",
        has_data=_market_has_data,
        empty_text="No market pricing data available.",
        accent="bright_blue",
        reserve=80,
    ),
    SectionSpec(
        "topPerformer",
        "Top Performer Department",
        render_top_performer,
        filter_id="topPerformer",
        has_data=lambda sd: bool(sd.report.data.top_sellers_by_dept),
        empty_text="No top performer data available.",
        accent="deep_blue",
        reserve=80,
    ),
    SectionSpec(
        "missedTenders",
        "Missed-but-Winnable Tenders",
        render_missed_tenders,
        filter_id="missedTenders",
        has_data=lambda sd: bool(sd.ai.likely_wins),
        empty_text="No missed-but-winnable tenders identified.",
        accent="warning_orange",
        reserve=100,
    ),
    SectionSpec(
        "buyerInsights",
        "Buyer/Department Insights",
        render_buyer_insights,
        filter_id="buyerInsights",
        has_data=_buyer_has_data,
        empty_text="No buyer insights available.",
        accent="purple",
        reserve=80,
    ),
    SectionSpec(
        "rivalryScore",
        "Rivalry Scorecard",
        render_rivalry,
        filter_id="rivalryScore",
        has_data=lambda sd: bool(sd.mbw.market_wins),
        empty_text="No competing market wins recorded.",
        accent="error_red",
        reserve=80,
    ),
    SectionSpec(
        "recommendations",
        "Strategic Recommendations",
        render_recommendations,
        has_data=lambda sd: bool(sd.ai.guidance.next_steps),
        empty_behavior=EmptyBehavior.SKIP,
        accent="warning_orange",
        reserve=100,
    ),
    SectionSpec(
        "lowCompetition",
        "Low Competition Opportunities",
        render_low_competition,
        filter_id="lowCompetition",
        has_data=lambda sd: bool(sd.report.data.low_competition),
        empty_text="No low-competition opportunities found.",
        accent="amber",
        reserve=100,
    ),
    SectionSpec(
        "categoryAnalysis",
        "Category Distribution",
        render_categories,
        filter_id="categoryAnalysis",
        has_data=lambda sd: bool(_category_points(sd)),
        empty_text="No category data available.",
        accent="purple",
        reserve=100,
    ),
    SectionSpec(
        "statesAnalysis",
        "Top Performing States",
        render_states,
        filter_id="statesAnalysis",
        has_data=lambda sd: bool(_state_points(sd)),
        empty_behavior=EmptyBehavior.SKIP,
        accent="success_green",
        reserve=100,
    ),
    SectionSpec(
        "departmentsAnalysis",
        "Top Departments by Tender Volume",
        render_departments,
        filter_id="departmentsAnalysis",
        has_data=lambda sd: bool(_department_points(sd)),
        empty_behavior=EmptyBehavior.SKIP,
        accent="deep_blue",
        reserve=100,
    ),
    SectionSpec("disclaimer", "Disclaimer", render_disclaimer, show_header=False),
]

SECTIONS_BY_ID: Dict[str, SectionSpec] = {s.id: s for s in SECTION_REGISTRY}
