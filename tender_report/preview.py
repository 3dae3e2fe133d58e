"""On-screen previews of the headline charts, mirroring what the PDF draws."""

from typing import Sequence

import plotly.graph_objects as go

from .metrics import PerformanceKpis, SeriesPoint
from .report_presets import RGB, Theme


def _css(color: RGB) -> str:
    return "rgb({}, {}, {})".format(*color)


def apply_layout(fig: go.Figure, height: int = 320, showlegend: bool = False) -> go.Figure:
    """Centralize layout tweaks so every preview chart looks the same."""
    fig.update_layout(
        height=height,
        margin=dict(l=24, r=24, t=24, b=24),
        showlegend=showlegend,
        template="plotly_dark",
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color="rgba(235,245,255,0.9)"),
    )
    return fig


def win_loss_donut(kpis: PerformanceKpis, theme: Theme) -> go.Figure:
    fig = go.Figure(
        go.Pie(
            labels=["Wins", "Losses"],
            values=[kpis.wins, kpis.losses],
            hole=0.6,
            sort=False,
            direction="clockwise",
            rotation=0,
            marker=dict(colors=[_css(theme.color("success_green")), _css(theme.color("error_red"))]),
            textinfo="label+percent",
        )
    )
    fig.add_annotation(text=f"{kpis.win_rate:.1f}%", showarrow=False, font=dict(size=22))
    return apply_layout(fig, height=300, showlegend=True)


def series_bars(points: Sequence[SeriesPoint], color: RGB, percent: bool = True) -> go.Figure:
    """Horizontal bars, largest at the top, labelled with share or raw value."""
    labels = [p.label for p in points][::-1]
    values = [p.value for p in points][::-1]
    text = [f"{p.percentage:.1f}%" if percent else f"{p.value:,.0f}" for p in points][::-1]
    fig = go.Figure(go.Bar(x=values, y=labels, orientation="h", text=text, marker=dict(color=_css(color))))
    fig.update_layout(xaxis=dict(visible=False))
    return apply_layout(fig, height=max(160, 40 * len(points) + 60))
