"""
Aggregates derived from the raw win lists.

Nothing here trusts a precomputed figure from the payload: win rate, totals
and averages are always recomputed from ``recentWins`` and ``marketWins``.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Sequence

import pandas as pd

from .formatting import clean_text, to_number
from .payload import Affinity, BidRecord, MissedButWinnable

_BID_COLUMNS = [
    "bid_number",
    "org",
    "dept",
    "ministry",
    "seller_name",
    "offered_item",
    "quantity",
    "total_price",
    "ended_at",
    "created_at",
]


@dataclass(frozen=True)
class PerformanceKpis:
    total_bids: int
    wins: int
    losses: int
    win_rate: float
    loss_rate: float
    total_value: float
    avg_value: float
    avg_bids_per_day: float


@dataclass(frozen=True)
class SeriesPoint:
    """One labelled value for a chart, with its share of the series when known."""

    label: str
    value: float
    percentage: float = 0.0


@dataclass(frozen=True)
class RivalStat:
    seller: str
    wins: int
    value: float
    share: float


def bids_frame(records: Sequence[BidRecord]) -> pd.DataFrame:
    """Flatten bid records into a DataFrame with numeric columns coerced."""
    if not records:
        return pd.DataFrame(columns=_BID_COLUMNS)
    df = pd.DataFrame([asdict(r) for r in records], columns=_BID_COLUMNS)
    for col in ("quantity", "total_price"):
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0.0)
    return df


def derive_kpis(mbw: MissedButWinnable, days: Any) -> PerformanceKpis:
    """
    Headline KPIs:
    win rate = wins / (wins + market wins), total value = sum of own win prices,
    average value = total / wins (0 without wins), bids per day = bids / days.
    """
    wins = len(mbw.recent_wins)
    losses = len(mbw.market_wins)
    total_bids = wins + losses

    win_rate = (wins / total_bids) * 100 if total_bids > 0 else 0.0
    loss_rate = 100.0 - win_rate if total_bids > 0 else 0.0

    total_value = float(bids_frame(mbw.recent_wins)["total_price"].sum()) if wins else 0.0
    avg_value = float(round(total_value / wins)) if wins else 0.0

    window = to_number(days)
    avg_bids_per_day = total_bids / window if window > 0 else 0.0

    return PerformanceKpis(
        total_bids=total_bids,
        wins=wins,
        losses=losses,
        win_rate=win_rate,
        loss_rate=loss_rate,
        total_value=total_value,
        avg_value=avg_value,
        avg_bids_per_day=avg_bids_per_day,
    )


def org_affinity_series(
    affinities: Iterable[Affinity], wins: Sequence[BidRecord], total_bids: int, limit: int
) -> List[SeriesPoint]:
    """Own wins per organization, as a share of all bids in the window."""
    df = bids_frame(wins)
    counts = df.groupby("org").size() if not df.empty else pd.Series(dtype=int)
    out = []
    for aff in list(affinities)[:limit]:
        win_count = int(counts.get(aff.name, 0))
        pct = (win_count / total_bids) * 100 if total_bids > 0 else 0.0
        out.append(SeriesPoint(label=aff.name, value=win_count, percentage=pct))
    return out


def dept_value_series(
    affinities: Iterable[Affinity], wins: Sequence[BidRecord], total_value: float, limit: int
) -> List[SeriesPoint]:
    """Own win value per department, as a share of total won value."""
    df = bids_frame(wins)
    values = df.groupby("dept")["total_price"].sum() if not df.empty else pd.Series(dtype=float)
    out = []
    for aff in list(affinities)[:limit]:
        dept_value = float(values.get(aff.name, 0.0))
        pct = (dept_value / total_value) * 100 if total_value > 0 else 0.0
        out.append(SeriesPoint(label=aff.name, value=dept_value, percentage=pct))
    return out


def department_summary(wins: Sequence[BidRecord]) -> List[Dict[str, Any]]:
    """Own wins rolled up per department, largest value first."""
    df = bids_frame(wins)
    if df.empty:
        return []
    df["dept"] = df["dept"].map(clean_text).replace("", "Unspecified")
    grouped = (
        df.groupby("dept")
        .agg(wins=("bid_number", "size"), value=("total_price", "sum"))
        .reset_index()
        .sort_values(["value", "wins"], ascending=False, kind="mergesort")
    )
    return grouped.to_dict("records")


def rivalry_scorecard(market_wins: Sequence[BidRecord], limit: int) -> List[RivalStat]:
    """Competing sellers ranked by market wins, then by awarded value."""
    df = bids_frame(market_wins)
    if df.empty:
        return []
    df["seller_name"] = df["seller_name"].map(clean_text).replace("", "Unknown")
    grouped = (
        df.groupby("seller_name")
        .agg(wins=("bid_number", "size"), value=("total_price", "sum"))
        .reset_index()
        .sort_values(["wins", "value"], ascending=False, kind="mergesort")
        .head(limit)
    )
    total = len(df)
    return [
        RivalStat(
            seller=row.seller_name,
            wins=int(row.wins),
            value=float(row.value),
            share=(row.wins / total) * 100,
        )
        for row in grouped.itertuples(index=False)
    ]


def ranked_counts(rows: Iterable[Dict[str, Any]], label_key: str, value_key: str, limit: int) -> List[SeriesPoint]:
    """
    Generic (label, count) series from a ranked payload list, with each
    entry's share of the visible total. Order is preserved.
    """
    points = []
    for row in list(rows)[:limit]:
        label = clean_text(row.get(label_key))
        if not label:
            continue
        points.append((label, to_number(row.get(value_key))))
    total = sum(v for _, v in points)
    return [
        SeriesPoint(label=label, value=value, percentage=(value / total) * 100 if total > 0 else 0.0)
        for label, value in points
    ]
