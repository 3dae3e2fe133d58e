"""
Typed view of the analytics payload handed to the report engine.

Parsing is defensive: every optional list defaults to empty, wrong container
types collapse to their empty default, and numbers go through ``to_number``.
Only a payload that is not a JSON object at all is rejected.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .errors import ReportInputError
from .formatting import clean_text, to_number

logger = logging.getLogger(__name__)


def _obj(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _seq(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, dict) and isinstance(value.get("results"), (list, tuple)):
        # Several facets arrive wrapped as {"results": [...]}.
        return list(value["results"])
    return []


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _strings(value: Any) -> List[str]:
    return [s for s in (clean_text(v) for v in _seq(value)) if s]


@dataclass(frozen=True)
class ParamsUsed:
    seller_name: str = ""
    department: str = ""
    offered_item: str = ""
    days: float = 0.0
    limit: int = 0
    email: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "ParamsUsed":
        raw = _obj(raw)
        return cls(
            seller_name=_text(raw.get("sellerName")),
            department=_text(raw.get("department")),
            offered_item=_text(raw.get("offeredItem")),
            days=to_number(raw.get("days")),
            limit=int(to_number(raw.get("limit"))),
            email=raw.get("email") or None,
        )


@dataclass(frozen=True)
class ReportMeta:
    report_generated_at: str = ""
    params_used: ParamsUsed = field(default_factory=ParamsUsed)

    @classmethod
    def from_dict(cls, raw: Any) -> "ReportMeta":
        raw = _obj(raw)
        return cls(
            report_generated_at=_text(raw.get("report_generated_at")),
            params_used=ParamsUsed.from_dict(raw.get("params_used")),
        )


@dataclass(frozen=True)
class BidRecord:
    """One awarded bid, either the seller's own or a market-wide one."""

    bid_number: str = ""
    org: str = ""
    dept: str = ""
    ministry: str = ""
    seller_name: str = ""
    offered_item: str = ""
    quantity: float = 0.0
    total_price: float = 0.0
    ended_at: str = ""
    created_at: str = ""

    @classmethod
    def from_dict(cls, raw: Any) -> "BidRecord":
        raw = _obj(raw)
        return cls(
            bid_number=_text(raw.get("bid_number")),
            org=_text(raw.get("org") or raw.get("organisation")),
            dept=_text(raw.get("dept") or raw.get("department")),
            ministry=_text(raw.get("ministry")),
            seller_name=_text(raw.get("seller_name") or raw.get("seller")),
            offered_item=_text(raw.get("offered_item")),
            quantity=to_number(raw.get("quantity")),
            total_price=to_number(raw.get("total_price")),
            ended_at=_text(raw.get("ended_at")),
            created_at=_text(raw.get("created_at")),
        )

    @property
    def date(self) -> str:
        return self.ended_at or self.created_at


@dataclass(frozen=True)
class LikelyWin:
    offered_item: str = ""
    reason: str = ""
    matching_market_wins: List[BidRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Any) -> "LikelyWin":
        raw = _obj(raw)
        return cls(
            offered_item=_text(raw.get("offered_item")),
            reason=_text(raw.get("reason")),
            matching_market_wins=[BidRecord.from_dict(w) for w in _seq(raw.get("matching_market_wins"))],
        )


@dataclass(frozen=True)
class Affinity:
    """An entity (organization, department or ministry) and its engagement signal."""

    name: str
    signal: str = ""


def _affinities(value: Any, key: str) -> List[Affinity]:
    out = []
    for item in _seq(value):
        item = _obj(item)
        name = _text(item.get(key)).strip()
        if name:
            out.append(Affinity(name=name, signal=_text(item.get("signal"))))
    return out


@dataclass(frozen=True)
class Signals:
    org_affinity: List[Affinity] = field(default_factory=list)
    dept_affinity: List[Affinity] = field(default_factory=list)
    ministry_affinity: List[Affinity] = field(default_factory=list)
    quantity_ranges: List[str] = field(default_factory=list)
    price_ranges: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Any) -> "Signals":
        raw = _obj(raw)
        return cls(
            org_affinity=_affinities(raw.get("org_affinity"), "org"),
            dept_affinity=_affinities(raw.get("dept_affinity"), "dept"),
            ministry_affinity=_affinities(raw.get("ministry_affinity"), "ministry"),
            quantity_ranges=_strings(raw.get("quantity_ranges")),
            price_ranges=_strings(raw.get("price_ranges")),
        )


@dataclass(frozen=True)
class Guidance:
    note: str = ""
    next_steps: List[str] = field(default_factory=list)
    expansion_areas: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Any) -> "Guidance":
        raw = _obj(raw)
        return cls(
            note=_text(raw.get("note")),
            next_steps=_strings(raw.get("next_steps")),
            expansion_areas=_strings(raw.get("expansion_areas")),
        )


@dataclass(frozen=True)
class AIInsights:
    strategy_summary: str = ""
    likely_wins: List[LikelyWin] = field(default_factory=list)
    signals: Signals = field(default_factory=Signals)
    guidance: Guidance = field(default_factory=Guidance)

    @classmethod
    def from_dict(cls, raw: Any) -> "AIInsights":
        raw = _obj(raw)
        return cls(
            strategy_summary=_text(raw.get("strategy_summary")),
            likely_wins=[LikelyWin.from_dict(w) for w in _seq(raw.get("likely_wins"))],
            signals=Signals.from_dict(raw.get("signals")),
            guidance=Guidance.from_dict(raw.get("guidance")),
        )


@dataclass(frozen=True)
class MissedButWinnable:
    seller: str = ""
    recent_wins: List[BidRecord] = field(default_factory=list)
    market_wins: List[BidRecord] = field(default_factory=list)
    ai: AIInsights = field(default_factory=AIInsights)

    @classmethod
    def from_dict(cls, raw: Any) -> "MissedButWinnable":
        raw = _obj(raw)
        return cls(
            seller=_text(raw.get("seller")),
            recent_wins=[BidRecord.from_dict(w) for w in _seq(raw.get("recentWins"))],
            market_wins=[BidRecord.from_dict(w) for w in _seq(raw.get("marketWins"))],
            ai=AIInsights.from_dict(raw.get("ai")),
        )


@dataclass(frozen=True)
class PriceBand:
    highest: float = 0.0
    lowest: float = 0.0
    average: float = 0.0

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["PriceBand"]:
        if not isinstance(raw, dict) or not raw:
            return None
        return cls(
            highest=to_number(raw.get("highest")),
            lowest=to_number(raw.get("lowest")),
            average=to_number(raw.get("average")),
        )


@dataclass(frozen=True)
class ReportData:
    price_band: Optional[PriceBand] = None
    top_states: List[Dict[str, Any]] = field(default_factory=list)
    top_sellers_by_dept: List[Dict[str, Any]] = field(default_factory=list)
    category_listing: List[Dict[str, Any]] = field(default_factory=list)
    all_departments: List[Dict[str, Any]] = field(default_factory=list)
    low_competition: List[Dict[str, Any]] = field(default_factory=list)
    missed_but_winnable: MissedButWinnable = field(default_factory=MissedButWinnable)

    @classmethod
    def from_dict(cls, raw: Any) -> "ReportData":
        raw = _obj(raw)
        if "missedButWinnable" not in raw:
            logger.warning("Payload has no missedButWinnable block; KPIs will be zero.")
        return cls(
            price_band=PriceBand.from_dict(raw.get("priceBand")),
            top_states=[_obj(r) for r in _seq(raw.get("topPerformingStates"))],
            top_sellers_by_dept=[_obj(r) for r in _seq(raw.get("topSellersByDept"))],
            category_listing=[_obj(r) for r in _seq(raw.get("categoryListing"))],
            all_departments=[_obj(r) for r in _seq(raw.get("allDepartments"))],
            low_competition=[_obj(r) for r in _seq(raw.get("lowCompetitionBids"))],
            missed_but_winnable=MissedButWinnable.from_dict(raw.get("missedButWinnable")),
        )


@dataclass(frozen=True)
class ReportInput:
    """The sole input to the engine: metadata plus the analytic facets."""

    meta: ReportMeta = field(default_factory=ReportMeta)
    data: ReportData = field(default_factory=ReportData)

    @classmethod
    def from_dict(cls, raw: Any) -> "ReportInput":
        if not isinstance(raw, dict):
            raise ReportInputError(f"Report payload must be a JSON object, got {type(raw).__name__}.")
        return cls(meta=ReportMeta.from_dict(raw.get("meta")), data=ReportData.from_dict(raw.get("data")))

    @property
    def seller_name(self) -> str:
        return self.meta.params_used.seller_name or self.data.missed_but_winnable.seller


def load_report_input(source: Union[str, Path, Dict[str, Any], "ReportInput"]) -> ReportInput:
    """Accept a parsed dict, a ReportInput, or a path to a JSON file."""
    if isinstance(source, ReportInput):
        return source
    if not isinstance(source, (str, Path)):
        return ReportInput.from_dict(source)
    path = Path(source)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ReportInputError(f"{path} is not valid JSON: {exc}") from exc
    return ReportInput.from_dict(raw)
