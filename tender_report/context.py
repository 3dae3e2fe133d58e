import hashlib
import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Tuple

from .config import FILTER_SECTIONS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterSelection:
    """Set of optional section identifiers the caller asked for."""

    sections: FrozenSet[str] = frozenset()

    @classmethod
    def of(cls, ids: Optional[Iterable[str]]) -> "FilterSelection":
        """
        Build a selection from caller input. Unknown identifiers are dropped
        with a warning so a stale UI cannot smuggle sections in.
        """
        chosen = set()
        for sid in ids or ():
            sid = str(sid).strip()
            if not sid:
                continue
            if sid not in FILTER_SECTIONS:
                logger.warning("Ignoring unknown section id %r", sid)
                continue
            chosen.add(sid)
        return cls(frozenset(chosen))

    @classmethod
    def all(cls) -> "FilterSelection":
        return cls(frozenset(FILTER_SECTIONS))

    def __contains__(self, section_id: object) -> bool:
        return section_id in self.sections

    def ordered(self) -> Tuple[str, ...]:
        """Selected ids in the canonical enumeration order."""
        return tuple(sid for sid in FILTER_SECTIONS if sid in self.sections)

    def cache_key(self) -> str:
        return hashlib.sha256("|".join(self.ordered()).encode("utf-8")).hexdigest()[:16]


@dataclass(frozen=True)
class ReportContext:
    """
    Immutable description of one report run. It travels with the output
    (file naming, metadata sidecar) so every artifact carries the same provenance.
    """

    seller_name: str
    selection: FilterSelection
    theme: str = "corporate"
    template: str = "standard"
    issued_at: Optional[str] = None

    def cache_key(self) -> str:
        stem = f"{self.seller_name}|{self.selection.cache_key()}|{self.theme}|{self.template}"
        return hashlib.sha256(stem.encode("utf-8")).hexdigest()[:16]
