"""Child safety data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .tmdb import Content


class ContentClass(str, Enum):
    """Display-side classification of a content item."""

    SAFE = "safe"
    RESTRICTED = "restricted"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FilterStats:
    """How many items a safety pass kept and removed."""

    total: int
    shown: int
    hidden: int

    @classmethod
    def from_counts(cls, total: int, shown: int) -> FilterStats:
        return cls(total=total, shown=shown, hidden=total - shown)


@dataclass
class AdultFilterResult:
    """Items left after the adult-flag pass, with counts."""

    items: list[Content] = field(default_factory=list)
    shown: int = 0
    hidden: int = 0
    total_before: int = 0
