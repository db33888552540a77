# scoreboard/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class RawRecord:
    """One data row as read from the sheet. Every field is trimmed text."""
    name: str = ""
    sum: str = ""
    count: str = ""
    avg: str = ""


@dataclass(frozen=True)
class ColumnMapping:
    """Header position of each logical column, or None when the sheet lacks it."""
    name: Optional[int] = None
    sum: Optional[int] = None
    count: Optional[int] = None
    avg: Optional[int] = None

    @property
    def usable(self) -> bool:
        return self.name is not None and self.sum is not None


@dataclass(frozen=True)
class RankedEntry:
    name: str
    sum: str
    count: str
    avg: str
    score_num: float
    rank: int


@dataclass(frozen=True)
class BoardState:
    """What the pages render. Replaced whole, never mutated."""
    entries: Tuple[RankedEntry, ...] = field(default_factory=tuple)
    loading: bool = True
    error: Optional[str] = None
    last_updated: Optional[datetime] = None
