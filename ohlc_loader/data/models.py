"""Domain types for daily bars, fetch windows and buffered writes."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class DailyBar:
    """One day of OHLC data for a ticker."""

    ticker: str  # Upper case
    date: date
    open: float
    high: float
    low: float
    close: float
    volume: int
    adjusted_close: float


@dataclass(frozen=True)
class FetchWindow:
    """Inclusive date range requested from the feed."""

    start: date
    end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


class WriteKind(str, Enum):
    """Kind of buffered write."""

    INSERT = "insert"
    UPDATE = "update"


@dataclass(frozen=True)
class WriteCommand:
    """A buffered insert or update of a single bar."""

    kind: WriteKind
    bar: DailyBar

    @classmethod
    def insert(cls, bar: DailyBar) -> "WriteCommand":
        return cls(WriteKind.INSERT, bar)

    @classmethod
    def update(cls, bar: DailyBar) -> "WriteCommand":
        return cls(WriteKind.UPDATE, bar)


@dataclass
class WriteResult:
    """Outcome of executing one batch of write commands."""

    ok: bool
    inserted: int = 0
    updated: int = 0
    error: Optional[Exception] = None

    @property
    def total(self) -> int:
        return self.inserted + self.updated

    @classmethod
    def empty(cls) -> "WriteResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: Exception) -> "WriteResult":
        return cls(ok=False, error=error)
