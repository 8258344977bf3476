"""Pytest fixtures and configuration."""

from datetime import date, timedelta
from typing import Optional, Sequence

import pandas as pd
import pytest

from ohlc_loader.core.exceptions import FeedError
from ohlc_loader.data.models import WriteCommand, WriteResult
from ohlc_loader.data.provider import HistoricalFeed
from ohlc_loader.storage.repository import BarRepository

TODAY = date(2024, 3, 15)


def make_bars(dates: Sequence, base_price: float = 100.0) -> pd.DataFrame:
    """Build a normalized feed frame for the given dates."""
    prices = base_price + pd.Series(range(len(dates)), dtype=float) * 0.5
    return pd.DataFrame({
        "date": pd.to_datetime(list(dates)),
        "open": prices + 0.1,
        "high": prices + 0.5,
        "low": prices - 0.3,
        "close": prices,
        "volume": 1000000 + pd.Series(range(len(dates))) * 1000,
        "adj_close": prices - 0.05,
    })


class FakeFeed(HistoricalFeed):
    """Offline feed: fixed frames per ticker, or one bar per calendar day of the window."""

    def __init__(self, frames: Optional[dict] = None, fail_for: Sequence[str] = ()):
        self.frames = frames or {}
        self.fail_for = set(fail_for)
        self.call_count = 0
        self.call_history = []
        self.quote_calls = 0

    @property
    def name(self) -> str:
        return "fake"

    def get_daily_bars(self, ticker: str, start: date, end: date) -> pd.DataFrame:
        self.call_count += 1
        self.call_history.append((ticker, start, end))
        if ticker in self.fail_for:
            raise FeedError(f"Feed unavailable for {ticker}")
        if ticker in self.frames:
            return self.frames[ticker]
        return make_bars(pd.date_range(start, end, freq="D"))

    def get_current_quotes(self, symbols):
        self.quote_calls += 1
        raise NotImplementedError("fake feed has no quotes")


class RecordingRepository(BarRepository):
    """In-memory repository that records every batch it executes."""

    def __init__(self, latest: Optional[dict] = None, fail_writes: bool = False):
        self.latest = latest or {}
        self.fail_writes = fail_writes
        self.latest_queries = []
        self.batches: list[list[WriteCommand]] = []

    def get_latest_date(self, ticker: str, after: date) -> Optional[date]:
        self.latest_queries.append((ticker, after))
        latest = self.latest.get(ticker)
        if latest is not None and latest > after:
            return latest
        return None

    def execute_batch(self, commands) -> WriteResult:
        self.batches.append(list(commands))
        if self.fail_writes:
            return WriteResult.failure(RuntimeError("disk full"))
        inserted = sum(1 for c in commands if c.kind.value == "insert")
        return WriteResult(ok=True, inserted=inserted, updated=len(commands) - inserted)

    @property
    def written(self) -> list[WriteCommand]:
        return [command for batch in self.batches for command in batch]


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def fake_feed():
    """Fake feed for offline testing."""
    return FakeFeed()


@pytest.fixture
def recording_repository():
    """Repository that records batches instead of writing them."""
    return RecordingRepository()


@pytest.fixture
def duckdb_repository(tmp_path):
    """DuckDB repository backed by a temporary file."""
    from ohlc_loader.storage.duckdb_repository import DuckDBBarRepository

    return DuckDBBarRepository(db_path=str(tmp_path / "test.db"))


@pytest.fixture
def days_ago():
    """Helper returning TODAY minus n days."""
    return lambda n: TODAY - timedelta(days=n)
