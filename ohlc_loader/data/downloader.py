"""Downloader: fetch historical bars per symbol and buffer them into storage."""

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Callable, Optional, Sequence

from ohlc_loader.core import timeutils
from ohlc_loader.core.config import settings
from ohlc_loader.data.buffer import WriteBuffer
from ohlc_loader.data.models import (
    DailyBar,
    FetchWindow,
    WriteCommand,
    WriteKind,
    WriteResult,
)
from ohlc_loader.data.provider import HistoricalFeed
from ohlc_loader.data.ticker_utils import canonical_ticker
from ohlc_loader.data.window import compute_fetch_window, lookback_start
from ohlc_loader.storage.repository import BarRepository

logger = logging.getLogger(__name__)


class FetchStatus(str, Enum):
    """Outcome of a single symbol fetch."""

    FETCHED = "fetched"
    UP_TO_DATE = "up_to_date"  # Window empty, nothing requested
    FAILED = "failed"
    NOT_IMPLEMENTED = "not_implemented"


@dataclass
class SymbolResult:
    """What happened for one symbol."""

    symbol: str
    status: FetchStatus
    last_stored: Optional[date] = None
    window: Optional[FetchWindow] = None
    inserts: int = 0
    updates: int = 0
    flush: Optional[WriteResult] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        if self.status == FetchStatus.FAILED:
            return False
        return self.flush is None or self.flush.ok


@dataclass
class BatchResult:
    """Per-symbol results of a batch plus the final flush, if any."""

    symbols: list[SymbolResult] = field(default_factory=list)
    flush: Optional[WriteResult] = None

    @property
    def ok(self) -> bool:
        if self.flush is not None and not self.flush.ok:
            return False
        return all(result.ok for result in self.symbols)

    @property
    def failed(self) -> list[SymbolResult]:
        return [result for result in self.symbols if not result.ok]


def classify_row(row_date: date, last_stored: Optional[date]) -> WriteKind:
    """
    Decide whether a fetched row updates an existing day or inserts a new one.

    Rows on or before the last stored day are updates, so the boundary day is
    always rewritten. Dates are compared as calendar dates.
    """
    if last_stored is not None and row_date <= last_stored:
        return WriteKind.UPDATE
    return WriteKind.INSERT


class Downloader:
    """
    Fetches daily bars from a historical feed into a bar repository.

    The boolean methods keep a silent-success contract: failures are logged
    and the call still returns True. The ``*_result`` methods do the same work
    and report what happened.
    """

    supports_current_quotes = False

    def __init__(
        self,
        feed: Optional[HistoricalFeed] = None,
        repository: Optional[BarRepository] = None,
        buffer_size: Optional[int] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        """
        Initialize downloader with feed, repository and write buffer.

        Args:
            feed: Historical feed (defaults to YahooCsvFeed)
            repository: Bar storage (defaults to DuckDBBarRepository)
            buffer_size: Buffered writes allowed before a flush (defaults to
                settings.buffer_size)
            today: Callable returning the reference date (defaults to date.today)
        """
        # Defaults are built on first use so no-op calls never touch storage
        self._feed = feed
        self._repository = repository
        capacity = buffer_size if buffer_size is not None else settings.buffer_size
        self.buffer = WriteBuffer(capacity=capacity)
        self._today = today or timeutils.today

    @property
    def feed(self) -> HistoricalFeed:
        if self._feed is None:
            self._feed = self._get_default_feed()
        return self._feed

    @feed.setter
    def feed(self, value: HistoricalFeed) -> None:
        self._feed = value

    @property
    def repository(self) -> BarRepository:
        if self._repository is None:
            self._repository = self._get_default_repository()
        return self._repository

    @repository.setter
    def repository(self, value: BarRepository) -> None:
        self._repository = value

    def _get_default_feed(self) -> HistoricalFeed:
        from ohlc_loader.data.yahoo_provider import YahooCsvFeed

        return YahooCsvFeed()

    def _get_default_repository(self) -> BarRepository:
        from ohlc_loader.storage.duckdb_repository import DuckDBBarRepository

        return DuckDBBarRepository()

    @property
    def buffer_size(self) -> int:
        return self.buffer.capacity

    @buffer_size.setter
    def buffer_size(self, value: int) -> None:
        self.buffer.capacity = value

    @property
    def pending(self) -> int:
        """Number of buffered write commands not yet flushed."""
        return len(self.buffer)

    def fetch_symbols(
        self,
        symbols: Sequence[str],
        days_back: int,
        overwrite: bool = False,
        flush_on_complete: bool = True,
    ) -> bool:
        """Fetch every symbol in order with buffered writes. Always returns True."""
        self.fetch_symbols_result(symbols, days_back, overwrite, flush_on_complete)
        return True

    def fetch_symbols_result(
        self,
        symbols: Sequence[str],
        days_back: int,
        overwrite: bool = False,
        flush_on_complete: bool = True,
    ) -> BatchResult:
        """
        Fetch every symbol in order, buffering writes across symbols.

        Args:
            symbols: Ticker symbols, processed in input order
            days_back: Lookback window in days
            overwrite: Refetch the whole window even when rows are stored
            flush_on_complete: Flush remaining buffered writes at the end

        Returns:
            BatchResult with one SymbolResult per symbol
        """
        batch = BatchResult()
        for symbol in symbols:
            batch.symbols.append(
                self.fetch_symbol_result(symbol, days_back, overwrite, buffer_writes=True)
            )

        if flush_on_complete and len(self.buffer) > 0:
            batch.flush = self._flush_safely()

        logger.info(
            f"Batch complete: {len(batch.symbols)} symbols, "
            f"{len(batch.failed)} failed, {len(self.buffer)} writes pending"
        )
        return batch

    def fetch_symbol(
        self,
        symbol: str,
        days_back: int,
        overwrite: bool = False,
        buffer_writes: bool = True,
    ) -> bool:
        """Fetch one symbol into the buffer. Always returns True."""
        self.fetch_symbol_result(symbol, days_back, overwrite, buffer_writes)
        return True

    def fetch_symbol_result(
        self,
        symbol: str,
        days_back: int,
        overwrite: bool = False,
        buffer_writes: bool = True,
    ) -> SymbolResult:
        """
        Fetch one symbol and buffer an insert or update per row.

        Errors are logged and captured in the result. Commands buffered before
        a failure stay in the buffer.

        Args:
            symbol: Ticker symbol (any case)
            days_back: Lookback window in days
            overwrite: Refetch the whole window even when rows are stored
            buffer_writes: When False, flush right after this symbol

        Returns:
            SymbolResult for the symbol
        """
        result = SymbolResult(symbol=symbol, status=FetchStatus.UP_TO_DATE)
        try:
            self._fetch_into_buffer(symbol, days_back, overwrite, buffer_writes, result)
        except Exception as e:
            result.status = FetchStatus.FAILED
            result.error = e
            logger.error(f"Failed to fetch {symbol}: {e}")
        return result

    def _fetch_into_buffer(
        self,
        symbol: str,
        days_back: int,
        overwrite: bool,
        buffer_writes: bool,
        result: SymbolResult,
    ) -> None:
        ticker = canonical_ticker(symbol)
        today = self._today()

        last_stored = self.repository.get_latest_date(ticker, lookback_start(days_back, today))
        result.last_stored = last_stored

        window = compute_fetch_window(last_stored, days_back, overwrite, today)
        if window is None:
            logger.info(f"{ticker} is up to date (last stored {last_stored})")
            return
        result.window = window

        if settings.debug_mode:
            logger.debug(
                f"[DEBUG] Downloader._fetch_into_buffer: ticker={ticker}, "
                f"last_stored={last_stored}, window=[{window.start}, {window.end}], "
                f"overwrite={overwrite}, feed={self.feed.name}"
            )

        bars = self.feed.get_daily_bars(ticker, window.start, window.end)
        result.status = FetchStatus.FETCHED

        for row in bars.itertuples(index=False):
            bar = DailyBar(
                ticker=ticker,
                date=timeutils.as_calendar_date(row.date),
                open=float(row.open),
                high=float(row.high),
                low=float(row.low),
                close=float(row.close),
                volume=int(row.volume),
                adjusted_close=float(row.adj_close),
            )
            if classify_row(bar.date, last_stored) == WriteKind.UPDATE:
                self.buffer.append(WriteCommand.update(bar))
                result.updates += 1
            else:
                self.buffer.append(WriteCommand.insert(bar))
                result.inserts += 1

        logger.info(
            f"Buffered {result.inserts} inserts and {result.updates} updates for {ticker}"
        )

        if not buffer_writes or self.buffer.over_capacity():
            result.flush = self.flush()

    def flush(self) -> WriteResult:
        """
        Execute all buffered commands as one batch and clear the buffer.

        The buffer is cleared even if the batch fails; nothing is retried.
        """
        commands = self.buffer.drain()
        if not commands:
            return WriteResult.empty()

        logger.info(f"Flushing {len(commands)} buffered writes")
        write_result = self.repository.execute_batch(commands)
        if not write_result.ok:
            logger.error(f"Flush of {len(commands)} writes failed: {write_result.error}")
        return write_result

    def _flush_safely(self) -> WriteResult:
        try:
            return self.flush()
        except Exception as e:
            logger.exception("Unexpected error flushing buffered writes")
            return WriteResult.failure(e)

    def fetch_current_quotes(self, symbols: Sequence[str]) -> bool:
        """
        Current quotes are not implemented.

        Performs no network or storage work and returns True.
        """
        logger.warning(
            f"Current quotes are not implemented; ignoring {len(symbols)} symbols"
        )
        return True

    def fetch_current_quotes_result(self, symbols: Sequence[str]) -> BatchResult:
        """Report every symbol as NOT_IMPLEMENTED without doing any work."""
        self.fetch_current_quotes(symbols)
        return BatchResult(
            symbols=[
                SymbolResult(symbol=symbol, status=FetchStatus.NOT_IMPLEMENTED)
                for symbol in symbols
            ]
        )
