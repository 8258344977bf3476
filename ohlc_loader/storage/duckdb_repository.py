"""Data access layer for DuckDB."""

import logging
from datetime import date
from typing import Optional, Sequence

import duckdb
import pandas as pd

from ohlc_loader.core.config import settings
from ohlc_loader.core.exceptions import StorageError
from ohlc_loader.data.models import WriteCommand, WriteKind, WriteResult
from ohlc_loader.storage.repository import BarRepository
from ohlc_loader.storage.schema import INSERT_SQL, SCHEMA_SQL, UPDATE_SQL

logger = logging.getLogger(__name__)


class DuckDBBarRepository(BarRepository):
    """Repository for daily bars stored in DuckDB."""

    def __init__(self, db_path: Optional[str] = None):
        """Initialize repository with DuckDB connection."""
        self.db_path = db_path or str(settings.duckdb_path_obj)
        self._initialize_schema()

    def _get_connection(self) -> duckdb.DuckDBPyConnection:
        """Get DuckDB connection."""
        return duckdb.connect(self.db_path)

    def _initialize_schema(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            conn.execute(SCHEMA_SQL)
            logger.info(f"Database schema initialized at {self.db_path}")

    def get_latest_date(self, ticker: str, after: date) -> Optional[date]:
        """Get the latest stored date for a ticker strictly after ``after``."""
        try:
            with self._get_connection() as conn:
                result = conn.execute(
                    "SELECT MAX(date) AS latest_date FROM daily WHERE ticker = ? AND date > ?",
                    [ticker, after],
                ).fetchone()
        except duckdb.Error as e:
            raise StorageError(f"Latest date query failed for {ticker}: {e}") from e

        if result and result[0]:
            return result[0]
        return None

    def execute_batch(self, commands: Sequence[WriteCommand]) -> WriteResult:
        """
        Execute inserts and updates in one transaction.

        Commands run in order. Any database error rolls back the whole batch
        and is returned as a failed WriteResult.
        """
        if not commands:
            return WriteResult.empty()

        inserted = 0
        updated = 0
        with self._get_connection() as conn:
            try:
                conn.execute("BEGIN TRANSACTION")
                for command in commands:
                    bar = command.bar
                    if command.kind == WriteKind.INSERT:
                        conn.execute(
                            INSERT_SQL,
                            [
                                bar.ticker,
                                bar.date,
                                bar.open,
                                bar.high,
                                bar.low,
                                bar.close,
                                bar.volume,
                                bar.adjusted_close,
                            ],
                        )
                        inserted += 1
                    else:
                        conn.execute(
                            UPDATE_SQL,
                            [
                                bar.open,
                                bar.high,
                                bar.low,
                                bar.close,
                                bar.volume,
                                bar.adjusted_close,
                                bar.ticker,
                                bar.date,
                            ],
                        )
                        updated += 1
                conn.execute("COMMIT")
            except duckdb.Error as e:
                try:
                    conn.execute("ROLLBACK")
                except duckdb.Error:
                    logger.debug("Rollback failed; transaction already aborted")
                logger.error(f"Batch of {len(commands)} writes failed: {e}")
                error = StorageError(f"Batch of {len(commands)} writes failed: {e}")
                error.__cause__ = e
                return WriteResult.failure(error)

        logger.info(f"Stored batch: {inserted} inserted, {updated} updated")
        return WriteResult(ok=True, inserted=inserted, updated=updated)

    def get_bars(
        self, ticker: str, start_date: date, end_date: date
    ) -> pd.DataFrame:
        """
        Retrieve bars for a ticker and date range.

        Args:
            ticker: Stock ticker symbol
            start_date: Start date (inclusive)
            end_date: End date (inclusive)

        Returns:
            DataFrame with columns: date, open, high, low, close, volume,
            adjusted_close ordered by date
        """
        with self._get_connection() as conn:
            result = conn.execute(
                """
                SELECT date, open, high, low, close, volume, adjusted_close
                FROM daily
                WHERE ticker = ? AND date >= ? AND date <= ?
                ORDER BY date
                """,
                [ticker, start_date, end_date],
            ).df()

        if result.empty:
            logger.debug(f"No bars found for {ticker} from {start_date} to {end_date}")
        else:
            logger.debug(f"Retrieved {len(result)} bars for {ticker}")
        return result
