"""Historical feed interface."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Sequence

import pandas as pd


class HistoricalFeed(ABC):
    """Abstract base class for historical daily bar feeds."""

    @abstractmethod
    def get_daily_bars(
        self, ticker: str, start: date, end: date
    ) -> pd.DataFrame:
        """
        Retrieve daily OHLC bars for a ticker.

        Args:
            ticker: Stock ticker symbol
            start: Start date (inclusive)
            end: End date (inclusive)

        Returns:
            DataFrame with columns: date, open, high, low, close, volume, adj_close
            in the order the feed returned them

        Raises:
            FeedError: If data retrieval or parsing fails
        """
        pass

    @abstractmethod
    def get_current_quotes(self, symbols: Sequence[str]) -> pd.DataFrame:
        """
        Retrieve current quotes for symbols.

        Raises:
            NotImplementedError: If the feed has no current quote support
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Feed name identifier."""
        pass
