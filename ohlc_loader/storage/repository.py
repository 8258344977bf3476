"""Bar storage interface."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional, Sequence

from ohlc_loader.data.models import WriteCommand, WriteResult


class BarRepository(ABC):
    """Abstract base class for daily bar storage."""

    @abstractmethod
    def get_latest_date(self, ticker: str, after: date) -> Optional[date]:
        """
        Get the most recent stored date for a ticker later than ``after``.

        Raises:
            StorageError: If the query fails
        """
        pass

    @abstractmethod
    def execute_batch(self, commands: Sequence[WriteCommand]) -> WriteResult:
        """
        Execute write commands as one batch.

        Storage errors are reported through the returned WriteResult,
        not raised.
        """
        pass
