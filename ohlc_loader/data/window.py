"""Fetch window computation."""

from datetime import date, timedelta
from typing import Optional

from ohlc_loader.data.models import FetchWindow


def lookback_start(days_back: int, today: date) -> date:
    """First day of the lookback window ending today."""
    if days_back < 0:
        raise ValueError(f"days_back must be non-negative, got {days_back}")
    return today - timedelta(days=days_back)


def compute_fetch_window(
    last_stored: Optional[date],
    days_back: int,
    overwrite: bool,
    today: date,
) -> Optional[FetchWindow]:
    """
    Compute the date range to request for a symbol.

    Args:
        last_stored: Most recent stored date inside the lookback window, or None
        days_back: Length of the lookback window in days
        overwrite: Refetch the whole lookback window even if rows are stored
        today: Reference date, always the end of the window

    Returns:
        FetchWindow, or None when the start falls after today (nothing to fetch)
    """
    if last_stored is None or overwrite:
        start = lookback_start(days_back, today)
    else:
        start = last_stored + timedelta(days=1)

    if start > today:
        return None
    return FetchWindow(start=start, end=today)
