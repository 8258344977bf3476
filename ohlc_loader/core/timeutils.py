"""Date helpers shared by the window computation and row classification."""

from datetime import date, datetime

import pandas as pd


def today() -> date:
    """Current local calendar date."""
    return date.today()


def as_calendar_date(value) -> date:
    """
    Reduce a date-like value to its calendar date, dropping any time component.

    Accepts ``date``, ``datetime``, ``pd.Timestamp`` and ISO date strings.

    Raises:
        ValueError: If the value is missing or cannot be interpreted as a date
    """
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        raise ValueError("Missing date value")
    # Timestamp and datetime both subclass date, check them first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return pd.Timestamp(value).date()
    raise ValueError(f"Cannot interpret {value!r} as a date")
