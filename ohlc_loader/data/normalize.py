"""CSV parsing and normalization for historical feeds."""

import logging
from io import StringIO

import pandas as pd

from ohlc_loader.core.exceptions import FeedError

logger = logging.getLogger(__name__)

# Feed header -> normalized column, in feed column order
FEED_COLUMNS = {
    "Date": "date",
    "Open": "open",
    "High": "high",
    "Low": "low",
    "Close": "close",
    "Volume": "volume",
    "Adj Close": "adj_close",
}
PRICE_COLUMNS = ["open", "high", "low", "close", "adj_close"]
NORMALIZED_COLUMNS = list(FEED_COLUMNS.values())


def parse_history_csv(text: str) -> pd.DataFrame:
    """
    Parse a historical quotes CSV body.

    Args:
        text: CSV text with a header row containing Date, Open, High, Low,
            Close, Volume and Adj Close

    Returns:
        DataFrame with columns: date, open, high, low, close, volume, adj_close.
        Rows keep the feed's order; no sort order is assumed.

    Raises:
        FeedError: If the body is empty, unreadable, misses a required column
            or contains an unparseable date
    """
    if not text or not text.strip():
        raise FeedError("Empty response body")

    try:
        df = pd.read_csv(StringIO(text), dtype={"Date": str})
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise FeedError(f"Could not parse CSV: {e}") from e

    df.columns = [str(col).strip() for col in df.columns]

    missing_cols = [col for col in FEED_COLUMNS if col not in df.columns]
    if missing_cols:
        raise FeedError(f"Missing required columns: {missing_cols}")

    df = df[list(FEED_COLUMNS)].rename(columns=FEED_COLUMNS).copy()

    if df.empty:
        return pd.DataFrame(columns=NORMALIZED_COLUMNS)

    try:
        # Rows are parsed independently; one body may mix date formats
        df["date"] = pd.to_datetime(df["date"].str.strip(), format="mixed", errors="raise")
    except (ValueError, TypeError, AttributeError) as e:
        raise FeedError(f"Could not parse dates: {e}") from e
    if df["date"].isna().any():
        raise FeedError(f"Missing dates in {int(df['date'].isna().sum())} rows")

    numeric_cols = PRICE_COLUMNS + ["volume"]
    for col in numeric_cols:
        df[col] = pd.to_numeric(df[col], errors="coerce")

    # Feeds emit "null" for missing values; such rows cannot be stored
    initial_count = len(df)
    df = df.dropna(subset=numeric_cols)
    dropped = initial_count - len(df)
    if dropped > 0:
        logger.warning(f"Dropped {dropped} rows with non-numeric values")

    df["volume"] = df["volume"].round().astype("int64")
    for col in PRICE_COLUMNS:
        df[col] = df[col].astype(float)

    return df.reset_index(drop=True)
