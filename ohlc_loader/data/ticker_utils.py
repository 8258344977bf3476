"""Ticker normalization utilities."""


def canonical_ticker(ticker: str) -> str:
    """
    Convert ticker to the form used in storage and feed requests.

    Args:
        ticker: Input ticker symbol (e.g., "spy", " QQQ ")

    Returns:
        Upper-cased ticker with surrounding whitespace removed

    Raises:
        ValueError: If ticker is empty or not a string

    Examples:
        >>> canonical_ticker("spy")
        'SPY'
        >>> canonical_ticker("brk.b")
        'BRK.B'
    """
    if not ticker or not isinstance(ticker, str) or not ticker.strip():
        raise ValueError(f"Invalid ticker: {ticker!r}")
    return ticker.strip().upper()
