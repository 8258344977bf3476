"""Custom exceptions for the OHLC loader."""


class OHLCLoaderError(Exception):
    """Base exception for OHLC loader errors."""

    pass


class FeedError(OHLCLoaderError):
    """Error fetching or parsing a historical feed."""

    pass


class StorageError(OHLCLoaderError):
    """Error executing a write batch or query against storage."""

    pass
