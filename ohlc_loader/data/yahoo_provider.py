"""Yahoo-style historical CSV feed implementation."""

import logging
from datetime import date
from typing import Optional, Sequence
from urllib.parse import urlencode

import httpx
import pandas as pd

from ohlc_loader.core.config import settings
from ohlc_loader.core.exceptions import FeedError
from ohlc_loader.data.normalize import parse_history_csv
from ohlc_loader.data.provider import HistoricalFeed

logger = logging.getLogger(__name__)


class YahooCsvFeed(HistoricalFeed):
    """Feed for historical daily bars from a Yahoo-style ``table.csv`` endpoint."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the feed.

        Args:
            base_url: Endpoint URL (defaults to settings.feed_base_url)
            timeout: Request timeout in seconds (defaults to settings.http_timeout;
                when both are unset the httpx default applies)
            transport: Optional httpx transport, used by tests
        """
        self.base_url = base_url or settings.feed_base_url
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self._transport = transport

    @property
    def name(self) -> str:
        """Feed name."""
        return "yahoo"

    def build_url(self, ticker: str, start: date, end: date) -> str:
        """
        Build the request URL for a ticker and date range.

        Months are zero-indexed (January is 0), as the endpoint expects.
        """
        params = {
            "s": ticker,
            "a": start.month - 1,
            "b": start.day,
            "c": start.year,
            "d": end.month - 1,
            "e": end.day,
            "f": end.year,
            "g": "d",  # daily bars
            "ignore": ".csv",
        }
        return f"{self.base_url}?{urlencode(params)}"

    def _client(self) -> httpx.Client:
        kwargs = {}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return httpx.Client(**kwargs)

    def get_daily_bars(
        self, ticker: str, start: date, end: date
    ) -> pd.DataFrame:
        """
        Download daily bars.

        Args:
            ticker: Stock ticker symbol
            start: Start date
            end: End date

        Returns:
            DataFrame with columns: date, open, high, low, close, volume, adj_close

        Raises:
            FeedError: If the request fails or the body cannot be parsed
        """
        url = self.build_url(ticker, start, end)

        logger.info(f"Fetching data from {self.name}: {ticker} from {start} to {end}")
        if settings.debug_mode:
            logger.debug(
                f"[DEBUG] YahooCsvFeed.get_daily_bars: "
                f"ticker={ticker}, start={start}, end={end}, url={url}"
            )

        try:
            with self._client() as client:
                response = client.get(url)
        except httpx.HTTPError as e:
            raise FeedError(f"Request for {ticker} failed: {e}") from e

        if response.status_code != 200:
            raise FeedError(
                f"Feed returned status {response.status_code} for {ticker}"
            )

        # Error pages come back as HTML
        content_type = response.headers.get("content-type", "").lower()
        if "text/html" in content_type:
            raise FeedError(
                f"Feed returned HTML instead of CSV. Possible ticker not found: {ticker}"
            )

        bars = parse_history_csv(response.text)
        logger.info(f"Fetched {len(bars)} bars for {ticker}")
        return bars

    def get_current_quotes(self, symbols: Sequence[str]) -> pd.DataFrame:
        """Current quotes are not available from this feed."""
        raise NotImplementedError(
            f"Current quotes are not implemented for the {self.name} feed"
        )
