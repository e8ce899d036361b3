"""Yahoo Finance chart provider.

Talks to the unauthenticated v8 chart endpoint directly. The payload is
columnar (one timestamp array plus parallel OHLCV arrays); reshaping it is
left to ``stockboard.services.candles``.
"""
import logging
from typing import Any
from urllib.parse import quote

import httpx

from stockboard.core.exceptions import InvalidParameter
from stockboard.providers.base import (
    DEFAULT_DEADLINE_SECONDS,
    ChartProviderInterface,
    HTTPProvider,
)

logger = logging.getLogger(__name__)


class YahooChartProvider(HTTPProvider, ChartProviderInterface):
    """
    Yahoo Finance v8 chart client.

    Yahoo answers unknown symbols with a 404 whose JSON body carries
    ``chart.result = null``; those bodies are returned rather than raised so
    the caller reports "no candle data" instead of a server error.
    """

    provider_label = "Yahoo Finance"

    VALID_INTERVALS = ["1m", "2m", "5m", "15m", "30m", "60m", "90m", "1h", "1d", "5d", "1wk", "1mo", "3mo"]
    VALID_RANGES = ["1d", "5d", "1mo", "3mo", "6mo", "1y", "2y", "5y", "10y", "ytd", "max"]

    def __init__(
        self, client: httpx.AsyncClient, base_url: str, deadline: float = DEFAULT_DEADLINE_SECONDS
    ) -> None:
        super().__init__(client, deadline)
        self._base_url = base_url.rstrip("/")

    @property
    def provider_name(self) -> str:
        return "yahoo_finance"

    async def get_chart(self, symbol: str, interval: str = "1d", range_: str = "6mo") -> dict[str, Any]:
        """Fetch the chart payload for ``symbol`` (index symbols like ^GSPC included)."""
        if interval not in self.VALID_INTERVALS:
            raise InvalidParameter(
                f"Invalid interval '{interval}'. Valid values: {', '.join(self.VALID_INTERVALS)}"
            )
        if range_ not in self.VALID_RANGES:
            raise InvalidParameter(
                f"Invalid range '{range_}'. Valid values: {', '.join(self.VALID_RANGES)}"
            )

        url = f"{self._base_url}/{quote(symbol, safe='')}"
        logger.debug(f"Fetching Yahoo chart for {symbol} (interval={interval}, range={range_})")
        return await self._get_json(
            url,
            params={"interval": interval, "range": range_},
            accept_client_errors=True,
        )
