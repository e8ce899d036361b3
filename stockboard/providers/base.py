"""Base provider interfaces for upstream market data sources.

Two upstream roles exist:
- a quote/search provider (Finnhub): symbol lookup, company profile, quote
- a chart provider (Yahoo Finance): columnar time-series per symbol or index

Concrete HTTP providers share ``HTTPProvider`` for the request/decode/error
translation path, so every outbound call carries the configured deadline and
fails with ``UpstreamError`` instead of leaking transport exceptions.
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from stockboard.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class QuoteProviderInterface(ABC):
    """
    Abstract interface for symbol search, company profile and quote lookups.

    Payloads are returned as the upstream's parsed JSON; route handlers pass
    profile and quote bodies through to the frontend unchanged.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of this provider (e.g., 'finnhub')."""
        pass

    @abstractmethod
    async def search(self, query: str) -> dict[str, Any]:
        """
        Look up symbols matching a free-text query.

        Args:
            query: Company name or ticker fragment

        Returns:
            Upstream payload, expected to carry a ``result`` list

        Raises:
            UpstreamError: If the provider call fails
        """
        pass

    @abstractmethod
    async def get_profile(self, symbol: str) -> dict[str, Any]:
        """
        Get company profile (name, exchange, logo URL, ...).

        Raises:
            UpstreamError: If the provider call fails
        """
        pass

    @abstractmethod
    async def get_quote(self, symbol: str) -> dict[str, Any]:
        """
        Get the latest quote (current, change, high, low, open, previous close).

        Raises:
            UpstreamError: If the provider call fails
        """
        pass


class ChartProviderInterface(ABC):
    """Abstract interface for columnar price history."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of this provider (e.g., 'yahoo_finance')."""
        pass

    @abstractmethod
    async def get_chart(self, symbol: str, interval: str, range_: str) -> dict[str, Any]:
        """
        Fetch the raw chart payload for a symbol or index.

        Args:
            symbol: Ticker or index symbol (e.g., 'AAPL', '^GSPC')
            interval: Bucket size (e.g., '1d')
            range_: Window ending now (e.g., '6mo')

        Returns:
            Upstream payload; shape validation is the caller's concern

        Raises:
            UpstreamError: If the provider call fails
        """
        pass


DEFAULT_DEADLINE_SECONDS = 10.0


class HTTPProvider:
    """Shared outbound request handling for httpx-backed providers.

    The client's httpx timeout applies per connect/read/write phase;
    ``deadline`` bounds the whole call.
    """

    provider_label = "upstream"

    def __init__(self, client: httpx.AsyncClient, deadline: float = DEFAULT_DEADLINE_SECONDS) -> None:
        self._client = client
        self._deadline = deadline

    async def _get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        accept_client_errors: bool = False,
    ) -> Any:
        """Issue a GET and decode the JSON body.

        Args:
            url: Absolute URL
            params: Query parameters
            headers: Extra request headers
            accept_client_errors: Decode 4xx bodies instead of failing, for
                providers that describe "no data" in a 4xx JSON body

        Raises:
            UpstreamError: On transport failure, timeout, non-2xx status or
                an undecodable body
        """
        try:
            async with asyncio.timeout(self._deadline):
                response = await self._client.get(url, params=params, headers=headers)
        except (httpx.TimeoutException, TimeoutError) as e:
            logger.warning(f"{self.provider_label} request timed out: {url}")
            raise UpstreamError(f"{self.provider_label} request timed out") from e
        except httpx.RequestError as e:
            logger.warning(f"{self.provider_label} request failed: {url}: {e}")
            raise UpstreamError(f"{self.provider_label} request failed: {e}") from e

        status = response.status_code
        client_error_ok = accept_client_errors and 400 <= status < 500
        if response.is_error and not client_error_ok:
            logger.warning(f"{self.provider_label} returned HTTP {status}: {url}")
            raise UpstreamError(
                f"{self.provider_label} returned HTTP {status}: {response.reason_phrase}",
                upstream_status=status,
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                f"{self.provider_label} returned a non-JSON body",
                upstream_status=status,
            ) from e
