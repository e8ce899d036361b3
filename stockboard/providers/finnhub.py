"""Finnhub provider for symbol search, company profile and quotes.

Free tier, API key required. The key travels in the ``X-Finnhub-Token``
header rather than the query string so it never appears in logged URLs.
"""
from typing import Any

import httpx

from stockboard.providers.base import DEFAULT_DEADLINE_SECONDS, HTTPProvider, QuoteProviderInterface


class FinnhubProvider(HTTPProvider, QuoteProviderInterface):
    """Finnhub REST client (``/search``, ``/stock/profile2``, ``/quote``)."""

    provider_label = "Finnhub"

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        base_url: str,
        deadline: float = DEFAULT_DEADLINE_SECONDS,
    ) -> None:
        super().__init__(client, deadline)
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    @property
    def provider_name(self) -> str:
        return "finnhub"

    async def _get(self, path: str, params: dict[str, Any]) -> Any:
        return await self._get_json(
            f"{self._base_url}{path}",
            params=params,
            headers={"X-Finnhub-Token": self._api_key},
        )

    async def search(self, query: str) -> dict[str, Any]:
        return await self._get("/search", {"q": query})

    async def get_profile(self, symbol: str) -> dict[str, Any]:
        return await self._get("/stock/profile2", {"symbol": symbol})

    async def get_quote(self, symbol: str) -> dict[str, Any]:
        return await self._get("/quote", {"symbol": symbol})
