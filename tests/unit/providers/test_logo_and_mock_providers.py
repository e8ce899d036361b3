"""Unit tests for the logo proxy and the mock market data providers."""
import asyncio

import httpx
import pytest

from stockboard.core.exceptions import InvalidParameter, UpstreamError
from stockboard.providers import LogoProxy, MockChartProvider, MockQuoteProvider
from stockboard.services.candles import normalize_candles

ALLOWED = ["finnhub.io", "*.finnhub.io"]


class TestLogoProxy:
    """Tests for LogoProxy."""

    @pytest.mark.parametrize(
        "url, allowed",
        [
            ("https://finnhub.io/logo.png", True),
            ("https://static2.finnhub.io/file/logo.png", True),
            ("http://STATIC.FINNHUB.IO/logo.png", True),
            ("https://finnhub.io.attacker.net/logo.png", False),
            ("https://notfinnhub.io/logo.png", False),
            ("http://127.0.0.1/logo.png", False),
            ("ftp://finnhub.io/logo.png", False),
            ("//finnhub.io/logo.png", False),
            ("not a url", False),
        ],
    )
    def test_is_allowed(self, url, allowed) -> None:
        proxy = LogoProxy(httpx.AsyncClient(), allowed_hosts=ALLOWED)
        assert proxy.is_allowed(url) is allowed

    @pytest.mark.asyncio
    async def test_disallowed_host_makes_no_request(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        proxy = LogoProxy(httpx.AsyncClient(transport=httpx.MockTransport(handler)), ALLOWED)

        with pytest.raises(InvalidParameter, match="not allowed"):
            await proxy.open("http://169.254.169.254/latest/meta-data/")
        assert seen == []

    @pytest.mark.asyncio
    async def test_open_streams_body(self) -> None:
        image = b"GIF89a" + b"\x01" * 32
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, content=image, headers={"Content-Type": "image/gif"})
        )
        proxy = LogoProxy(httpx.AsyncClient(transport=transport), ALLOWED)

        response = await proxy.open("https://static2.finnhub.io/logo.gif")
        try:
            body = b"".join([chunk async for chunk in response.aiter_bytes()])
        finally:
            await response.aclose()

        assert body == image
        assert response.headers["content-type"] == "image/gif"

    @pytest.mark.asyncio
    async def test_upstream_error_status(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(403))
        proxy = LogoProxy(httpx.AsyncClient(transport=transport), ALLOWED)

        with pytest.raises(UpstreamError, match="Failed to fetch image") as exc_info:
            await proxy.open("https://static2.finnhub.io/logo.png")

        assert exc_info.value.upstream_status == 403

    @pytest.mark.asyncio
    async def test_transport_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        proxy = LogoProxy(httpx.AsyncClient(transport=httpx.MockTransport(handler)), ALLOWED)

        with pytest.raises(UpstreamError, match="timed out"):
            await proxy.open("https://static2.finnhub.io/logo.png")

    @pytest.mark.asyncio
    async def test_open_deadline(self) -> None:
        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(5)
            return httpx.Response(200)

        proxy = LogoProxy(httpx.AsyncClient(transport=httpx.MockTransport(handler)), ALLOWED, deadline=0.05)

        with pytest.raises(UpstreamError, match="timed out"):
            await proxy.open("https://static2.finnhub.io/logo.png")

    @pytest.mark.asyncio
    async def test_iter_body_relays_and_closes(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"PNGDATA"))
        proxy = LogoProxy(httpx.AsyncClient(transport=transport), ALLOWED)
        response = await proxy.open("https://static2.finnhub.io/logo.png")

        body = b"".join([chunk async for chunk in proxy.iter_body(response)])

        assert body == b"PNGDATA"
        assert response.is_closed

    @pytest.mark.asyncio
    async def test_iter_body_stops_at_deadline(self) -> None:
        async def trickle():
            yield b"first"
            await asyncio.sleep(5)
            yield b"never"

        transport = httpx.MockTransport(lambda request: httpx.Response(200, content=trickle()))
        proxy = LogoProxy(httpx.AsyncClient(transport=transport), ALLOWED, deadline=0.1)
        response = await proxy.open("https://static2.finnhub.io/logo.png")

        body = b"".join([chunk async for chunk in proxy.iter_body(response)])

        assert body == b"first"
        assert response.is_closed


class TestMockQuoteProvider:
    """Tests for MockQuoteProvider."""

    @pytest.mark.asyncio
    async def test_search_matches_symbol_and_name(self) -> None:
        provider = MockQuoteProvider()

        by_symbol = await provider.search("msf")
        by_name = await provider.search("nvidia")

        assert [match["symbol"] for match in by_symbol["result"]] == ["MSFT"]
        assert [match["symbol"] for match in by_name["result"]] == ["NVDA"]

    @pytest.mark.asyncio
    async def test_unknown_profile_is_empty(self) -> None:
        assert await MockQuoteProvider().get_profile("ZZZZ") == {}

    @pytest.mark.asyncio
    async def test_quote_has_finnhub_keys(self) -> None:
        quote = await MockQuoteProvider().get_quote("AAPL")
        assert {"c", "d", "dp", "h", "l", "o", "pc", "t"} <= set(quote)


class TestMockChartProvider:
    """Tests for MockChartProvider."""

    @pytest.mark.asyncio
    async def test_chart_normalizes(self) -> None:
        payload = await MockChartProvider().get_chart("AAPL", "1d", "1mo")

        candles = normalize_candles(payload)

        assert len(candles) == 30
        assert candles == sorted(candles, key=lambda candle: candle.t)
        assert all(candle.l <= candle.o <= candle.h for candle in candles)
