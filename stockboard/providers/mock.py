"""Mock market data providers for development and tests.

Generate deterministic payloads in the same shapes Finnhub and Yahoo return,
without hitting external APIs or needing an API key.
"""
import time
from typing import Any

from stockboard.providers.base import ChartProviderInterface, QuoteProviderInterface

_MOCK_SYMBOLS = {
    "AAPL": "APPLE INC",
    "MSFT": "MICROSOFT CORP",
    "NVDA": "NVIDIA CORP",
    "AMZN": "AMAZON.COM INC",
    "GOOGL": "ALPHABET INC-CL A",
}

_RANGE_DAYS = {"1d": 1, "5d": 5, "1mo": 30, "3mo": 90, "6mo": 180, "1y": 365}
_SECONDS_PER_DAY = 86400


class MockQuoteProvider(QuoteProviderInterface):
    """Finnhub-shaped fake data for a handful of large caps."""

    @property
    def provider_name(self) -> str:
        return "mock"

    async def search(self, query: str) -> dict[str, Any]:
        needle = query.strip().upper()
        matches = [
            {
                "description": name,
                "displaySymbol": symbol,
                "symbol": symbol,
                "type": "Common Stock",
            }
            for symbol, name in _MOCK_SYMBOLS.items()
            if needle in symbol or needle in name
        ]
        return {"count": len(matches), "result": matches}

    async def get_profile(self, symbol: str) -> dict[str, Any]:
        symbol = symbol.upper()
        if symbol not in _MOCK_SYMBOLS:
            # Finnhub answers unknown symbols with an empty object
            return {}
        return {
            "country": "US",
            "currency": "USD",
            "exchange": "NASDAQ NMS - GLOBAL MARKET",
            "name": _MOCK_SYMBOLS[symbol].title(),
            "ticker": symbol,
            "logo": f"https://static2.finnhub.io/file/publicdatany/finnhubimage/stock_logo/{symbol}.png",
            "finnhubIndustry": "Technology",
        }

    async def get_quote(self, symbol: str) -> dict[str, Any]:
        return {
            "c": 101.0,
            "d": 1.0,
            "dp": 1.0,
            "h": 102.0,
            "l": 99.0,
            "o": 100.0,
            "pc": 100.0,
            "t": int(time.time()),
        }


class MockChartProvider(ChartProviderInterface):
    """Yahoo-chart-shaped fake series: daily buckets drifting upward 1% a day."""

    @property
    def provider_name(self) -> str:
        return "mock"

    async def get_chart(self, symbol: str, interval: str = "1d", range_: str = "6mo") -> dict[str, Any]:
        days = _RANGE_DAYS.get(range_, 30)
        end = int(time.time()) // _SECONDS_PER_DAY * _SECONDS_PER_DAY
        timestamps = [end - (days - i) * _SECONDS_PER_DAY for i in range(days)]

        opens, highs, lows, closes, volumes = [], [], [], [], []
        price = 100.0
        for _ in timestamps:
            opens.append(round(price, 2))
            highs.append(round(price * 1.02, 2))
            lows.append(round(price * 0.98, 2))
            closes.append(round(price * 1.01, 2))
            volumes.append(1_000_000)
            price *= 1.01

        return {
            "chart": {
                "result": [
                    {
                        "meta": {
                            "symbol": symbol,
                            "currency": "USD",
                            "regularMarketPrice": closes[-1],
                            "previousClose": closes[-2] if len(closes) > 1 else opens[-1],
                        },
                        "timestamp": timestamps,
                        "indicators": {
                            "quote": [
                                {
                                    "open": opens,
                                    "high": highs,
                                    "low": lows,
                                    "close": closes,
                                    "volume": volumes,
                                }
                            ]
                        },
                    }
                ],
                "error": None,
            }
        }
