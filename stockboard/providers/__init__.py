"""Market data provider abstractions and implementations.

This package provides provider-agnostic interfaces for the upstream market
data sources, with live and mock implementations.

Available providers:
- FinnhubProvider: symbol search, company profile and quotes (API key)
- YahooChartProvider: columnar OHLCV history for symbols and indices
- LogoProxy: allow-listed streaming fetch of company logos
- MockQuoteProvider / MockChartProvider: fake data for development and tests
"""

from stockboard.providers.base import (
    ChartProviderInterface,
    HTTPProvider,
    QuoteProviderInterface,
)
from stockboard.providers.finnhub import FinnhubProvider
from stockboard.providers.images import LogoProxy
from stockboard.providers.mock import MockChartProvider, MockQuoteProvider
from stockboard.providers.yahoo import YahooChartProvider

__all__ = [
    "ChartProviderInterface",
    "HTTPProvider",
    "QuoteProviderInterface",
    "FinnhubProvider",
    "YahooChartProvider",
    "LogoProxy",
    "MockChartProvider",
    "MockQuoteProvider",
]
