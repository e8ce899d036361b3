"""Schemas for Yahoo Finance v8 chart payloads.

Only the fields this service reads are declared. The payload looks like::

    {"chart": {"result": [{"meta": {...},
                           "timestamp": [...],
                           "indicators": {"quote": [{"open": [...], ...}]}}],
               "error": null}}

Unknown symbols come back as ``{"chart": {"result": null, "error": {...}}}``.
"""
from typing import Any

from pydantic import Field

from stockboard.schemas.base import UpstreamModel


class YahooChartMeta(UpstreamModel):
    """Session metadata attached to a chart result."""

    symbol: str | None = None
    currency: str | None = None
    regularMarketPrice: float | None = None  # noqa: N815
    previousClose: float | None = None  # noqa: N815
    chartPreviousClose: float | None = None  # noqa: N815


class YahooQuoteSeries(UpstreamModel):
    """Parallel OHLCV arrays, index-aligned with the result's timestamps."""

    open: list[float | None] = Field(default_factory=list)
    high: list[float | None] = Field(default_factory=list)
    low: list[float | None] = Field(default_factory=list)
    close: list[float | None] = Field(default_factory=list)
    volume: list[int | None] = Field(default_factory=list)


class YahooIndicators(UpstreamModel):
    quote: list[YahooQuoteSeries]


class YahooChartResult(UpstreamModel):
    meta: YahooChartMeta | None = None
    timestamp: list[int] = Field(default_factory=list)
    indicators: YahooIndicators | None = None


class YahooChart(UpstreamModel):
    result: list[YahooChartResult] | None = None
    error: Any = None


class YahooChartResponse(UpstreamModel):
    chart: YahooChart
