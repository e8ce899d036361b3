"""Candle normalization.

Reshapes Yahoo's columnar chart payload (one timestamp array plus parallel
open/high/low/close/volume arrays) into Finnhub-style row-oriented candles.
Values are copied index-for-index: no interpolation, gap filling or range
checks.
"""
import logging
from typing import Any

from pydantic import ValidationError

from stockboard.core.exceptions import UpstreamDataShapeError
from stockboard.providers.base import ChartProviderInterface
from stockboard.schemas.market import Candle
from stockboard.schemas.yahoo import YahooChartResponse, YahooChartResult

logger = logging.getLogger(__name__)

NO_CANDLE_DATA = "No candle data"


def parse_chart_result(payload: Any) -> YahooChartResult:
    """Validate a raw chart payload and return its first result.

    Raises:
        UpstreamDataShapeError: If ``chart.result`` is missing, null, empty,
            or the payload does not match the chart schema
    """
    try:
        chart = YahooChartResponse.model_validate(payload).chart
    except ValidationError as e:
        logger.warning(f"Chart payload failed schema validation: {e.error_count()} errors")
        raise UpstreamDataShapeError(NO_CANDLE_DATA) from e

    if not chart.result:
        if chart.error:
            logger.info(f"Chart provider reported no data: {chart.error}")
        raise UpstreamDataShapeError(NO_CANDLE_DATA)
    return chart.result[0]


def normalize_candles(payload: Any) -> list[Candle]:
    """Convert a columnar chart payload into candles.

    Args:
        payload: Parsed JSON body from the chart endpoint

    Returns:
        One Candle per timestamp, in timestamp-array order

    Raises:
        UpstreamDataShapeError: If the result structure is missing, the quote
            block is absent, or any value array differs in length from the
            timestamp array
    """
    result = parse_chart_result(payload)

    if result.indicators is None or not result.indicators.quote:
        raise UpstreamDataShapeError(NO_CANDLE_DATA)
    series = result.indicators.quote[0]
    timestamps = result.timestamp

    columns = {
        "open": series.open,
        "high": series.high,
        "low": series.low,
        "close": series.close,
        "volume": series.volume,
    }
    for name, values in columns.items():
        if len(values) != len(timestamps):
            logger.warning(
                f"Chart column '{name}' has {len(values)} values for {len(timestamps)} timestamps"
            )
            raise UpstreamDataShapeError(NO_CANDLE_DATA)

    return [
        Candle(
            t=ts,
            o=series.open[i],
            h=series.high[i],
            l=series.low[i],
            c=series.close[i],
            v=series.volume[i],
        )
        for i, ts in enumerate(timestamps)
    ]


async def fetch_candles(
    provider: ChartProviderInterface,
    symbol: str,
    interval: str = "1d",
    range_: str = "6mo",
) -> list[Candle]:
    """Fetch a symbol's chart and normalize it.

    Raises:
        UpstreamError: If the provider call fails
        UpstreamDataShapeError: If the payload carries no usable series
    """
    payload = await provider.get_chart(symbol, interval, range_)
    candles = normalize_candles(payload)
    logger.info(f"Normalized {len(candles)} candles for {symbol}")
    return candles
