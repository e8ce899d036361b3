"""Headline index summary for the front page.

Fetches the three US benchmark indices concurrently. Each index is reduced
independently; a failure on one yields ``None`` for that index and never fails
the summary as a whole.
"""
import asyncio
import logging

from stockboard.core.constants import MARKET_INDICES
from stockboard.core.exceptions import StockboardError
from stockboard.providers.base import ChartProviderInterface
from stockboard.schemas.market import IndexSnapshot, MarketSummaryResponse
from stockboard.services.candles import parse_chart_result

logger = logging.getLogger(__name__)


def snapshot_from_chart(payload: dict) -> IndexSnapshot | None:
    """Reduce a chart payload to price/change/percent, or None if unusable."""
    result = parse_chart_result(payload)
    meta = result.meta
    if meta is None or meta.regularMarketPrice is None:
        return None

    previous = meta.previousClose if meta.previousClose is not None else meta.chartPreviousClose
    if not previous:
        return None

    price = meta.regularMarketPrice
    change = round(price - previous, 2)
    percent = round(change / previous * 100, 2)
    return IndexSnapshot(price=price, change=change, percent=percent)


async def _fetch_index(provider: ChartProviderInterface, key: str, symbol: str) -> IndexSnapshot | None:
    try:
        payload = await provider.get_chart(symbol, "1d", "1d")
        snapshot = snapshot_from_chart(payload)
    except StockboardError as e:
        logger.warning(f"Index {key} ({symbol}) unavailable: {e.message}")
        return None
    if snapshot is None:
        logger.warning(f"Index {key} ({symbol}) returned no usable price")
    return snapshot


async def get_market_summary(provider: ChartProviderInterface) -> MarketSummaryResponse:
    """Build the summary for every index in ``MARKET_INDICES``."""
    keys = list(MARKET_INDICES)
    snapshots = await asyncio.gather(
        *(_fetch_index(provider, key, MARKET_INDICES[key]) for key in keys)
    )
    return MarketSummaryResponse(**dict(zip(keys, snapshots)))
