"""Market data endpoints: symbol search, profile, quote, candles, logos and
the front-page index summary.

None of these routes require authentication. Upstream failures surface as
``StockboardError`` subclasses and are rendered by the application's
exception handler; search is the exception, keeping ``result: []`` in its
error body so the frontend's dropdown code never sees a missing list.
"""
from typing import Any

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import ValidationError
from starlette.background import BackgroundTask

from stockboard.core.config import Settings, get_settings
from stockboard.core.deps import (
    get_chart_provider,
    get_logo_proxy,
    get_quote_provider,
    get_validated_symbol,
)
from stockboard.core.exceptions import MissingParameter, StockboardError
from stockboard.providers import ChartProviderInterface, LogoProxy, QuoteProviderInterface
from stockboard.schemas.market import Candle, MarketSummaryResponse, SearchResponse
from stockboard.services.candles import fetch_candles
from stockboard.services.market_summary import get_market_summary
from stockboard.utils.structured_logging import get_logger
from stockboard.utils.validation import is_searchable_query

router = APIRouter()
logger = get_logger(__name__)

NO_STORE = {"Cache-Control": "no-store"}


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Search Symbols",
    description="Look up ticker symbols by company name or ticker fragment. "
    "Queries shorter than 2 characters (after trimming) return an empty list "
    "without contacting the provider.",
    operation_id="search_symbols",
    responses={500: {"description": "Symbol provider unavailable"}},
)
async def search_symbols(
    response: Response,
    q: str | None = Query(None, description="Free-text query"),
    provider: QuoteProviderInterface = Depends(get_quote_provider),
) -> Any:
    """Search symbols via the quote provider."""
    response.headers.update(NO_STORE)
    if not is_searchable_query(q):
        return SearchResponse()

    query = q.strip()
    logger.info("Symbol search received", query=query, provider=provider.provider_name)
    try:
        data = await provider.search(query)
        matches = (data.get("result") if isinstance(data, dict) else None) or []
        result = SearchResponse(result=matches)
    except StockboardError as e:
        return _search_failed(query, e.message)
    except ValidationError as e:
        return _search_failed(query, f"Unexpected search payload: {e.error_count()} invalid field(s)")

    logger.info("Symbol search completed", query=query, matches=len(result.result))
    return result


def _search_failed(query: str, details: str) -> JSONResponse:
    logger.error("Symbol search failed", query=query, error=details)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"result": [], "error": "Server error", "details": details},
        headers=NO_STORE,
    )


@router.get(
    "/profile",
    response_model=dict[str, Any],
    summary="Get Company Profile",
    description="Company profile (name, exchange, industry, logo URL) passed through "
    "from the quote provider.",
    operation_id="get_company_profile",
    responses={
        400: {"description": "Missing or invalid symbol"},
        500: {"description": "Quote provider unavailable"},
    },
)
async def get_profile(
    symbol: str = Depends(get_validated_symbol),
    provider: QuoteProviderInterface = Depends(get_quote_provider),
) -> Any:
    """Get a company profile."""
    return await provider.get_profile(symbol)


@router.get(
    "/quote",
    response_model=dict[str, Any],
    summary="Get Quote",
    description="Latest quote passed through from the quote provider.",
    operation_id="get_quote",
    responses={
        400: {"description": "Missing or invalid symbol"},
        500: {"description": "Quote provider unavailable"},
    },
)
async def get_quote(
    symbol: str = Depends(get_validated_symbol),
    provider: QuoteProviderInterface = Depends(get_quote_provider),
) -> Any:
    """Get the latest quote."""
    return await provider.get_quote(symbol)


@router.get(
    "/candles",
    response_model=list[Candle],
    summary="Get Candles",
    description="Daily OHLCV history for the last six months, one record per "
    "trading day, in Finnhub's row format (t, o, h, l, c, v).",
    operation_id="get_candles",
    responses={
        400: {"description": "Missing or invalid symbol"},
        404: {"description": "No candle data for symbol"},
        500: {"description": "Chart provider unavailable"},
    },
)
async def get_candles(
    symbol: str = Depends(get_validated_symbol),
    provider: ChartProviderInterface = Depends(get_chart_provider),
    settings: Settings = Depends(get_settings),
) -> list[Candle]:
    """Get normalized candles for a symbol."""
    return await fetch_candles(
        provider,
        symbol,
        interval=settings.candle_interval,
        range_=settings.candle_range,
    )


@router.get(
    "/logo",
    summary="Proxy Company Logo",
    description="Stream a logo image from an allow-listed host, preserving the "
    "upstream content type.",
    operation_id="proxy_logo",
    response_class=StreamingResponse,
    responses={
        200: {"content": {"image/*": {}}, "description": "Image bytes"},
        400: {"description": "Missing URL or host not allowed"},
        500: {"description": "Image fetch failed"},
    },
)
async def proxy_logo(
    url: str | None = Query(None, description="Absolute image URL"),
    proxy: LogoProxy = Depends(get_logo_proxy),
) -> StreamingResponse:
    """Proxy an image from an allow-listed host."""
    if not url:
        raise MissingParameter("URL parameter is required.")

    upstream = await proxy.open(url)
    return StreamingResponse(
        proxy.iter_body(upstream),
        media_type=upstream.headers.get("content-type", "application/octet-stream"),
        background=BackgroundTask(upstream.aclose),
    )


@router.get(
    "/market",
    response_model=MarketSummaryResponse,
    summary="Market Summary",
    description="NASDAQ Composite, S&P 500 and Dow Jones levels against their "
    "previous close. An index that cannot be fetched is null; the others are "
    "still returned.",
    operation_id="get_market_summary",
)
async def market_summary(
    provider: ChartProviderInterface = Depends(get_chart_provider),
) -> MarketSummaryResponse:
    """Get the headline index summary."""
    return await get_market_summary(provider)
