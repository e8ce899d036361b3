"""Schemas for market data endpoints."""
from pydantic import ConfigDict, Field

from stockboard.schemas.base import StrictBaseModel, UpstreamModel


class Candle(StrictBaseModel):
    """One OHLCV bucket in Finnhub's row-oriented candle format.

    Values are passed through from the upstream series untouched, so a
    bucket Yahoo reports as null (e.g. a halted session) stays null.
    """

    t: int = Field(..., description="Bucket start, seconds since epoch")
    o: float | None = Field(None, description="Open price")
    h: float | None = Field(None, description="High price")
    l: float | None = Field(None, description="Low price")  # noqa: E741
    c: float | None = Field(None, description="Close price")
    v: int | None = Field(None, description="Volume")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"t": 1733495400, "o": 242.91, "h": 244.63, "l": 242.08, "c": 242.84, "v": 36870600}
            ]
        }
    }


class SearchMatch(UpstreamModel):
    """A single Finnhub symbol-lookup match.

    Extra upstream fields are kept so the frontend sees what Finnhub sent.
    """

    model_config = ConfigDict(extra="allow")

    description: str | None = None
    displaySymbol: str | None = None  # noqa: N815
    symbol: str | None = None
    type: str | None = None


class SearchResponse(StrictBaseModel):
    """Response for symbol search."""

    result: list[SearchMatch] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "result": [
                        {
                            "description": "APPLE INC",
                            "displaySymbol": "AAPL",
                            "symbol": "AAPL",
                            "type": "Common Stock",
                        }
                    ]
                }
            ]
        }
    }


class IndexSnapshot(StrictBaseModel):
    """Last price of an index against its previous close."""

    price: float
    change: float = Field(..., description="price - previous close, 2 dp")
    percent: float = Field(..., description="change as a percentage of previous close, 2 dp")


class MarketSummaryResponse(StrictBaseModel):
    """Headline US indices. An index whose fetch failed is null."""

    nasdaq: IndexSnapshot | None = None
    sp500: IndexSnapshot | None = None
    dowjones: IndexSnapshot | None = None
