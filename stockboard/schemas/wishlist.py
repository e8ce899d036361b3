"""Schemas for Wishlist API."""
from pydantic import BaseModel, ConfigDict, Field

from stockboard.schemas.base import StrictBaseModel, UpstreamModel


class WishlistTickerRequest(BaseModel):
    """Body of POST/DELETE /wishlist.

    ``ticker`` is optional at the schema level so a missing value surfaces
    as a 400 with our error body instead of FastAPI's 422.
    """

    model_config = ConfigDict(extra="ignore")

    ticker: str | None = Field(None, description="Ticker symbol, e.g. MSFT")


class WishlistItem(UpstreamModel):
    """A wishlist row as returned by the store.

    Columns beyond these (e.g. user_id) are dropped from responses.
    """

    id: int | str = Field(..., description="Store-assigned identifier")
    ticker_symbol: str
    created_at: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"id": 42, "ticker_symbol": "MSFT", "created_at": "2025-11-03T14:22:05.123+00:00"}
            ]
        }
    )


class WishlistAddResponse(StrictBaseModel):
    message: str
    data: WishlistItem


class MessageResponse(StrictBaseModel):
    message: str
