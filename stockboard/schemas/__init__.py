"""Pydantic schemas for API request/response validation.

This module exports all Pydantic schemas used throughout the application.
"""

from stockboard.schemas.base import StrictBaseModel, UpstreamModel
from stockboard.schemas.market import (
    Candle,
    IndexSnapshot,
    MarketSummaryResponse,
    SearchMatch,
    SearchResponse,
)
from stockboard.schemas.wishlist import (
    MessageResponse,
    WishlistAddResponse,
    WishlistItem,
    WishlistTickerRequest,
)

__all__ = [
    "StrictBaseModel",
    "UpstreamModel",
    "Candle",
    "IndexSnapshot",
    "MarketSummaryResponse",
    "SearchMatch",
    "SearchResponse",
    "MessageResponse",
    "WishlistAddResponse",
    "WishlistItem",
    "WishlistTickerRequest",
]
