"""API endpoints for the per-user wishlist.

Every route requires a bearer token; rows are always scoped to the
authenticated user's id.
"""
from fastapi import APIRouter, Depends, status

from stockboard.core.deps import CurrentUser, get_wishlist_repository
from stockboard.core.exceptions import InvalidParameter, MissingParameter
from stockboard.repositories import WishlistRepositoryInterface
from stockboard.schemas.wishlist import (
    MessageResponse,
    WishlistAddResponse,
    WishlistItem,
    WishlistTickerRequest,
)
from stockboard.utils.structured_logging import get_logger
from stockboard.utils.validation import is_valid_symbol, normalize_symbol

router = APIRouter()
logger = get_logger(__name__)


def _ticker_from(request: WishlistTickerRequest | None) -> str:
    """Pull the ticker out of a request body, normalized."""
    if request is None or request.ticker is None or not request.ticker.strip():
        raise MissingParameter("Ticker symbol is required.")
    ticker = normalize_symbol(request.ticker)
    if not is_valid_symbol(ticker):
        raise InvalidParameter(f"Invalid symbol format: {ticker}")
    return ticker


@router.get(
    "",
    response_model=list[WishlistItem],
    summary="Get Wishlist",
    description="All wishlist rows for the current user, in store order.",
    operation_id="get_wishlist",
    responses={401: {"description": "Missing or invalid bearer token"}},
)
async def get_wishlist(
    user: CurrentUser,
    repo: WishlistRepositoryInterface = Depends(get_wishlist_repository),
) -> list[WishlistItem]:
    """Get the current user's wishlist."""
    rows = await repo.list_for_user(user.id)
    return [WishlistItem.model_validate(row) for row in rows]


@router.post(
    "",
    response_model=WishlistAddResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add Ticker",
    description="Add a ticker to the current user's wishlist. Adding a ticker "
    "that is already present returns 409.",
    operation_id="add_to_wishlist",
    responses={
        400: {"description": "Ticker missing"},
        401: {"description": "Missing or invalid bearer token"},
        409: {"description": "Ticker already in wishlist"},
    },
)
async def add_to_wishlist(
    user: CurrentUser,
    repo: WishlistRepositoryInterface = Depends(get_wishlist_repository),
    request: WishlistTickerRequest | None = None,
) -> WishlistAddResponse:
    """Add a ticker to the current user's wishlist."""
    ticker = _ticker_from(request)
    row = await repo.add(user.id, ticker)
    logger.info("Wishlist ticker added", user_id=user.id, ticker=ticker)
    return WishlistAddResponse(
        message="Ticker added to wishlist!",
        data=WishlistItem.model_validate(row),
    )


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Remove Ticker",
    description="Remove a ticker from the current user's wishlist. Removing a "
    "ticker that is not present still succeeds.",
    operation_id="remove_from_wishlist",
    responses={
        400: {"description": "Ticker missing"},
        401: {"description": "Missing or invalid bearer token"},
    },
)
async def remove_from_wishlist(
    user: CurrentUser,
    repo: WishlistRepositoryInterface = Depends(get_wishlist_repository),
    request: WishlistTickerRequest | None = None,
) -> MessageResponse:
    """Remove a ticker from the current user's wishlist."""
    ticker = _ticker_from(request)
    await repo.remove(user.id, ticker)
    logger.info("Wishlist ticker removed", user_id=user.id, ticker=ticker)
    return MessageResponse(message="Ticker removed from wishlist.")
