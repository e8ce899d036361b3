"""In-memory wishlist repository for local development and tests.

Mirrors the store's contract, including the ``(user_id, ticker_symbol)``
uniqueness constraint, so route behaviour matches production.
"""
import itertools
from datetime import datetime, timezone

from stockboard.core.exceptions import Conflict
from stockboard.repositories.base import WishlistRepositoryInterface, WishlistRow
from stockboard.repositories.wishlist_repository import DUPLICATE_TICKER_MESSAGE


class InMemoryWishlistRepository(WishlistRepositoryInterface):
    """Process-local wishlist table. Rows are lost on restart."""

    def __init__(self) -> None:
        self._rows: list[WishlistRow] = []
        self._ids = itertools.count(1)

    async def list_for_user(self, user_id: str) -> list[WishlistRow]:
        return [
            {"id": row["id"], "ticker_symbol": row["ticker_symbol"], "created_at": row["created_at"]}
            for row in self._rows
            if row["user_id"] == user_id
        ]

    async def add(self, user_id: str, ticker: str) -> WishlistRow:
        for row in self._rows:
            if row["user_id"] == user_id and row["ticker_symbol"] == ticker:
                raise Conflict(DUPLICATE_TICKER_MESSAGE)

        row = {
            "id": next(self._ids),
            "user_id": user_id,
            "ticker_symbol": ticker,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        self._rows.append(row)
        return dict(row)

    async def remove(self, user_id: str, ticker: str) -> None:
        self._rows = [
            row
            for row in self._rows
            if not (row["user_id"] == user_id and row["ticker_symbol"] == ticker)
        ]
