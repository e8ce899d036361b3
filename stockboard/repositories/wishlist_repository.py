"""Supabase-backed wishlist repository.

Runs with the service role key, which bypasses row-level security, so the
``user_id`` filter on every query is what scopes access to the caller.
"""
import logging

import httpx
from supabase import AsyncClient, PostgrestAPIError

from stockboard.core.constants import POSTGRES_UNIQUE_VIOLATION
from stockboard.core.exceptions import Conflict, StoreError
from stockboard.repositories.base import (
    WISHLIST_COLUMNS,
    WishlistRepositoryInterface,
    WishlistRow,
)

logger = logging.getLogger(__name__)

DUPLICATE_TICKER_MESSAGE = "Ticker already in wishlist."


class SupabaseWishlistRepository(WishlistRepositoryInterface):
    """Wishlist rows in a Supabase (PostgREST) table."""

    def __init__(self, client: AsyncClient, table: str = "wishlist") -> None:
        self._client = client
        self._table = table

    async def list_for_user(self, user_id: str) -> list[WishlistRow]:
        try:
            response = await (
                self._client.table(self._table)
                .select(WISHLIST_COLUMNS)
                .eq("user_id", user_id)
                .execute()
            )
        except PostgrestAPIError as e:
            logger.error(f"Failed to list wishlist for user {user_id}: {e.message}")
            raise StoreError(e.message or "Failed to load wishlist") from e
        except httpx.HTTPError as e:
            logger.error(f"Wishlist store unreachable: {e}")
            raise StoreError(f"Wishlist store unreachable: {e}") from e

        return list(response.data or [])

    async def add(self, user_id: str, ticker: str) -> WishlistRow:
        try:
            response = await (
                self._client.table(self._table)
                .insert({"user_id": user_id, "ticker_symbol": ticker})
                .execute()
            )
        except PostgrestAPIError as e:
            if e.code == POSTGRES_UNIQUE_VIOLATION:
                logger.info(f"Duplicate wishlist insert for user {user_id}: {ticker}")
                raise Conflict(DUPLICATE_TICKER_MESSAGE) from e
            logger.error(f"Failed to add {ticker} for user {user_id}: {e.message}")
            raise StoreError(e.message or "Failed to add ticker") from e
        except httpx.HTTPError as e:
            logger.error(f"Wishlist store unreachable: {e}")
            raise StoreError(f"Wishlist store unreachable: {e}") from e

        if not response.data:
            raise StoreError("Insert returned no row")
        return response.data[0]

    async def remove(self, user_id: str, ticker: str) -> None:
        try:
            await (
                self._client.table(self._table)
                .delete()
                .eq("user_id", user_id)
                .eq("ticker_symbol", ticker)
                .execute()
            )
        except PostgrestAPIError as e:
            logger.error(f"Failed to remove {ticker} for user {user_id}: {e.message}")
            raise StoreError(e.message or "Failed to remove ticker") from e
        except httpx.HTTPError as e:
            logger.error(f"Wishlist store unreachable: {e}")
            raise StoreError(f"Wishlist store unreachable: {e}") from e
