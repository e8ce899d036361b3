"""Wishlist repository interface.

Every operation takes the authenticated user's id as its scope: an
implementation must never read, write or delete rows owned by another user.
Uniqueness of ``(user_id, ticker_symbol)`` is the store's job; the repository
only translates the store's rejection into ``Conflict``.
"""
from abc import ABC, abstractmethod
from typing import Any

WishlistRow = dict[str, Any]

WISHLIST_COLUMNS = "id, ticker_symbol, created_at"


class WishlistRepositoryInterface(ABC):
    """
    Abstract interface for user-scoped wishlist storage.

    Example:
        ```python
        repo = SupabaseWishlistRepository(client, table="wishlist")
        await repo.add(user.id, "MSFT")
        rows = await repo.list_for_user(user.id)
        ```
    """

    @abstractmethod
    async def list_for_user(self, user_id: str) -> list[WishlistRow]:
        """
        Return the user's rows (``id``, ``ticker_symbol``, ``created_at``) in store order.

        Raises:
            StoreError: If the store call fails
        """
        pass

    @abstractmethod
    async def add(self, user_id: str, ticker: str) -> WishlistRow:
        """
        Insert ``(user_id, ticker)`` and return the created row.

        Raises:
            Conflict: If the user already has this ticker
            StoreError: If the store call fails for any other reason
        """
        pass

    @abstractmethod
    async def remove(self, user_id: str, ticker: str) -> None:
        """
        Ensure ``(user_id, ticker)`` is absent.

        Removing a ticker the user does not have is a successful no-op.

        Raises:
            StoreError: If the store call fails
        """
        pass
