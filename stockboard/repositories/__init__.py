"""Repository layer for the user wishlist.

Available repositories:
- SupabaseWishlistRepository: production store (Supabase/PostgREST)
- InMemoryWishlistRepository: process-local store for development and tests
"""

from stockboard.repositories.base import (
    WISHLIST_COLUMNS,
    WishlistRepositoryInterface,
    WishlistRow,
)
from stockboard.repositories.memory import InMemoryWishlistRepository
from stockboard.repositories.wishlist_repository import SupabaseWishlistRepository

__all__ = [
    "WISHLIST_COLUMNS",
    "WishlistRepositoryInterface",
    "WishlistRow",
    "InMemoryWishlistRepository",
    "SupabaseWishlistRepository",
]
