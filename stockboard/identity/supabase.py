"""Supabase identity verifier.

Delegates token verification to Supabase Auth's ``get_user`` call, which
validates the JWT server-side (signature, expiry, revocation).
"""
import logging

import httpx
from supabase import AsyncClient, AuthError

from stockboard.core.exceptions import Unauthenticated
from stockboard.identity.base import (
    INVALID_TOKEN_MESSAGE,
    AuthenticatedUser,
    IdentityVerifierInterface,
)

logger = logging.getLogger(__name__)


class SupabaseIdentityVerifier(IdentityVerifierInterface):
    """Verifies access tokens against Supabase Auth."""

    def __init__(self, client: AsyncClient) -> None:
        self._client = client

    @property
    def verifier_name(self) -> str:
        return "supabase"

    async def verify_token(self, token: str) -> AuthenticatedUser:
        try:
            response = await self._client.auth.get_user(token)
        except AuthError as e:
            logger.info(f"Supabase rejected token: {e}")
            raise Unauthenticated(INVALID_TOKEN_MESSAGE) from e
        except httpx.HTTPError as e:
            logger.warning(f"Supabase Auth unreachable: {e}")
            raise Unauthenticated(INVALID_TOKEN_MESSAGE) from e

        user = response.user if response is not None else None
        if user is None:
            raise Unauthenticated(INVALID_TOKEN_MESSAGE)

        return AuthenticatedUser(id=str(user.id), email=user.email)
