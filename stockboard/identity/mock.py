"""Mock identity verifier for local development and tests.

Tokens map to user ids through a fixed table. With no table configured every
non-empty token is accepted as its own user id, which lets a developer run the
frontend against ``AUTH_BACKEND=mock`` with any token.
"""
import logging

from stockboard.core.exceptions import Unauthenticated
from stockboard.identity.base import (
    INVALID_TOKEN_MESSAGE,
    AuthenticatedUser,
    IdentityVerifierInterface,
)

logger = logging.getLogger(__name__)


class MockIdentityVerifier(IdentityVerifierInterface):
    """Token-table verifier. Never use outside development and tests."""

    def __init__(self, tokens: dict[str, str] | None = None) -> None:
        self._tokens = tokens

    @property
    def verifier_name(self) -> str:
        return "mock"

    async def verify_token(self, token: str) -> AuthenticatedUser:
        if self._tokens is None:
            logger.debug("Mock verifier accepting token as user id")
            return AuthenticatedUser(id=token)

        user_id = self._tokens.get(token)
        if user_id is None:
            raise Unauthenticated(INVALID_TOKEN_MESSAGE)
        return AuthenticatedUser(id=user_id)
