"""Identity verification interface.

Bearer tokens are issued by an external identity provider; this service never
mints or decodes them itself. A verifier turns a token into the identity the
provider vouches for, or rejects it.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass

NO_TOKEN_MESSAGE = "No token provided. You must be logged in."
INVALID_TOKEN_MESSAGE = "Invalid or expired token."


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity resolved from a verified bearer token. Lives for one request."""

    id: str
    email: str | None = None


class IdentityVerifierInterface(ABC):
    """
    Abstract interface for bearer token verification.

    Implementations (Supabase, Mock) must raise ``Unauthenticated`` with
    ``INVALID_TOKEN_MESSAGE`` when the provider rejects the token or resolves
    it to no user.
    """

    @property
    @abstractmethod
    def verifier_name(self) -> str:
        """Return the name of this verifier (e.g., 'supabase')."""
        pass

    @abstractmethod
    async def verify_token(self, token: str) -> AuthenticatedUser:
        """
        Resolve a bearer token to the user it belongs to.

        Args:
            token: Raw token from the Authorization header (without "Bearer ")

        Returns:
            AuthenticatedUser for the token's subject

        Raises:
            Unauthenticated: If the token is invalid, expired or unknown
        """
        pass
