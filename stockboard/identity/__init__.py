"""Bearer token verification against an external identity provider.

Available verifiers:
- SupabaseIdentityVerifier: Supabase Auth ``get_user``
- MockIdentityVerifier: token table for development and tests
"""

from stockboard.identity.base import (
    INVALID_TOKEN_MESSAGE,
    NO_TOKEN_MESSAGE,
    AuthenticatedUser,
    IdentityVerifierInterface,
)
from stockboard.identity.mock import MockIdentityVerifier
from stockboard.identity.supabase import SupabaseIdentityVerifier

__all__ = [
    "INVALID_TOKEN_MESSAGE",
    "NO_TOKEN_MESSAGE",
    "AuthenticatedUser",
    "IdentityVerifierInterface",
    "MockIdentityVerifier",
    "SupabaseIdentityVerifier",
]
