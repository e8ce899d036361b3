"""Unit tests for bearer token verifiers.

The Supabase client is replaced with ``unittest.mock`` doubles; no network
calls are made.
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from supabase import AuthError

from stockboard.core.exceptions import Unauthenticated
from stockboard.identity import (
    INVALID_TOKEN_MESSAGE,
    AuthenticatedUser,
    MockIdentityVerifier,
    SupabaseIdentityVerifier,
)


def _supabase_client(get_user: AsyncMock) -> MagicMock:
    client = MagicMock()
    client.auth.get_user = get_user
    return client


class TestSupabaseIdentityVerifier:
    """Tests for SupabaseIdentityVerifier."""

    def test_verifier_name(self) -> None:
        assert SupabaseIdentityVerifier(MagicMock()).verifier_name == "supabase"

    @pytest.mark.asyncio
    async def test_valid_token(self) -> None:
        user = SimpleNamespace(id="2f1c0e9a-3b8d-4c55-9d0b-6a7e2f1c0e9a", email="ada@example.com")
        get_user = AsyncMock(return_value=SimpleNamespace(user=user))
        verifier = SupabaseIdentityVerifier(_supabase_client(get_user))

        result = await verifier.verify_token("jwt-token")

        get_user.assert_awaited_once_with("jwt-token")
        assert result == AuthenticatedUser(
            id="2f1c0e9a-3b8d-4c55-9d0b-6a7e2f1c0e9a", email="ada@example.com"
        )

    @pytest.mark.asyncio
    async def test_rejected_token(self) -> None:
        get_user = AsyncMock(side_effect=AuthError("invalid JWT", None))
        verifier = SupabaseIdentityVerifier(_supabase_client(get_user))

        with pytest.raises(Unauthenticated) as exc_info:
            await verifier.verify_token("expired")

        assert exc_info.value.message == INVALID_TOKEN_MESSAGE
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [httpx.ConnectError("auth down"), httpx.ReadTimeout("auth timed out")],
    )
    async def test_unreachable_auth_is_unauthenticated(self, error) -> None:
        verifier = SupabaseIdentityVerifier(_supabase_client(AsyncMock(side_effect=error)))

        with pytest.raises(Unauthenticated) as exc_info:
            await verifier.verify_token("token")

        assert exc_info.value.message == INVALID_TOKEN_MESSAGE
        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response",[None, SimpleNamespace(user=None)])
    async def test_no_user_is_rejected(self, response) -> None:
        verifier = SupabaseIdentityVerifier(_supabase_client(AsyncMock(return_value=response)))

        with pytest.raises(Unauthenticated, match="Invalid or expired token"):
            await verifier.verify_token("token")


class TestMockIdentityVerifier:
    """Tests for MockIdentityVerifier."""

    @pytest.mark.asyncio
    async def test_token_table(self) -> None:
        verifier = MockIdentityVerifier({"token-a": "user-a"})

        assert await verifier.verify_token("token-a") == AuthenticatedUser(id="user-a")
        with pytest.raises(Unauthenticated):
            await verifier.verify_token("token-b")

    @pytest.mark.asyncio
    async def test_without_table_token_is_user_id(self) -> None:
        verifier = MockIdentityVerifier()

        assert verifier.verifier_name == "mock"
        assert (await verifier.verify_token("dev-user")).id == "dev-user"
