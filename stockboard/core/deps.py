"""Dependency injection for FastAPI endpoints.

This module provides dependency functions for shared collaborators: the
outbound HTTP client, market data providers, the identity verifier and the
wishlist repository. Route handlers receive them through ``Depends`` and tests
substitute them through ``app.dependency_overrides``.

Long-lived clients (httpx connection pool, Supabase client) are process-wide
singletons created lazily behind an ``asyncio.Lock`` and closed by the
application lifespan.
"""
import asyncio
import logging
from typing import Annotated

import httpx
from fastapi import Depends, Query, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import AsyncClient, acreate_client

from stockboard.core.config import Settings, get_settings
from stockboard.core.exceptions import InvalidParameter, MissingParameter, Unauthenticated
from stockboard.identity import (
    NO_TOKEN_MESSAGE,
    AuthenticatedUser,
    IdentityVerifierInterface,
    MockIdentityVerifier,
    SupabaseIdentityVerifier,
)
from stockboard.providers import (
    ChartProviderInterface,
    FinnhubProvider,
    LogoProxy,
    MockChartProvider,
    MockQuoteProvider,
    QuoteProviderInterface,
    YahooChartProvider,
)
from stockboard.repositories import (
    InMemoryWishlistRepository,
    SupabaseWishlistRepository,
    WishlistRepositoryInterface,
)
from stockboard.utils.validation import is_valid_symbol, normalize_symbol

logger = logging.getLogger(__name__)

AppSettings = Annotated[Settings, Depends(get_settings)]


# HTTP client singleton with thread-safe initialization
_http_client: httpx.AsyncClient | None = None
_http_client_lock = asyncio.Lock()


async def get_http_client() -> httpx.AsyncClient:
    """Get the shared outbound HTTP client.

    Each connect/read/write phase is bounded by ``upstream_timeout_seconds``;
    providers additionally bound each whole call by the same value.

    Returns:
        httpx.AsyncClient: Singleton client
    """
    global _http_client
    if _http_client is None:
        async with _http_client_lock:
            # Check again after acquiring lock (double-check locking pattern)
            if _http_client is None:
                settings = get_settings()
                _http_client = httpx.AsyncClient(
                    timeout=httpx.Timeout(settings.upstream_timeout_seconds),
                    headers={"User-Agent": settings.upstream_user_agent},
                )
    return _http_client


async def cleanup_http_client() -> None:
    """Close the shared HTTP client on application shutdown."""
    global _http_client
    if _http_client is not None:
        try:
            await _http_client.aclose()
        except Exception as e:
            logger.warning(f"Error closing HTTP client: {e}")
        finally:
            _http_client = None


async def get_quote_provider(
    settings: AppSettings,
    client: httpx.AsyncClient = Depends(get_http_client),
) -> QuoteProviderInterface:
    """Get the search/profile/quote provider based on configuration.

    - "live": FinnhubProvider (API key from FINNHUB_API_KEY)
    - "mock": MockQuoteProvider (fake data)

    Raises:
        ValueError: If provider type is unknown
    """
    if settings.market_data_provider == "live":
        return FinnhubProvider(
            client,
            api_key=settings.finnhub_api_key,
            base_url=settings.finnhub_base_url,
            deadline=settings.upstream_timeout_seconds,
        )
    elif settings.market_data_provider == "mock":
        return MockQuoteProvider()
    else:
        raise ValueError(
            f"Unknown market data provider: {settings.market_data_provider}. "
            "Valid options: 'live', 'mock'"
        )


async def get_chart_provider(
    settings: AppSettings,
    client: httpx.AsyncClient = Depends(get_http_client),
) -> ChartProviderInterface:
    """Get the price history provider based on configuration.

    - "live": YahooChartProvider
    - "mock": MockChartProvider

    Raises:
        ValueError: If provider type is unknown
    """
    if settings.market_data_provider == "live":
        return YahooChartProvider(
            client,
            base_url=settings.yahoo_chart_base_url,
            deadline=settings.upstream_timeout_seconds,
        )
    elif settings.market_data_provider == "mock":
        return MockChartProvider()
    else:
        raise ValueError(
            f"Unknown market data provider: {settings.market_data_provider}. "
            "Valid options: 'live', 'mock'"
        )


async def get_logo_proxy(
    settings: AppSettings,
    client: httpx.AsyncClient = Depends(get_http_client),
) -> LogoProxy:
    """Get the allow-listed logo proxy."""
    return LogoProxy(
        client,
        allowed_hosts=settings.logo_allowed_hosts,
        deadline=settings.upstream_timeout_seconds,
    )


# Supabase client singleton with thread-safe initialization
_supabase_client: AsyncClient | None = None
_supabase_client_lock = asyncio.Lock()


async def get_supabase_client() -> AsyncClient:
    """Get the Supabase client (singleton with thread-safe initialization).

    Authenticated with the service role key; callers are responsible for
    scoping every table query to the requesting user.

    Raises:
        ValueError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is missing
    """
    global _supabase_client
    if _supabase_client is None:
        async with _supabase_client_lock:
            if _supabase_client is None:
                settings = get_settings()
                if not settings.supabase_url or not settings.supabase_service_role_key:
                    raise ValueError(
                        "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set "
                        "when AUTH_BACKEND=supabase"
                    )
                _supabase_client = await acreate_client(
                    settings.supabase_url, settings.supabase_service_role_key
                )
    return _supabase_client


async def cleanup_supabase_client() -> None:
    """Drop the Supabase client on application shutdown."""
    global _supabase_client
    if _supabase_client is not None:
        try:
            await _supabase_client.postgrest.aclose()
        except Exception as e:
            logger.warning(f"Error closing Supabase client: {e}")
        finally:
            _supabase_client = None


# Mock backend singletons: the in-memory store must outlive a single request
_mock_identity_verifier = MockIdentityVerifier()
_mock_wishlist_repository = InMemoryWishlistRepository()


async def get_identity_verifier(settings: AppSettings) -> IdentityVerifierInterface:
    """Get the bearer token verifier based on AUTH_BACKEND.

    - "supabase": SupabaseIdentityVerifier
    - "mock": MockIdentityVerifier (accepts any token as its own user id)

    Raises:
        ValueError: If backend type is unknown
    """
    if settings.auth_backend == "supabase":
        return SupabaseIdentityVerifier(await get_supabase_client())
    elif settings.auth_backend == "mock":
        return _mock_identity_verifier
    else:
        raise ValueError(
            f"Unknown auth backend: {settings.auth_backend}. Valid options: 'supabase', 'mock'"
        )


async def get_wishlist_repository(settings: AppSettings) -> WishlistRepositoryInterface:
    """Get the wishlist repository based on AUTH_BACKEND.

    Raises:
        ValueError: If backend type is unknown
    """
    if settings.auth_backend == "supabase":
        return SupabaseWishlistRepository(await get_supabase_client(), table=settings.wishlist_table)
    elif settings.auth_backend == "mock":
        return _mock_wishlist_repository
    else:
        raise ValueError(
            f"Unknown auth backend: {settings.auth_backend}. Valid options: 'supabase', 'mock'"
        )


async def get_validated_symbol(
    symbol: str | None = Query(None, description="Ticker symbol, e.g. AAPL"),
) -> str:
    """Validate and normalize the ``symbol`` query parameter.

    Returns:
        Normalized symbol (uppercase, trimmed)

    Raises:
        MissingParameter: If the symbol is absent or blank
        InvalidParameter: If the symbol format is invalid
    """
    if symbol is None or not symbol.strip():
        raise MissingParameter("Missing symbol")
    symbol = normalize_symbol(symbol)
    if not is_valid_symbol(symbol):
        raise InvalidParameter(f"Invalid symbol format: {symbol}")
    return symbol


_bearer_scheme = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Security(_bearer_scheme),
) -> str:
    """Extract the bearer token from the Authorization header.

    Resolved before the verifier so a request without a token is rejected
    without touching the identity provider.

    Raises:
        Unauthenticated: If the header is missing or not a Bearer credential
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated(NO_TOKEN_MESSAGE)
    return credentials.credentials


async def get_current_user(
    token: str = Depends(get_bearer_token),
    verifier: IdentityVerifierInterface = Depends(get_identity_verifier),
) -> AuthenticatedUser:
    """Resolve the request's bearer token to an authenticated user.

    Use as a dependency on every wishlist route.

    Raises:
        Unauthenticated: If the token is missing, invalid or expired
    """
    return await verifier.verify_token(token)


CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
