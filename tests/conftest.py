"""Shared pytest fixtures for testing infrastructure.

CRITICAL: Environment variables MUST be set before ANY imports.
"""
import os

# ===============================================================================
# CRITICAL: Set test environment variables FIRST, before ANY other imports!
# Settings is cached on first use and the app module reads it at import time.
# ===============================================================================
os.environ["ENVIRONMENT"] = "test"
os.environ["MARKET_DATA_PROVIDER"] = "live"
os.environ["FINNHUB_API_KEY"] = "test-finnhub-key"
os.environ["AUTH_BACKEND"] = "mock"
os.environ["LOG_LEVEL"] = "WARNING"

# Now import everything else AFTER environment is configured
from collections.abc import AsyncGenerator, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from stockboard.core.config import Settings, get_settings
from stockboard.core.deps import (
    get_http_client,
    get_identity_verifier,
    get_wishlist_repository,
)
from stockboard.identity import MockIdentityVerifier
from stockboard.repositories import InMemoryWishlistRepository
from stockboard.utils.structured_logging import configure_structured_logging


USER_A_TOKEN = "token-user-a"
USER_B_TOKEN = "token-user-b"
USER_A_ID = "9c1d7a8e-0000-4000-8000-00000000000a"
USER_B_ID = "9c1d7a8e-0000-4000-8000-00000000000b"


class UpstreamStub:
    """Routes outbound requests to canned responses and records them.

    Handlers are keyed by ``(host, path)`` and called with the request, so
    every request gets a fresh ``httpx.Response``. A handler routed with
    ``path=None`` catches every path on its host. Unrouted requests fail as
    a connection error.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[
            tuple[str, str | None], Callable[[httpx.Request], httpx.Response]
        ] = {}

    def route(
        self,
        host: str,
        path: str | None,
        handler: Callable[[httpx.Request], httpx.Response],
    ) -> None:
        self._routes[(host, path)] = handler

    def json(self, host: str, path: str, payload: Any, status_code: int = 200) -> None:
        self.route(host, path, lambda request: httpx.Response(status_code, json=payload))

    def requests_to(self, host: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.url.host == host]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self._routes.get((request.url.host, request.url.path)) or self._routes.get(
            (request.url.host, None)
        )
        if handler is None:
            raise httpx.ConnectError(f"No route for {request.url}", request=request)
        return handler(request)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings: live providers against stubbed hosts, mock identity.

    Returns:
        Settings: Test configuration
    """
    return Settings(
        environment="test",
        market_data_provider="live",
        finnhub_api_key="test-finnhub-key",
        auth_backend="mock",
        log_level="WARNING",
    )


@pytest.fixture(scope="session", autouse=True)
def configure_logging(test_settings: Settings):
    """Configure structured logging for tests."""
    configure_structured_logging(log_level=test_settings.log_level)


@pytest.fixture
def upstream() -> UpstreamStub:
    """Outbound request stub shared by every provider in a test."""
    return UpstreamStub()


@pytest.fixture
def http_client(upstream: UpstreamStub) -> httpx.AsyncClient:
    """httpx client whose transport is the upstream stub."""
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))


@pytest.fixture
def identity_verifier() -> MockIdentityVerifier:
    """Verifier that knows exactly two users."""
    return MockIdentityVerifier({USER_A_TOKEN: USER_A_ID, USER_B_TOKEN: USER_B_ID})


@pytest.fixture
def wishlist_repository() -> InMemoryWishlistRepository:
    """Fresh, empty wishlist store per test."""
    return InMemoryWishlistRepository()


@pytest.fixture
def user_a_id() -> str:
    return USER_A_ID


@pytest.fixture
def user_b_id() -> str:
    return USER_B_ID


@pytest.fixture
def user_a_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {USER_A_TOKEN}"}


@pytest.fixture
def user_b_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {USER_B_TOKEN}"}


@pytest.fixture
def app(test_settings, http_client, identity_verifier, wishlist_repository):
    """Create FastAPI test application with dependency overrides.

    Returns:
        FastAPI: Test application instance
    """
    from stockboard.main import app as main_app

    # Override dependencies
    main_app.dependency_overrides[get_settings] = lambda: test_settings
    main_app.dependency_overrides[get_http_client] = lambda: http_client
    main_app.dependency_overrides[get_identity_verifier] = lambda: identity_verifier
    main_app.dependency_overrides[get_wishlist_repository] = lambda: wishlist_repository

    yield main_app

    # Clean up overrides
    main_app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    """Create synchronous test client.

    Returns:
        TestClient: Synchronous test client
    """
    return TestClient(app)


@pytest_asyncio.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client.

    Yields:
        AsyncClient: Async test client
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client


# Common upstream payload fixtures
@pytest.fixture
def chart_payload() -> Callable[..., dict[str, Any]]:
    """Factory for Yahoo v8 chart bodies.

    Returns:
        Callable building ``{"chart": {"result": [...], "error": None}}``
    """

    def _build(
        timestamps: list[int],
        opens: list[float | None],
        highs: list[float | None],
        lows: list[float | None],
        closes: list[float | None],
        volumes: list[int | None],
        meta: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        return {
            "chart": {
                "result": [
                    {
                        "meta": meta or {"symbol": "AAPL", "currency": "USD"},
                        "timestamp": timestamps,
                        "indicators": {
                            "quote": [
                                {
                                    "open": opens,
                                    "high": highs,
                                    "low": lows,
                                    "close": closes,
                                    "volume": volumes,
                                }
                            ]
                        },
                    }
                ],
                "error": None,
            }
        }

    return _build


@pytest.fixture
def aapl_chart(chart_payload) -> dict[str, Any]:
    """Two daily AAPL buckets."""
    return chart_payload(
        timestamps=[1700000000, 1700086400],
        opens=[10.0, 11.0],
        highs=[12.0, 13.0],
        lows=[9.0, 10.0],
        closes=[11.0, 12.0],
        volumes=[100, 200],
    )


@pytest.fixture
def index_chart() -> Callable[[float, float | None], dict[str, Any]]:
    """Factory for a one-day index chart carrying only meta."""

    def _build(price: float, previous_close: float | None) -> dict[str, Any]:
        return {
            "chart": {
                "result": [
                    {
                        "meta": {
                            "currency": "USD",
                            "regularMarketPrice": price,
                            "previousClose": previous_close,
                        },
                        "timestamp": [],
                        "indicators": {"quote": [{}]},
                    }
                ],
                "error": None,
            }
        }

    return _build


@pytest.fixture
def chart_not_found() -> dict[str, Any]:
    """Yahoo's body for an unknown symbol (served with HTTP 404)."""
    return {
        "chart": {
            "result": None,
            "error": {"code": "Not Found", "description": "No data found, symbol may be delisted"},
        }
    }
