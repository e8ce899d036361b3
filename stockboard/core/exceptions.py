"""Core exception classes for the Stockboard application.

Every exception carries the HTTP status it maps to, so the application-level
handler in ``stockboard.main`` can render it as ``{"error": message}``.
"""


class StockboardError(Exception):
    """Base exception for all handled application failures."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingParameter(StockboardError):
    """Raised when a required request parameter is absent."""

    status_code = 400


class InvalidParameter(StockboardError):
    """Raised when a request parameter is present but not acceptable."""

    status_code = 400


class Unauthenticated(StockboardError):
    """Raised when a bearer token is missing or cannot be verified."""

    status_code = 401


class UpstreamDataShapeError(StockboardError):
    """Raised when an upstream payload lacks the expected structure."""

    status_code = 404


class Conflict(StockboardError):
    """Raised when the store rejects a duplicate row."""

    status_code = 409


class UpstreamError(StockboardError):
    """Raised when an outbound call to a market data provider fails."""

    status_code = 500

    def __init__(self, message: str, upstream_status: int | None = None) -> None:
        super().__init__(message)
        self.upstream_status = upstream_status


class StoreError(StockboardError):
    """Raised when the external wishlist store fails."""

    status_code = 500
