"""Application-wide constants.

Values here are fixed by the upstream providers or by the frontend contract,
not tunable per deployment (those live in ``stockboard.core.config``).
"""

MARKET_INDICES: dict[str, str] = {
    "nasdaq": "^IXIC",  # NASDAQ Composite
    "sp500": "^GSPC",  # S&P 500
    "dowjones": "^DJI",  # Dow Jones Industrial Average
}
"""Front-page summary keys mapped to Yahoo index symbols."""

POSTGRES_UNIQUE_VIOLATION = "23505"
"""SQLSTATE the store reports when a (user_id, ticker_symbol) row already exists."""
