"""Configuration management using Pydantic v2 settings.
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application
    app_name: str = Field(default="Stockboard API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    environment: str = Field(
        default="development", description="Environment (development, production, test)"
    )

    # API
    api_prefix: str = Field(default="/api", description="API route prefix")
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001", "http://localhost:5173"],
        description="Allowed CORS origins",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")

    # Market Data Provider Configuration
    market_data_provider: str = Field(
        default="live",
        description="Market data provider: 'live' (Finnhub + Yahoo) or 'mock'"
    )

    # Finnhub (search, profile, quote)
    finnhub_api_key: str = Field(default="", description="Finnhub API token")
    finnhub_base_url: str = Field(
        default="https://finnhub.io/api/v1", description="Finnhub REST base URL"
    )

    # Yahoo Finance (chart history, index summary)
    yahoo_chart_base_url: str = Field(
        default="https://query1.finance.yahoo.com/v8/finance/chart",
        description="Yahoo Finance chart endpoint base URL",
    )
    candle_interval: str = Field(default="1d", description="Candle bucket size")
    candle_range: str = Field(default="6mo", description="Candle history window")

    # Outbound HTTP
    upstream_timeout_seconds: float = Field(
        default=10.0, description="Deadline in seconds for every outbound upstream call"
    )
    upstream_user_agent: str = Field(
        default="Mozilla/5.0 (compatible; stockboard/1.0)",
        description="User-Agent sent upstream (Yahoo rejects empty agents)",
    )

    # Logo proxy
    logo_allowed_hosts: list[str] = Field(
        default=["finnhub.io", "*.finnhub.io"],
        description="Host patterns (fnmatch syntax) the logo proxy may fetch from",
    )

    # Identity and wishlist storage
    auth_backend: str = Field(
        default="supabase",
        description="Identity/storage backend: 'supabase' for production, 'mock' for local dev",
    )
    supabase_url: str = Field(default="", description="Supabase project URL")
    supabase_service_role_key: str = Field(
        default="", description="Supabase service role key (server-side secret)"
    )
    wishlist_table: str = Field(default="wishlist", description="Wishlist table name")

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Application settings
    """
    return Settings()
