"""Unit tests for application configuration.

Tests the Settings class in stockboard.core.config, ensuring config fields
have correct default values and read from the environment.
"""
from stockboard.core.config import Settings, get_settings


class TestSettingsDefaults:
    """Tests for Settings default values."""

    def test_upstream_defaults(self, monkeypatch) -> None:
        """Test upstream endpoints and the outbound deadline defaults."""
        monkeypatch.delenv("FINNHUB_API_KEY", raising=False)
        settings = Settings()
        assert settings.finnhub_base_url == "https://finnhub.io/api/v1"
        assert settings.yahoo_chart_base_url == "https://query1.finance.yahoo.com/v8/finance/chart"
        assert settings.upstream_timeout_seconds == 10.0
        assert settings.finnhub_api_key == ""

    def test_candle_window_defaults(self) -> None:
        """Test candles default to six months of daily buckets."""
        settings = Settings()
        assert settings.candle_interval == "1d"
        assert settings.candle_range == "6mo"

    def test_logo_allow_list_defaults(self) -> None:
        """Test the logo proxy only allows Finnhub hosts by default."""
        settings = Settings()
        assert settings.logo_allowed_hosts == ["finnhub.io", "*.finnhub.io"]

    def test_backend_defaults(self, monkeypatch) -> None:
        """Test production backends are the defaults."""
        monkeypatch.delenv("AUTH_BACKEND", raising=False)
        monkeypatch.delenv("MARKET_DATA_PROVIDER", raising=False)
        settings = Settings()
        assert settings.auth_backend == "supabase"
        assert settings.market_data_provider == "live"
        assert settings.wishlist_table == "wishlist"
        assert settings.api_prefix == "/api"


class TestSettingsEnvironment:
    """Tests for reading settings from environment variables."""

    def test_reads_environment_case_insensitively(self, monkeypatch) -> None:
        monkeypatch.setenv("supabase_url", "https://project.supabase.co")
        monkeypatch.setenv("UPSTREAM_TIMEOUT_SECONDS", "2.5")
        settings = Settings()
        assert settings.supabase_url == "https://project.supabase.co"
        assert settings.upstream_timeout_seconds == 2.5

    def test_environment_flags(self) -> None:
        assert Settings(environment="development").is_development
        assert Settings(environment="Production").is_production
        assert not Settings(environment="test").is_development


class TestGetSettings:
    """Tests for get_settings() function."""

    def test_get_settings_returns_settings_instance(self) -> None:
        """Test that get_settings() returns a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_is_cached(self) -> None:
        """Test that get_settings() returns the same cached instance."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2
