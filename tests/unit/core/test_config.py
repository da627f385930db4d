"""Unit tests for Settings."""
import pytest
from pydantic import ValidationError

from options_viewer.core.config import DEFAULT_UPSTREAM_URL, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("POLYGON_API_KEY", "LOG_LEVEL", "DEFAULT_TICKER", "UPSTREAM_MAX_ATTEMPTS", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.unit
class TestSettings:
    """Test Settings loading and validation."""

    def test_defaults(self):
        """✅ Defaults need no environment."""
        settings = Settings(_env_file=None)

        assert settings.polygon_api_key == ""
        assert settings.upstream_url == DEFAULT_UPSTREAM_URL
        assert settings.default_limit == 20
        assert settings.default_days_forward == 14
        assert settings.default_ticker == "AAPL"
        assert settings.upstream_max_attempts == 1

    def test_from_environment(self, monkeypatch):
        """✅ Values read from environment, case-insensitive."""
        monkeypatch.setenv("POLYGON_API_KEY", "abc")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("DEFAULT_TICKER", " msft ")

        settings = Settings(_env_file=None)

        assert settings.polygon_api_key == "abc"
        assert settings.log_level == "DEBUG"
        assert settings.default_ticker == "MSFT"

    def test_invalid_log_level(self, monkeypatch):
        """❌ Unknown log level → ValidationError."""
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_invalid_max_attempts(self, monkeypatch):
        """❌ Zero attempts → ValidationError."""
        monkeypatch.setenv("UPSTREAM_MAX_ATTEMPTS", "0")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_cors_origins_list(self, monkeypatch):
        """✅ Comma-separated origins parsed."""
        monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")

        assert Settings(_env_file=None).cors_origins_list == ["http://a.test", "http://b.test"]
