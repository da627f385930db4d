"""Core configuration management using Pydantic settings."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import List


# Valid log levels
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

# Upstream options-data lambda
DEFAULT_UPSTREAM_URL = "https://wg2rfvqgbqsxc6ucdfnqldlzoa0buncf.lambda-url.us-east-1.on.aws/"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # API Keys (forwarded upstream as-is, empty when unset)
    polygon_api_key: str = ""

    # Upstream provider
    upstream_url: str = DEFAULT_UPSTREAM_URL
    upstream_timeout_seconds: float = 30.0
    upstream_max_attempts: int = 1  # 1 = no retries

    # Query defaults
    default_limit: int = 20
    default_days_forward: int = 14
    default_ticker: str = "AAPL"

    # Client -> gateway
    proxy_base_url: str = "http://localhost:8000"

    # Logging
    log_level: str = "INFO"

    # API Configuration
    backend_port: int = 8000

    # CORS Configuration
    cors_origins: str = "http://localhost:3000"  # Comma-separated list of allowed origins

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        upper_v = v.upper()
        if upper_v not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {VALID_LOG_LEVELS}")
        return upper_v

    @field_validator('upstream_max_attempts')
    @classmethod
    def validate_max_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("upstream_max_attempts must be at least 1")
        return v

    @field_validator('default_ticker')
    @classmethod
    def normalize_default_ticker(cls, v: str) -> str:
        return v.strip().upper()

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string to list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
