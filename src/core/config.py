"""Application configuration using pydantic-settings."""
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database - SQLite by default, PostgreSQL via postgresql+asyncpg://
    database_url: str = "sqlite+aiosqlite:///./urlhaus.db"

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(
        default="http://localhost:3000",
        validation_alias="CORS_ORIGINS",
    )

    # URLhaus upstream feed
    urlhaus_auth_key: str = Field(default="", validation_alias="URLHAUS_AUTH_KEY")
    urlhaus_api_url: str = Field(
        default="https://urlhaus-api.abuse.ch/v1",
        validation_alias="URLHAUS_API_URL",
    )
    urlhaus_timeout_seconds: float = Field(
        default=10.0, validation_alias="URLHAUS_TIMEOUT_SECONDS",
    )

    # Feed proxy rate limiting (per client, per endpoint)
    feed_rate_limit_requests: int = Field(
        default=10, gt=0, validation_alias="FEED_RATE_LIMIT_REQUESTS",
    )
    feed_rate_limit_window_ms: int = Field(
        default=60_000, gt=0, validation_alias="FEED_RATE_LIMIT_WINDOW_MS",
    )
    rate_limit_sweep_interval_seconds: float = Field(
        default=300.0, gt=0, validation_alias="RATE_LIMIT_SWEEP_INTERVAL_SECONDS",
    )

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        return v.upper()

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
