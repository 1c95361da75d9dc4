# wararka/config.py
"""
Centralized configuration with validation.

Uses pydantic-settings to load and validate all environment variables at startup.
Optional provider credentials may be absent; the services that need them
degrade (empty fetch, pass-through translation) unless STRICT_CONFIG is set.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Database
    DATABASE_URL: str = Field(
        ...,
        description="PostgreSQL connection URL (Supabase or plain Postgres)",
    )

    # News provider
    NEWS_API_KEY: str | None = Field(
        default=None,
        description="NewsAPI.org key used by the refresh pipeline",
    )
    NEWS_API_PAGE_SIZE: int = Field(
        default=12,
        ge=1,
        le=100,
        description="Articles requested per topic bucket",
    )
    ENABLE_FULL_ARTICLE_SCRAPE: bool = Field(
        default=False,
        description="Replace provider previews with text scraped from the source page",
    )

    # Translation
    GOOGLE_TRANSLATE_KEY: str | None = Field(
        default=None,
        description="Google Cloud Translation API key",
    )
    TRANSLATE_TARGET_LANGUAGE: str = Field(
        default="so",
        description="Secondary language code for title_so/content_so",
    )

    # Refresh trigger
    CRON_SECRET: str | None = Field(
        default=None,
        description="Bearer secret required by /api/cron/update-news when set",
    )
    REFRESH_LEASE_TTL_SECONDS: int = Field(
        default=600,
        ge=1,
        description="How long a refresh run may hold the advisory lease",
    )
    STRICT_CONFIG: bool = Field(
        default=False,
        description="Raise on missing provider credentials instead of degrading",
    )

    # Scheduler
    SCHEDULER_ENABLED: bool = Field(
        default=True,
        description="Register the in-process daily refresh job on startup",
    )
    REFRESH_HOUR_UTC: int = Field(
        default=0,
        ge=0,
        le=23,
        description="Hour of day (UTC) for the daily refresh",
    )
    STARTUP_REFRESH_DELAY_SECONDS: int = Field(
        default=5,
        ge=0,
        description="Delay before the warm-up refresh after startup",
    )
    APP_BASE_URL: str = Field(
        default="http://localhost:8000",
        description="Base URL the scheduler uses to call this service",
    )

    # Widgets
    SPORTMONKS_API_KEY: str | None = Field(
        default=None,
        description="SportMonks token for the live scores widget",
    )

    # CORS
    CORS_ORIGINS: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins",
    )

    # Application
    ENVIRONMENT: str = Field(
        default="development",
        description="Environment: development, staging, production",
    )
    LOG_FORMAT: str = Field(
        default="json",
        description="Log output: json or text",
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level",
    )

    @field_validator("DATABASE_URL")
    @classmethod
    def fix_database_url(cls, v: str) -> str:
        """Supabase/Railway provide postgresql:// but SQLAlchemy needs postgresql+psycopg2://"""
        if v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+psycopg2://", 1)
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql+psycopg2://", 1)
        return v

    @field_validator("APP_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings. Call at startup to validate config."""
    return Settings()
