"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./notifications.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used to stamp and present notification timestamps",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API from a browser",
    )
    fanout_max_workers: int = Field(
        default=8,
        description="Maximum number of recipient writes executed concurrently",
        gt=0,
    )
    store_timeout_seconds: float = Field(
        default=5.0,
        description="Upper bound for a single store operation before it is reported as transient",
        gt=0,
    )
    default_page_size: int = Field(default=20, gt=0)
    max_page_size: int = Field(default=100, gt=0)
    enforce_actor_identity: bool = Field(
        default=False,
        description="Require the X-User-Id header on every user-scoped request",
    )

    @model_validator(mode="after")
    def _validate_page_sizes(self) -> "Settings":
        if self.default_page_size > self.max_page_size:
            raise ValueError("DEFAULT_PAGE_SIZE cannot exceed MAX_PAGE_SIZE")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    from notification_service.utils.datetime import get_app_timezone

    get_settings.cache_clear()
    get_app_timezone.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
