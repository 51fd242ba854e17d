"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
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
        description="IANA timezone name (or UTC+HH:MM offset) used for every timestamp",
    )
    cors_allow_origins: list[str] = Field(
        default_factory=list,
        description="Origins allowed to call the API from a browser",
    )
    notification_expiration_days: dict[str, int] = Field(
        default_factory=dict,
        description="Per notification type retention overrides, in days",
    )
    notification_default_expiration_days: int = Field(
        default=30,
        description="Retention applied to notification types without an explicit entry",
        gt=0,
    )
    notification_default_page_size: int = Field(
        default=20,
        description="Number of notifications returned when no limit is requested",
        gt=0,
    )
    notification_max_page_size: int = Field(
        default=100,
        description="Upper bound applied to the requested page size",
        gt=0,
    )
    seed_sample_notifications: bool = Field(
        default=False,
        description="Seed demo notifications for users that have none when listing",
    )

    @field_validator("notification_expiration_days")
    @classmethod
    def _validate_expiration_days(cls, value: dict[str, int]) -> dict[str, int]:
        for notification_type, days in value.items():
            if not notification_type.strip():
                raise ValueError("Notification type keys must not be empty")
            if days <= 0:
                raise ValueError(
                    f"Retention for '{notification_type}' must be a positive number of days"
                )
        return value


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
