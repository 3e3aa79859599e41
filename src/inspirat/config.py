"""Application configuration."""

import os
import re
from datetime import timedelta

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_SHORT_DURATION = re.compile(
    r"^\s*(?P<amount>\d+(?:\.\d+)?)\s*(?P<unit>ms|s|m|mins?|h|hrs?|d|days?|w)\s*$",
    re.IGNORECASE,
)

_UNITS = {
    "ms": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "min": timedelta(minutes=1),
    "mins": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "hr": timedelta(hours=1),
    "hrs": timedelta(hours=1),
    "d": timedelta(days=1),
    "day": timedelta(days=1),
    "days": timedelta(days=1),
    "w": timedelta(weeks=1),
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    stage: str = "production"
    photo_collection_url: str | None = None
    cache_ttl: timedelta = timedelta(hours=4)
    client_name: str | None = None
    storage_backend: str = "file"
    storage_path: str = ".inspirat/storage.json"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "kv_store"
    screen_width: int = 1920
    screen_height: int = 1080
    image_quality: int = 80
    preload_cache_size: int = 8
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("cache_ttl", mode="before")
    @classmethod
    def _parse_short_duration(cls, value: object) -> object:
        """Accept short forms such as "4h" or "30m"; defer others to pydantic."""
        if not isinstance(value, str):
            return value
        match = _SHORT_DURATION.match(value)
        if match is None:
            return value
        return _UNITS[match.group("unit").lower()] * float(match.group("amount"))

    @field_validator("cache_ttl")
    @classmethod
    def _require_positive(cls, value: timedelta) -> timedelta:
        if value <= timedelta(0):
            raise ValueError("cache_ttl must be positive")
        return value

    @property
    def collection_url(self) -> str:
        """Return the URL of the photo collection document."""
        if self.photo_collection_url:
            return self.photo_collection_url
        return f"https://inspirat-{self.stage}.s3.amazonaws.com/photoCollection"

    @property
    def is_development(self) -> bool:
        """Return True when development affordances are enabled."""
        return self.environment == "development"
