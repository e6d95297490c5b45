from __future__ import annotations

from functools import lru_cache
from typing import Any

from loguru import logger
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from nhkguide.urls import DEFAULT_BASE_URL

log = logger.bind(module="config")


class Settings(BaseSettings):
    """Client configuration read from the environment and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    api_key: str | None = Field(default=None, alias="NHK_API_KEY")
    base_url: str = Field(default=DEFAULT_BASE_URL, alias="NHK_API_BASE_URL")
    api_version: str = Field(default="v1", alias="NHK_API_VERSION")
    timeout_seconds: float = Field(default=10.0, alias="NHK_API_TIMEOUT_SECONDS")
    default_area: str = Field(default="130", alias="NHK_DEFAULT_AREA")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    def export_safe(self) -> dict[str, Any]:
        """Return non-sensitive settings for debugging/logging."""
        return {
            "api_key_set": bool(self.api_key),
            "base_url": self.base_url,
            "api_version": self.api_version,
            "timeout_seconds": self.timeout_seconds,
            "default_area": self.default_area,
            "log_level": self.log_level,
        }


@lru_cache
def get_settings() -> Settings:
    """Load and cache settings."""
    settings = Settings()
    log.debug("Settings initialised: {}", settings.export_safe())
    return settings
