"""
Configuration for the YouTube transcript MCP server.

Settings are read from environment variables prefixed with
``YT_TRANSCRIPT_`` (or a ``.env`` file in the working directory), for
example ``YT_TRANSCRIPT_DEFAULT_LANGUAGE=ja`` or
``YT_TRANSCRIPT_LOG_LEVEL=DEBUG``.  Only configuration lives here; no
request data is ever stored on the settings object.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Server settings with environment variable support."""

    # ========== Server ==========

    server_name: str = "YouTube_MCP"
    log_level: str = "INFO"

    # ========== Transcript retrieval ==========

    # Language used when the caller does not pass ``lang``
    default_language: str = "en"

    # Timeout (seconds) for each HTTP call made to YouTube
    request_timeout: float = Field(default=10.0, gt=0)

    # Innertube client impersonated when asking for the player response
    innertube_client_name: str = "ANDROID"
    innertube_client_version: str = "20.10.38"

    model_config = SettingsConfigDict(
        env_prefix="YT_TRANSCRIPT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
