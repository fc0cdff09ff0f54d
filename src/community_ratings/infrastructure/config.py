"""
Configuration Management
========================

Pydantic-settings based configuration for the ratings service client
and the HTTP API. Reads from environment variables with sensible defaults.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class RatingsServiceSettings(BaseSettings):
    """Configuration for the remote community ratings service (DestinyTracker)."""

    model_config = SettingsConfigDict(env_prefix="DTR_", extra="ignore")

    base_url: str = Field(
        default="https://db-api.destinytracker.com",
        description="Base URL of the ratings service",
    )
    fetch_path: str = Field(
        default="/api/external/reviews/fetch",
        description="Path of the bulk review-fetch endpoint",
    )
    api_key: SecretStr = Field(
        default=SecretStr(""),
        description="API key sent as X-API-Key (empty to omit)",
    )
    user_agent: str = Field(default="CommunityRatings/0.1")
    timeout_seconds: float = Field(default=30.0, ge=1.0)
    max_connections: int = Field(default=2, ge=1)
    # The service's administrators asked for batches of 10, sent one at a time.
    batch_size: int = Field(default=10, ge=1)
    text_review_multiplier: float = Field(
        default=10,
        ge=0,
        description="Weight of a written-review vote relative to a plain vote",
    )


class APISettings(BaseSettings):
    """Configuration for the FastAPI application."""

    model_config = SettingsConfigDict(env_prefix="API_")

    title: str = Field(default="Community Ratings API")
    version: str = Field(default="0.1.0")
    debug: bool = Field(default=False)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)
    workers: int = Field(default=1, ge=1)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    api_key: str = Field(
        default="",
        description="API key for authentication. Leave empty to disable auth.",
    )
    max_items_per_request: int = Field(default=1000, ge=1)


class Settings(BaseSettings):
    """
    Root configuration aggregating all settings.

    Usage:
        settings = get_settings()
        batch_size = settings.dtr.batch_size
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    dtr: RatingsServiceSettings = Field(default_factory=RatingsServiceSettings)
    api: APISettings = Field(default_factory=APISettings)

    environment: Literal["development", "staging", "production", "test"] = Field(
        default="development"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns singleton instance, reading from environment on first call.
    """
    return Settings()
