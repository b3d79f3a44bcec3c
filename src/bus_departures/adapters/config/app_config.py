"""12-factor configuration adapter using environment variables and TOML config."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bus_departures.adapters.bods_api.constants import BODS_BASE_URL


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=3001, description="Port to bind the server to")
    cors_origin: str = Field(default="*", description="Allowed CORS origin")

    # BODS API configuration
    bods_api_key: str = Field(default="", description="API key for the Bus Open Data Service")
    bods_base_url: str = Field(default=BODS_BASE_URL, description="BODS API base URL")
    bods_api_timeout: float = Field(
        default=10.0, description="Timeout for each BODS API request in seconds"
    )

    # Cache configuration
    timetable_cache_ttl_seconds: float = Field(
        default=300, description="TTL for cached stop services in seconds"
    )
    live_cache_ttl_seconds: float = Field(
        default=30, description="TTL for the cached live vehicle snapshot in seconds"
    )
    fallback_cache_ttl_seconds: float = Field(
        default=60, description="TTL for cached fallback services in seconds"
    )
    cache_sweep_interval_seconds: float = Field(
        default=60, description="Interval between sweeps of expired cache entries"
    )

    # Routes flagged as highlighted on the next-bus endpoint
    highlight_routes: list[str] = Field(
        default=["17A", "17B"],
        description="Route numbers flagged as highlighted by /api/next-bus (JSON list in env)",
    )
    gzip_minimum_size: int = Field(
        default=500, description="Smallest response body in bytes that is gzip-compressed"
    )

    # Rate limiting configuration
    rate_limit_per_minute: int = Field(
        default=100,
        description="Maximum number of requests allowed per IP address per minute",
    )

    # TOML config file path
    config_file: str | None = Field(
        default="config.example.toml",
        description="Path to TOML configuration file for stops, route tables and live area",
    )

    @field_validator(
        "timetable_cache_ttl_seconds",
        "live_cache_ttl_seconds",
        "fallback_cache_ttl_seconds",
        "cache_sweep_interval_seconds",
        "bods_api_timeout",
    )
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Validate durations are positive."""
        if v <= 0:
            raise ValueError("durations must be positive")
        return v

    @model_validator(mode="after")
    def validate_fallback_ttl(self) -> "AppConfig":
        """Validate the fallback TTL does not exceed the timetable TTL."""
        if self.fallback_cache_ttl_seconds > self.timetable_cache_ttl_seconds:
            raise ValueError(
                "fallback_cache_ttl_seconds must not exceed timetable_cache_ttl_seconds"
            )
        return self

    def load_toml_data(self) -> dict[str, Any]:
        """Load and parse the TOML configuration file."""
        if not self.config_file:
            raise ValueError("config_file must be set to load stops configuration")

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            return tomllib.load(f)
