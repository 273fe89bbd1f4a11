"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ipintel.schemas.check import CheckType


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Map environments to their respective .env files (relative to PROJECT_ROOT)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Nested BaseSettings don't inherit env_file, so populate os.environ up front.
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


DEFAULT_SERVICE_HOST = "check.getipintel.net"


class ClientSettings(BaseSettings):
    """getipintel.net client configuration."""

    email: str | None = Field(
        None,
        description="Contact email sent with every query (required by the service)",
    )
    use_tls: bool = Field(
        False,
        description="Query the service over https instead of http",
    )
    check_type: CheckType = Field(
        CheckType.STATIC,
        description="Detection mode: 'm' (static lists) or 'b' (lists + ML)",
    )
    max_wait_seconds: float = Field(
        0.0,
        description="Maximum time to wait for a rate limiter token; 0 waits forever",
        ge=0,
    )
    timeout_seconds: float = Field(
        10.0,
        description="Overall HTTP request timeout in seconds",
        gt=0,
    )
    host: str = Field(
        DEFAULT_SERVICE_HOST,
        description="Service host name",
    )

    model_config = SettingsConfigDict(
        env_prefix="IPINTEL_",
        case_sensitive=False,
    )


class LimiterSettings(BaseSettings):
    """Token bucket parameters.

    Defaults match the service's published limit: 15 queries per minute,
    refilled one token every 4 seconds, with a burst of 15.
    """

    capacity: int = Field(
        15,
        description="Maximum number of tokens held by the bucket (burst size)",
        ge=1,
    )
    fill_interval_seconds: float = Field(
        4.0,
        description="Seconds between two refills",
        gt=0,
    )
    quantum: int = Field(
        1,
        description="Tokens added per refill",
        ge=1,
    )

    model_config = SettingsConfigDict(
        env_prefix="LIMITER_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    output: str = Field("stdout", description="Log output: stdout or file")
    file_path: str | None = Field(
        None,
        description="Log file path when output=file (default logs/ipintel.log)",
    )
    max_bytes: int = Field(
        0,
        description="Rotate the log file at this size; 0 disables rotation",
        ge=0,
    )
    backup_count: int = Field(
        5,
        description="Number of rotated log files to keep",
        ge=0,
    )
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to read/propagate the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class AppSettings(BaseSettings):
    """Lookup API configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )
    host: str = Field(
        "127.0.0.1",
        description="Interface the lookup API binds to",
    )
    port: int = Field(
        8000,
        description="Port the lookup API listens on",
        ge=1,
        le=65535,
    )
    max_wait_seconds: float = Field(
        10.0,
        description="Token wait used by the lookup API when IPINTEL_MAX_WAIT_SECONDS is 0",
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if a configured value is invalid.
    """

    app_env: str = APP_ENV
    client: ClientSettings = Field(default_factory=ClientSettings)
    limiter: LimiterSettings = Field(default_factory=LimiterSettings)
    log: LogSettings = Field(default_factory=LogSettings)
    app: AppSettings = Field(default_factory=AppSettings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
# Nested settings are created via default_factory so env loading works.
settings = Settings()
