"""Application configuration.

Configuration is loaded from environment variables using pydantic-settings.
The City Data API key must be provided via the environment (or a local
`.env` file), never committed to a config file.

## Required Environment Variables

- CITY_API_KEY: API key for the upstream City Data API

## Optional Environment Variables

- CITY_API_BASE_URL: Upstream base URL
- CITY_API_TIMEOUT: Upstream request timeout in seconds (default: 10)
- CITY_API_MAX_ATTEMPTS: Attempts per upstream call on network errors (default: 1)
- CONCURRENT_UPSTREAM_CALLS: Fetch city infos upstream data concurrently (default: false)
- HOST / PORT: Listen address (default: localhost:3000)
- RENDER_EXTERNAL_URL: When set, listen on all interfaces
- LOG_LEVEL: Root log level (default: INFO)
- DEBUG: Enable debug mode and API docs (default: false)

## Example .env file

```
CITY_API_KEY=your-api-key
PORT=3000
LOG_LEVEL=DEBUG
```
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from city_infos import __version__

DEFAULT_CITY_API_BASE_URL = "https://api-ugi2pflmha-ew.a.run.app"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "City Infos"
    app_version: str = __version__
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Server
    host: str = "localhost"
    port: int = Field(default=3000, ge=1, le=65535)
    render_external_url: str | None = None
    allowed_origins: list[str] = Field(
        default=["*"],
        description="CORS allowed origins",
    )

    # Upstream City Data API
    city_api_base_url: str = DEFAULT_CITY_API_BASE_URL
    city_api_key: str = Field(
        ...,
        min_length=1,
        description="API key sent as the apiKey query parameter",
    )
    city_api_timeout: float = Field(default=10.0, gt=0)
    city_api_max_attempts: int = Field(
        default=1,
        ge=1,
        le=10,
        description="Attempts per upstream call; only network errors are retried",
    )
    concurrent_upstream_calls: bool = False

    @field_validator("city_api_base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be appended directly."""
        return v.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @property
    def bind_host(self) -> str:
        """Interface to listen on.

        Hosted deployments (detected through RENDER_EXTERNAL_URL) must
        listen on all interfaces.
        """
        if self.render_external_url:
            return "0.0.0.0"
        return self.host


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()


def get_settings_uncached() -> Settings:
    """Get fresh settings without caching.

    Useful for testing when environment variables change.
    """
    return Settings()
