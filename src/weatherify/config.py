"""Application configuration.

Configuration is loaded from environment variables using pydantic-settings.
Secrets (the weather provider API key, a seeded backend session cookie) must
be provided via environment variables, never hard-coded.

## Client Environment Variables

- BACKEND_BASE_URL: Origin of the playlist backend (default: http://127.0.0.1:8080)
- APP_URL: Page URL the client starts on; may carry login markers
- WEATHER_SOURCE: "proxy" (through `weatherify serve`) or "direct"
- WEATHER_PROXY_URL: Origin of the weather proxy (default: http://127.0.0.1:8000)
- WEATHER_API_KEY: weatherapi.com key (only needed for "direct" and the proxy server)
- GEOLOCATION_MODE: "fixed" (LATITUDE/LONGITUDE) or "ip" (IP lookup)
- NOTIFICATION_DURATION_SECONDS: How long a notification stays visible (default: 3)

## Proxy Server Environment Variables

- HOST / PORT: Bind address for `weatherify serve`
- ALLOWED_ORIGINS: CORS allowed origins
- PROXY_MAX_ATTEMPTS: Upstream attempts on network errors (default: 3)

## Example .env file

```
BACKEND_BASE_URL=http://127.0.0.1:8080
WEATHER_SOURCE=proxy
WEATHER_PROXY_URL=http://127.0.0.1:8000
GEOLOCATION_MODE=fixed
LATITUDE=48.8566
LONGITUDE=2.3522
```
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Weatherify"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    app_url: str = Field(
        default="http://localhost:3000/",
        description="Page URL the client is loaded from",
    )

    # Backend
    backend_base_url: str = Field(
        default="http://127.0.0.1:8080",
        description="Origin of the playlist backend",
    )
    session_cookie_name: str = "JSESSIONID"
    session_cookie: str | None = Field(
        default=None,
        description="Backend session cookie to seed the client cookie jar with",
    )
    request_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="HTTP timeout; None waits indefinitely",
    )

    # Weather
    weather_source: Literal["proxy", "direct"] = "proxy"
    weather_proxy_url: str = Field(
        default="http://127.0.0.1:8000",
        description="Origin of the weather proxy served by `weatherify serve`",
    )
    weather_api_base_url: str = "https://api.weatherapi.com/v1"
    weather_api_key: str | None = None
    weather_max_attempts: int = Field(default=1, ge=1, le=10)

    # Geolocation
    geolocation_mode: Literal["fixed", "ip"] = "fixed"
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    ip_geolocation_url: str = "http://ip-api.com/json/"

    # Notifications
    notification_duration_seconds: float = Field(default=3.0, gt=0)

    # Weather proxy server
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="CORS allowed origins",
    )
    proxy_max_attempts: int = Field(default=3, ge=1, le=10)

    @field_validator(
        "backend_base_url", "weather_proxy_url", "weather_api_base_url", mode="before"
    )
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Store base URLs without a trailing slash so paths join cleanly."""
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @model_validator(mode="after")
    def validate_weather_source(self) -> Settings:
        """Direct weather lookups need a provider key on the client."""
        if self.weather_source == "direct" and not self.weather_api_key:
            raise ValueError("WEATHER_API_KEY is required when WEATHER_SOURCE=direct")
        return self

    @property
    def weather_api_configured(self) -> bool:
        """Check if an upstream weather API key is available."""
        return bool(self.weather_api_key)

    @property
    def fixed_position_configured(self) -> bool:
        """Check if a fixed latitude/longitude pair is configured."""
        return self.latitude is not None and self.longitude is not None


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()
