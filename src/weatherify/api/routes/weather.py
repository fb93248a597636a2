"""Weather proxy routes.

Clients send coordinates; the proxy calls WeatherAPI with the server-side key
and returns only the fields the client classifies on.

## Endpoints

- GET /api/v1/weather/current?lat={lat}&lon={lon}

## Errors

- 422: coordinates out of range
- 502: upstream failure (bad status, rejected key, malformed body, network)
- 503: no upstream API key configured
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from weatherify.config import get_settings
from weatherify.models.location import Coordinates
from weatherify.providers.base import ProviderError, WeatherProvider
from weatherify.providers.weatherapi import WeatherApiProvider

logger = logging.getLogger(__name__)

router = APIRouter()


class LocationPayload(BaseModel):
    name: str


class CurrentPayload(BaseModel):
    precip_mm: float
    cloud: int


class CurrentWeatherResponse(BaseModel):
    """Subset of WeatherAPI's current.json body."""

    location: LocationPayload
    current: CurrentPayload


async def get_weather_provider() -> AsyncGenerator[WeatherProvider, None]:
    """Provide an upstream WeatherAPI provider for the request."""
    settings = get_settings()
    if not settings.weather_api_configured:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Weather provider is not configured",
        )

    async with WeatherApiProvider(
        api_key=settings.weather_api_key,
        base_url=settings.weather_api_base_url,
        user_agent=f"weatherify-proxy/{settings.app_version}",
        timeout=settings.request_timeout_seconds,
        max_attempts=settings.proxy_max_attempts,
    ) as provider:
        yield provider


@router.get("/current", response_model=CurrentWeatherResponse)
async def get_current_weather(
    lat: float = Query(..., ge=-90, le=90, description="Latitude in decimal degrees"),
    lon: float = Query(..., ge=-180, le=180, description="Longitude in decimal degrees"),
    provider: WeatherProvider = Depends(get_weather_provider),
) -> CurrentWeatherResponse:
    """Current conditions for a position."""
    coordinates = Coordinates(latitude=lat, longitude=lon)

    try:
        sample = await provider.get_current(coordinates)
    except ProviderError as e:
        logger.error(
            f"Upstream weather request failed ({e.provider}, {e.status_code}): {e}"
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Weather provider request failed",
        )
    except httpx.HTTPError as e:
        logger.error(f"Upstream weather request failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Weather provider unreachable",
        )

    return CurrentWeatherResponse.model_validate(sample.to_current_payload())
