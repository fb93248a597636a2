"""Device position providers.

A position provider answers a single "where is the device now?" query.
There is no continuous tracking and no retry: one failure ends the lookup.

## Providers

- FixedPositionProvider: a configured latitude/longitude. An unconfigured
  position behaves like a user who refused the location permission.
- IpPositionProvider: approximate position from an IP geolocation service
  (ip-api.com JSON format: `{"status": "success", "lat": ..., "lon": ...}`).
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Literal

import httpx
from pydantic import ValidationError

from weatherify.models.location import Coordinates

logger = logging.getLogger(__name__)

GeolocationFailure = Literal["permission_denied", "position_unavailable"]


class GeolocationError(Exception):
    """Raised when the current position cannot be obtained."""

    def __init__(self, message: str, reason: GeolocationFailure):
        super().__init__(message)
        self.reason = reason


class PositionProvider(ABC):
    """Source of the device's current coordinates."""

    @abstractmethod
    async def get_current_position(self) -> Coordinates:
        """Return the current position.

        Raises:
            GeolocationError: If the position is denied or unavailable
        """
        pass

    async def aclose(self) -> None:
        """Release any resources held by the provider."""
        return None


class FixedPositionProvider(PositionProvider):
    """Position taken from configuration."""

    def __init__(self, coordinates: Coordinates | None):
        self.coordinates = coordinates

    async def get_current_position(self) -> Coordinates:
        if self.coordinates is None:
            raise GeolocationError(
                "No position configured (set LATITUDE and LONGITUDE)",
                reason="permission_denied",
            )
        return self.coordinates


class IpPositionProvider(PositionProvider):
    """Approximate position from an IP geolocation lookup."""

    def __init__(
        self,
        url: str = "http://ip-api.com/json/",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def get_current_position(self) -> Coordinates:
        try:
            response = await self._client.get(self.url, params={"fields": "status,message,lat,lon"})
        except httpx.HTTPError as e:
            raise GeolocationError(
                f"IP geolocation request failed: {e}",
                reason="position_unavailable",
            ) from e

        if response.status_code >= 400:
            raise GeolocationError(
                f"IP geolocation failed: {response.status_code}",
                reason="position_unavailable",
            )

        try:
            data: dict[str, Any] = response.json()
            if data.get("status") != "success":
                raise GeolocationError(
                    f"IP geolocation failed: {data.get('message', 'unknown error')}",
                    reason="position_unavailable",
                )
            coordinates = Coordinates(latitude=data["lat"], longitude=data["lon"])
        except (ValueError, KeyError, AttributeError, ValidationError) as e:
            raise GeolocationError(
                f"Malformed IP geolocation response: {e}",
                reason="position_unavailable",
            ) from e

        logger.debug(f"IP geolocation resolved to {coordinates}")
        return coordinates

    async def aclose(self) -> None:
        await self._client.aclose()
