"""Location and weather resolution.

Gets the device position, asks the weather provider for current conditions
and publishes the derived mood and location name.

Failures are logged and leave the previous weather state untouched; the user
sees nothing. There is no retry. The resolver is invoked again after a
successful login.
"""

from __future__ import annotations

import logging

import httpx

from weatherify.client.store import Store, WeatherResolved
from weatherify.geolocation import GeolocationError, PositionProvider
from weatherify.models.weather import Mood
from weatherify.providers.base import ProviderError, WeatherProvider

logger = logging.getLogger(__name__)


class LocationWeatherResolver:
    """Derives the weather mood for the device's current position."""

    def __init__(
        self,
        store: Store,
        position_provider: PositionProvider,
        weather_provider: WeatherProvider,
    ):
        self.store = store
        self.position_provider = position_provider
        self.weather_provider = weather_provider

    async def resolve(self) -> tuple[Mood, str] | None:
        """Resolve the current mood and location name.

        Returns:
            (mood, location_name), or None if any step failed
        """
        try:
            coordinates = await self.position_provider.get_current_position()
        except GeolocationError as e:
            logger.error(f"Failed to get current position ({e.reason}): {e}")
            return None

        try:
            sample = await self.weather_provider.get_current(coordinates)
        except ProviderError as e:
            logger.error(f"Failed to fetch weather data from {e.provider}: {e}")
            return None
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch weather data: {e}")
            return None

        mood = sample.mood
        if not mood.is_set:
            logger.warning(
                f"Conditions in {sample.location_name} match no mood "
                f"(precip {sample.precipitation_mm} mm, cloud {sample.cloud_cover_percent}%)"
            )

        self.store.dispatch(WeatherResolved(mood=mood, location_name=sample.location_name))
        logger.info(f"Weather in {sample.location_name}: {mood.value}")
        return mood, sample.location_name
