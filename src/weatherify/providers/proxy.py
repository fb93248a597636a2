"""Provider that reads weather through the Weatherify weather proxy.

The proxy (`weatherify.api`) holds the upstream API key, so clients never
see it. It answers with the same `location`/`current` subset as
WeatherAPI's `current.json`.
"""

from __future__ import annotations

from weatherify.models.location import Coordinates
from weatherify.models.weather import WeatherSample
from weatherify.providers.base import WeatherProvider

PROXY_PATH = "/api/v1/weather/current"


class ProxyWeatherProvider(WeatherProvider):
    """Current conditions from the Weatherify proxy endpoint."""

    name = "proxy"
    base_url = "http://127.0.0.1:8000"

    async def get_current(self, coordinates: Coordinates) -> WeatherSample:
        response = await self._fetch(
            f"{self.base_url}{PROXY_PATH}",
            params={"lat": coordinates.latitude, "lon": coordinates.longitude},
        )
        return self._translate_response(self._parse_json(response))
