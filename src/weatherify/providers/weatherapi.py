"""WeatherAPI.com provider.

## API Documentation Summary
Source: https://www.weatherapi.com/docs/

## Endpoint
- Base URL: https://api.weatherapi.com/v1
- Current conditions: GET /current.json?key={apikey}&q={lat},{lon}

## Authentication
- API key required, passed as the `key` query parameter
- Invalid key -> 401 (error code 2006), disabled key -> 403

## Response Format (fields we read)
```json
{
  "location": {"name": "Paris", "region": "Ile-de-France", "country": "France", ...},
  "current": {"precip_mm": 0.0, "cloud": 25, "temp_c": 18.0, ...}
}
```

## Variable Translation
| WeatherAPI Field | Canonical Field | Unit |
|------------------|-----------------|------|
| location.name | location_name | string |
| current.precip_mm | precipitation_mm | mm |
| current.cloud | cloud_cover_percent | 0-100 |
"""

from __future__ import annotations

import httpx

from weatherify.models.location import Coordinates
from weatherify.models.weather import WeatherSample
from weatherify.providers.base import AuthenticationError, WeatherProvider


class WeatherApiProvider(WeatherProvider):
    """WeatherAPI.com current-conditions provider.

    Example:
        ```python
        async with WeatherApiProvider(api_key="your-api-key") as provider:
            sample = await provider.get_current(
                Coordinates(latitude=48.8566, longitude=2.3522)
            )
        ```
    """

    name = "weatherapi"
    base_url = "https://api.weatherapi.com/v1"
    requires_api_key = True

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        max_attempts: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(
            api_key=api_key,
            base_url=base_url,
            user_agent=user_agent,
            timeout=timeout,
            max_attempts=max_attempts,
            transport=transport,
        )

    async def get_current(self, coordinates: Coordinates) -> WeatherSample:
        """Get current conditions from WeatherAPI.

        Raises:
            AuthenticationError: If no API key is configured or it is rejected
            ProviderError: If the request fails or the body is malformed
        """
        if not self.api_key:
            raise AuthenticationError(
                "API key required for WeatherAPI",
                provider=self.name,
            )

        response = await self._fetch(
            f"{self.base_url}/current.json",
            params={"key": self.api_key, "q": coordinates.to_query()},
        )
        return self._translate_response(self._parse_json(response))
