"""Base weather provider abstraction.

This module defines the interface for current-conditions weather providers
and the canonical format they translate into.

## Canonical Data Format

All providers translate their API responses into
`weatherify.models.weather.WeatherSample`:
- Precipitation: millimeters (mm)
- Cloud cover: percentage (0-100)
- Location name: provider's display name for the queried coordinates

## Supported Providers

### WeatherAPI (weatherapi.com)
- Endpoint: https://api.weatherapi.com/v1/current.json?key={key}&q={lat},{lon}
- Auth: API key in query string
- Key response paths: location.name, current.precip_mm, current.cloud

### Weatherify proxy
- Endpoint: {backend}/api/v1/weather/current?lat={lat}&lon={lon}
- Auth: none (the proxy holds the WeatherAPI key server-side)
- Response: the same subset of the WeatherAPI body

## Retries

Network and timeout errors are retried up to `max_attempts` times. Clients
run with a single attempt; only the proxy server opts into retries.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx
from pydantic import ValidationError
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    wait_exponential,
)

from weatherify.models.location import Coordinates
from weatherify.models.weather import WeatherSample


class ProviderError(Exception):
    """Base exception for weather provider errors."""

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.response_body = response_body


class RateLimitError(ProviderError):
    """Raised when provider rate limit is exceeded."""

    def __init__(
        self,
        provider: str,
        retry_after: int | None = None,
        status_code: int | None = None,
    ):
        super().__init__(
            f"Rate limit exceeded for {provider}",
            provider=provider,
            status_code=status_code,
        )
        self.retry_after = retry_after


class AuthenticationError(ProviderError):
    """Raised when authentication fails."""

    pass


def _stop_after_provider_attempts(retry_state: RetryCallState) -> bool:
    """Stop once the provider's configured attempt count is used up."""
    provider = retry_state.args[0]
    return retry_state.attempt_number >= provider.max_attempts


class WeatherProvider(ABC):
    """Abstract base class for current-conditions weather providers.

    Attributes:
        name: Human-readable provider name
        base_url: Base URL for the API
        requires_api_key: Whether this provider requires an API key

    Example:
        ```python
        async with WeatherApiProvider(api_key="...") as provider:
            sample = await provider.get_current(
                Coordinates(latitude=48.8566, longitude=2.3522)
            )
        ```
    """

    name: str
    base_url: str
    requires_api_key: bool = False

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        max_attempts: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the provider.

        Args:
            api_key: API key if required by the provider
            base_url: Override the provider's default base URL
            user_agent: User-Agent string for requests
            timeout: Request timeout in seconds (None waits indefinitely)
            max_attempts: Attempts per request on network errors
            transport: Custom httpx transport (used by tests)
        """
        self.api_key = api_key
        if base_url:
            self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent or "weatherify/0.1.0"
        self.timeout = timeout
        self.max_attempts = max_attempts
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> WeatherProvider:
        """Enter async context manager."""
        self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.aclose()

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    def _get_default_headers(self) -> dict[str, str]:
        """Get default headers for requests."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    @retry(
        stop=_stop_after_provider_attempts,
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
        reraise=True,
    )
    async def _fetch(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Fetch data from the API.

        Args:
            url: Full URL to fetch
            params: Query parameters
            headers: Additional headers

        Returns:
            HTTP response

        Raises:
            AuthenticationError: If the API rejects our credentials
            RateLimitError: If rate limit is exceeded
            ProviderError: For any other non-success status
            httpx.HTTPError: If the request fails on every attempt
        """
        client = self._get_client()
        request_headers = self._get_default_headers()
        if headers:
            request_headers.update(headers)

        response = await client.get(url, params=params, headers=request_headers)

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                self.name,
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
                status_code=429,
            )

        if response.status_code in (401, 403):
            raise AuthenticationError(
                "Provider rejected credentials",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )

        if response.status_code >= 400:
            raise ProviderError(
                f"API request failed: {response.status_code}",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )

        return response

    def _parse_json(self, response: httpx.Response) -> dict[str, Any]:
        """Decode a JSON object body or raise ProviderError."""
        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(
                f"Failed to parse response: {e}",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            ) from e
        if not isinstance(data, dict):
            raise ProviderError(
                "Unexpected response shape",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )
        return data

    @abstractmethod
    async def get_current(self, coordinates: Coordinates) -> WeatherSample:
        """Get current conditions for a location.

        Args:
            coordinates: Location coordinates

        Returns:
            Current conditions in canonical format

        Raises:
            ProviderError: If conditions cannot be retrieved
            httpx.HTTPError: On network failure
        """
        pass

    def _translate_response(self, response_data: dict[str, Any]) -> WeatherSample:
        """Translate a `current.json` shaped response to canonical format.

        Providers with a different body shape override this.
        """
        try:
            return WeatherSample.from_current_payload(response_data)
        except (KeyError, TypeError, ValidationError) as e:
            raise ProviderError(
                f"Malformed weather response: {e}",
                provider=self.name,
            ) from e
