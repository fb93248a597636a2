"""Tests for weather providers."""

import httpx
import pytest
from tenacity import wait_none

from weatherify.models.weather import Mood
from weatherify.providers.base import (
    AuthenticationError,
    ProviderError,
    RateLimitError,
    WeatherProvider,
)
from weatherify.providers.proxy import ProxyWeatherProvider
from weatherify.providers.weatherapi import WeatherApiProvider

from conftest import FakeServer, weather_payload


@pytest.fixture
def no_backoff(monkeypatch):
    """Skip the exponential wait between retry attempts."""
    monkeypatch.setattr(WeatherProvider._fetch.retry, "wait", wait_none())


class TestWeatherApiProvider:
    async def test_current_conditions(self, server: FakeServer, paris):
        server.add("GET", "/v1/current.json", json=weather_payload(2.0, 10))

        async with WeatherApiProvider(api_key="k", transport=server.transport) as provider:
            sample = await provider.get_current(paris)

        assert sample.location_name == "Paris"
        assert sample.mood == Mood.RAINY

        request = server.requests[0]
        assert request.url.host == "api.weatherapi.com"
        assert request.url.params["key"] == "k"
        assert request.url.params["q"] == "48.8566,2.3522"

    async def test_custom_base_url(self, server: FakeServer, paris):
        server.add("GET", "/current.json", json=weather_payload(0.0, 20))

        async with WeatherApiProvider(
            api_key="k",
            base_url="http://weather.test/",
            transport=server.transport,
        ) as provider:
            sample = await provider.get_current(paris)

        assert sample.mood == Mood.SUNNY
        assert server.requests[0].url.host == "weather.test"

    async def test_missing_api_key(self, paris):
        provider = WeatherApiProvider(api_key="")
        with pytest.raises(AuthenticationError):
            await provider.get_current(paris)

    async def test_rejected_api_key(self, server: FakeServer, paris):
        server.add("GET", "/v1/current.json", status_code=401, json={"error": {"code": 2006}})

        async with WeatherApiProvider(api_key="bad", transport=server.transport) as provider:
            with pytest.raises(AuthenticationError) as exc_info:
                await provider.get_current(paris)

        assert exc_info.value.status_code == 401

    async def test_rate_limited(self, server: FakeServer, paris):
        server.add("GET", "/v1/current.json", status_code=429, json={})

        async with WeatherApiProvider(api_key="k", transport=server.transport) as provider:
            with pytest.raises(RateLimitError):
                await provider.get_current(paris)

    async def test_server_error(self, server: FakeServer, paris):
        server.add("GET", "/v1/current.json", status_code=500, text="oops")

        async with WeatherApiProvider(api_key="k", transport=server.transport) as provider:
            with pytest.raises(ProviderError) as exc_info:
                await provider.get_current(paris)

        assert exc_info.value.status_code == 500
        assert exc_info.value.response_body == "oops"

    async def test_malformed_body(self, server: FakeServer, paris):
        server.add("GET", "/v1/current.json", json={"location": {"name": "Paris"}})

        async with WeatherApiProvider(api_key="k", transport=server.transport) as provider:
            with pytest.raises(ProviderError, match="Malformed"):
                await provider.get_current(paris)

    async def test_non_json_body(self, server: FakeServer, paris):
        server.add("GET", "/v1/current.json", text="<html>")

        async with WeatherApiProvider(api_key="k", transport=server.transport) as provider:
            with pytest.raises(ProviderError, match="Failed to parse"):
                await provider.get_current(paris)

    async def test_single_attempt_by_default(self, server: FakeServer, paris):
        server.add("GET", "/v1/current.json", exc=httpx.ConnectError)

        async with WeatherApiProvider(api_key="k", transport=server.transport) as provider:
            with pytest.raises(httpx.ConnectError):
                await provider.get_current(paris)

        assert len(server.requests) == 1

    async def test_retries_network_errors_when_configured(
        self, server: FakeServer, paris, no_backoff
    ):
        server.add("GET", "/v1/current.json", exc=httpx.ConnectError)

        async with WeatherApiProvider(
            api_key="k", max_attempts=3, transport=server.transport
        ) as provider:
            with pytest.raises(httpx.ConnectError):
                await provider.get_current(paris)

        assert len(server.requests) == 3

    async def test_status_errors_are_not_retried(self, server: FakeServer, paris, no_backoff):
        server.add("GET", "/v1/current.json", status_code=500, text="oops")

        async with WeatherApiProvider(
            api_key="k", max_attempts=3, transport=server.transport
        ) as provider:
            with pytest.raises(ProviderError):
                await provider.get_current(paris)

        assert len(server.requests) == 1


class TestProxyWeatherProvider:
    async def test_current_conditions(self, server: FakeServer, paris):
        server.add("GET", "/api/v1/weather/current", json=weather_payload(0.0, 80, "Lyon"))

        async with ProxyWeatherProvider(
            base_url="http://backend.test", transport=server.transport
        ) as provider:
            sample = await provider.get_current(paris)

        assert sample.location_name == "Lyon"
        assert sample.mood == Mood.CLOUDY

        request = server.requests[0]
        assert request.url.host == "backend.test"
        assert "key" not in request.url.params
        assert float(request.url.params["lat"]) == pytest.approx(48.8566)
        assert float(request.url.params["lon"]) == pytest.approx(2.3522)

    async def test_proxy_unavailable(self, server: FakeServer, paris):
        server.add("GET", "/api/v1/weather/current", status_code=503, json={"detail": "x"})

        async with ProxyWeatherProvider(
            base_url="http://backend.test", transport=server.transport
        ) as provider:
            with pytest.raises(ProviderError) as exc_info:
                await provider.get_current(paris)

        assert exc_info.value.status_code == 503
