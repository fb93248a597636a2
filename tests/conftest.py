"""Pytest fixtures for Weatherify tests.

This module provides test fixtures that ensure:
1. No external HTTP calls are made (backend, weather provider, IP lookup)
2. No real browser is opened
3. Isolated test environment with controlled configuration
"""

import os
from typing import Any

import httpx
import pytest

# Set test environment BEFORE importing application modules
os.environ.setdefault("BACKEND_BASE_URL", "http://backend.test")
os.environ.setdefault("APP_URL", "http://app.test/")
os.environ.setdefault("WEATHER_SOURCE", "proxy")
os.environ.setdefault("WEATHER_PROXY_URL", "http://weather.test")
os.environ.setdefault("GEOLOCATION_MODE", "fixed")
os.environ.setdefault("LATITUDE", "48.8566")
os.environ.setdefault("LONGITUDE", "2.3522")
os.environ.setdefault("DEBUG", "true")

from weatherify.client import WeatherifyApp
from weatherify.client.navigation import Navigator
from weatherify.config import Settings
from weatherify.models.location import Coordinates

BACKEND_URL = "http://backend.test"
WEATHER_PROXY_URL = "http://weather.test"
APP_URL = "http://app.test/"

STATUS_PATH = "/api/v1/auth/spotify/status"
LOGOUT_PATH = "/api/v1/auth/spotify/logout"
GENERATE_PATH = "/api/v1/playlist/generate"
WEATHER_PROXY_PATH = "/api/v1/weather/current"


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset settings cache before each test to ensure clean state."""
    from weatherify.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class RecordingNavigator(Navigator):
    """Navigator that records navigation instead of opening a browser."""

    def __init__(self, current_url: str = APP_URL):
        self._current_url = current_url
        self.replaced: list[str] = []
        self.assigned: list[str] = []
        self.opened: list[str] = []

    @property
    def current_url(self) -> str:
        return self._current_url

    def replace_url(self, url: str) -> None:
        self.replaced.append(url)
        self._current_url = url

    def assign(self, url: str) -> None:
        self.assigned.append(url)

    def open_new(self, url: str) -> None:
        self.opened.append(url)


class FakeServer:
    """Routes requests from an httpx.MockTransport to canned responses.

    Routes are keyed by (method, path). A route is either a canned response
    (status code + JSON/text body) or an exception class to raise.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        *,
        status_code: int = 200,
        json: Any = None,
        text: str | None = None,
        exc: type[httpx.HTTPError] | None = None,
    ) -> None:
        self.routes[(method, path)] = {
            "status_code": status_code,
            "json": json,
            "text": text,
            "exc": exc,
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not found"})
        if route["exc"] is not None:
            raise route["exc"]("Connection refused", request=request)
        if route["text"] is not None:
            return httpx.Response(route["status_code"], text=route["text"])
        return httpx.Response(route["status_code"], json=route["json"])

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and r.url.path == path
        ]


def weather_payload(precip_mm: float, cloud: int, name: str = "Paris") -> dict[str, Any]:
    """A WeatherAPI current.json style body."""
    return {
        "location": {"name": name, "country": "France"},
        "current": {"precip_mm": precip_mm, "cloud": cloud, "temp_c": 18.0},
    }


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        backend_base_url=BACKEND_URL,
        weather_proxy_url=WEATHER_PROXY_URL,
        app_url=APP_URL,
        weather_source="proxy",
        geolocation_mode="fixed",
        latitude=48.8566,
        longitude=2.3522,
        notification_duration_seconds=1.0,
    )


@pytest.fixture
def paris() -> Coordinates:
    return Coordinates(latitude=48.8566, longitude=2.3522)


@pytest.fixture
async def app(settings: Settings, navigator: RecordingNavigator, server: FakeServer):
    """Client wired to the fake server and recording navigator."""
    client = WeatherifyApp.from_settings(settings, navigator=navigator, transport=server.transport)
    yield client
    await client.aclose()


@pytest.fixture
async def make_app(settings: Settings, server: FakeServer):
    """Factory for clients loaded from a given page URL."""
    created: list[WeatherifyApp] = []

    def factory(url: str = APP_URL) -> tuple[WeatherifyApp, RecordingNavigator]:
        nav = RecordingNavigator(url)
        client = WeatherifyApp.from_settings(settings, navigator=nav, transport=server.transport)
        created.append(client)
        return client, nav

    yield factory
    for client in created:
        await client.aclose()
