"""Weatherify client composition.

Wires the store, the notification presenter and the three flows together,
and exposes the user actions.

## Usage

```python
from weatherify.client import WeatherifyApp
from weatherify.config import get_settings

app = WeatherifyApp.from_settings(get_settings())
await app.mount()
print(app.view())
await app.generate()
await app.aclose()
```

## Concurrency

`start()` launches the weather resolver and the session checker as
independent tasks. Neither waits for the other, so the view must cope with
one slice being resolved while the other is still loading. `mount()` starts
both and waits until every background task (including a weather refresh
triggered by a login redirect) has finished.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine

import httpx

from weatherify.backend import BackendClient
from weatherify.client.navigation import BrowserNavigator, Navigator
from weatherify.client.notifications import NotificationPresenter
from weatherify.client.playlist import PlaylistRequester
from weatherify.client.session import SessionStatusChecker
from weatherify.client.store import Store
from weatherify.client.view import ViewModel, render_view
from weatherify.client.weather import LocationWeatherResolver
from weatherify.config import Settings
from weatherify.geolocation import FixedPositionProvider, IpPositionProvider, PositionProvider
from weatherify.models.location import Coordinates
from weatherify.models.session import SessionState
from weatherify.providers.base import WeatherProvider
from weatherify.providers.proxy import ProxyWeatherProvider
from weatherify.providers.weatherapi import WeatherApiProvider

logger = logging.getLogger(__name__)


def create_weather_provider(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> WeatherProvider:
    """Build the weather provider selected by WEATHER_SOURCE."""
    if settings.weather_source == "direct":
        return WeatherApiProvider(
            api_key=settings.weather_api_key or "",
            base_url=settings.weather_api_base_url,
            user_agent=f"weatherify/{settings.app_version}",
            timeout=settings.request_timeout_seconds,
            max_attempts=settings.weather_max_attempts,
            transport=transport,
        )
    return ProxyWeatherProvider(
        base_url=settings.weather_proxy_url,
        user_agent=f"weatherify/{settings.app_version}",
        timeout=settings.request_timeout_seconds,
        max_attempts=settings.weather_max_attempts,
        transport=transport,
    )


def create_position_provider(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PositionProvider:
    """Build the position provider selected by GEOLOCATION_MODE."""
    if settings.geolocation_mode == "ip":
        return IpPositionProvider(
            url=settings.ip_geolocation_url,
            timeout=settings.request_timeout_seconds,
            transport=transport,
        )
    coordinates = None
    if settings.fixed_position_configured:
        coordinates = Coordinates(latitude=settings.latitude, longitude=settings.longitude)
    return FixedPositionProvider(coordinates)


class WeatherifyApp:
    """The Weatherify client: state, flows and user actions."""

    def __init__(
        self,
        backend: BackendClient,
        weather_provider: WeatherProvider,
        position_provider: PositionProvider,
        navigator: Navigator,
        notification_duration: float = 3.0,
        store: Store | None = None,
    ):
        self.store = store or Store()
        self.backend = backend
        self.weather_provider = weather_provider
        self.position_provider = position_provider
        self.navigator = navigator
        self.notifications = NotificationPresenter(self.store, duration=notification_duration)

        self.weather = LocationWeatherResolver(self.store, position_provider, weather_provider)
        self.session = SessionStatusChecker(
            self.store,
            backend,
            navigator,
            self.notifications,
            on_login_success=self.refresh_weather,
        )
        self.playlists = PlaylistRequester(self.store, backend, navigator, self.notifications)

        self._tasks: set[asyncio.Task] = set()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        navigator: Navigator | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> WeatherifyApp:
        """Build a client from settings.

        Args:
            settings: Application settings
            navigator: Browsing context (defaults to the system browser at APP_URL)
            transport: Custom httpx transport shared by every HTTP client (tests)
        """
        return cls(
            backend=BackendClient.from_settings(settings, transport=transport),
            weather_provider=create_weather_provider(settings, transport=transport),
            position_provider=create_position_provider(settings, transport=transport),
            navigator=navigator or BrowserNavigator(settings.app_url),
            notification_duration=settings.notification_duration_seconds,
        )

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def start(self) -> list[asyncio.Task]:
        """Launch weather resolution and the session check concurrently."""
        return [
            self._spawn(self.weather.resolve()),
            self._spawn(self.session.initialize()),
        ]

    async def mount(self) -> None:
        self.start()
        await self.wait_idle()

    async def wait_idle(self) -> None:
        """Wait until no background task is pending."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def refresh_weather(self) -> asyncio.Task:
        """Re-resolve the weather in the background."""
        return self._spawn(self.weather.resolve())

    # User actions

    def login(self) -> None:
        self.session.login()

    async def logout(self) -> SessionState:
        return await self.session.logout()

    async def generate(self) -> str | None:
        return await self.playlists.generate(self.store.state.weather.mood)

    def view(self) -> ViewModel:
        return render_view(self.store.state)

    async def aclose(self) -> None:
        """Cancel timers and pending tasks and close HTTP clients."""
        self.notifications.close()
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        await self.backend.aclose()
        await self.weather_provider.aclose()
        await self.position_provider.aclose()
