"""Weatherify client.

Resolves the weather mood, tracks the backend session and requests
mood-matched playlists.

## Flows

- LocationWeatherResolver: position -> weather -> mood
- SessionStatusChecker: login markers / session status, login, logout
- PlaylistRequester: mood -> playlist URL -> new browsing context
- NotificationPresenter: one transient message at a time
"""

from weatherify.client.app import WeatherifyApp
from weatherify.client.navigation import BrowserNavigator, Navigator
from weatherify.client.notifications import NotificationPresenter
from weatherify.client.playlist import PlaylistRequester
from weatherify.client.session import SessionStatusChecker
from weatherify.client.store import AppState, Notification, Store
from weatherify.client.view import ViewModel, render_text, render_view
from weatherify.client.weather import LocationWeatherResolver

__all__ = [
    "WeatherifyApp",
    "Navigator",
    "BrowserNavigator",
    "NotificationPresenter",
    "PlaylistRequester",
    "SessionStatusChecker",
    "LocationWeatherResolver",
    "AppState",
    "Notification",
    "Store",
    "ViewModel",
    "render_view",
    "render_text",
]
