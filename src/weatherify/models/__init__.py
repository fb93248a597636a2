"""Domain models for Weatherify."""

from weatherify.models.location import Coordinates
from weatherify.models.session import (
    LoginMarkers,
    SessionState,
    SessionStatus,
    strip_login_markers,
)
from weatherify.models.weather import Mood, WeatherSample, classify_weather

__all__ = [
    # Location
    "Coordinates",
    # Weather
    "Mood",
    "WeatherSample",
    "classify_weather",
    # Session
    "LoginMarkers",
    "SessionState",
    "SessionStatus",
    "strip_login_markers",
]
