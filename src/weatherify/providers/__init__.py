"""Weather data providers."""

from weatherify.providers.base import (
    AuthenticationError,
    ProviderError,
    RateLimitError,
    WeatherProvider,
)
from weatherify.providers.proxy import ProxyWeatherProvider
from weatherify.providers.weatherapi import WeatherApiProvider

__all__ = [
    "WeatherProvider",
    "ProviderError",
    "RateLimitError",
    "AuthenticationError",
    "WeatherApiProvider",
    "ProxyWeatherProvider",
]
