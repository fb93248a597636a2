"""Weatherify: weather-mood playlists."""

__version__ = "0.1.0"
