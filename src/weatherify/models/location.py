"""Location models for weather lookups."""

from __future__ import annotations

import re
from typing import Self

from pydantic import BaseModel, Field


# Regex for parsing lat/long coordinates: "latitude,longitude"
# Supports optional +/- prefix for both values
COORDINATE_PATTERN = re.compile(
    r"^(?P<lat>[-+]?\d*\.?\d+)\s*,\s*(?P<lon>[-+]?\d*\.?\d+)$"
)


class Coordinates(BaseModel):
    """Geographic coordinates of the device (latitude/longitude).

    Latitude:
        - Negative (-) = south of equator
        - Positive (+) = north of equator
        - Range: -90 to +90

    Longitude:
        - Negative (-) = west of prime meridian
        - Positive (+) = east of prime meridian
        - Range: -180 to +180
    """

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Parse coordinates from string format 'latitude,longitude'.

        Examples:
            '48.8566,2.3522' -> Paris
            '-33.8688,151.2093' -> Sydney
        """
        match = COORDINATE_PATTERN.match(value.strip())
        if not match:
            raise ValueError(
                f"Invalid coordinate format: '{value}'. "
                "Expected format: 'latitude,longitude' (e.g., '48.8566,2.3522')"
            )
        return cls(
            latitude=float(match.group("lat")),
            longitude=float(match.group("lon")),
        )

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"

    def to_query(self) -> str:
        """Return the 'lat,lon' form weather providers accept as a query."""
        return str(self)
