"""Weather sample and mood classification models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


# Classification thresholds
RAINY_PRECIPITATION_MM = 1.0
CLOUDY_COVER_PERCENT = 60


class Mood(str, Enum):
    """Weather mood that drives which playlist is requested."""

    SUNNY = "sunny"
    CLOUDY = "cloudy"
    RAINY = "rainy"
    UNKNOWN = "unknown"

    @property
    def is_set(self) -> bool:
        """Whether this mood can be sent to the playlist backend."""
        return self is not Mood.UNKNOWN


class WeatherSample(BaseModel):
    """Current conditions at the device location.

    Only the fields the mood classification needs are kept. The sample is
    transient: once classified, only the mood and location name survive.
    """

    precipitation_mm: float = Field(..., ge=0, description="Precipitation in millimeters")
    cloud_cover_percent: int = Field(..., ge=0, le=100, description="Total cloud cover")
    location_name: str = Field(..., description="Display name of the location")

    @classmethod
    def from_current_payload(cls, data: dict[str, Any]) -> WeatherSample:
        """Build a sample from a weatherapi.com style `current.json` body.

        Raises:
            KeyError, TypeError: If a required field is missing
            pydantic.ValidationError: If a field is out of range
        """
        return cls(
            precipitation_mm=data["current"]["precip_mm"],
            cloud_cover_percent=data["current"]["cloud"],
            location_name=data["location"]["name"],
        )

    def to_current_payload(self) -> dict[str, Any]:
        """Serialize back into the `current.json` subset the client reads."""
        return {
            "location": {"name": self.location_name},
            "current": {
                "precip_mm": self.precipitation_mm,
                "cloud": self.cloud_cover_percent,
            },
        }

    @property
    def mood(self) -> Mood:
        return classify_weather(self.precipitation_mm, self.cloud_cover_percent)


def classify_weather(precipitation_mm: float, cloud_cover_percent: float) -> Mood:
    """Classify current conditions into a mood.

    Rules are evaluated in order, first match wins:
        1. precipitation >= 1.0 mm -> rainy
        2. cloud cover >= 60% -> cloudy
        3. cloud cover < 60% and no precipitation -> sunny
        4. otherwise (light precipitation under a mostly clear sky) -> unknown
    """
    if precipitation_mm >= RAINY_PRECIPITATION_MM:
        return Mood.RAINY
    if cloud_cover_percent >= CLOUDY_COVER_PERCENT:
        return Mood.CLOUDY
    if precipitation_mm == 0:
        return Mood.SUNNY
    return Mood.UNKNOWN
