"""
Weather domain models.

WeatherSummary is what a day summary exposes; WeatherCacheRow is the
persisted shape keyed by (date, country, region); HistoricalWeather is
the provider payload for one day.
"""

from __future__ import annotations

import datetime as _dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class WeatherSummary(BaseModel):
    """Weather shown for a day.

    Example:
        >>> summary = WeatherSummary(
        ...     temperature=12, condition="Rain", icon="🌧", country="Italy"
        ... )
    """

    model_config = ConfigDict(frozen=True)

    temperature: int = Field(..., description="Mean temperature, °C (rounded)")
    condition: str = Field(..., description="Short condition label")
    icon: str = Field(..., description="Condition icon token")
    country: str = Field(..., description="Country the weather refers to")


class WeatherCacheRow(BaseModel):
    """Cached daily weather for one (date, country, region)."""

    model_config = ConfigDict(frozen=True)

    date: _dt.date
    country: str = Field(..., min_length=1)
    region: Optional[str] = None
    temp_celsius: int
    condition: str
    weather_icon: str

    def key(self) -> tuple[str, str, Optional[str]]:
        """Uniqueness key."""
        return self.date.isoformat(), self.country, self.region

    def to_summary(self) -> WeatherSummary:
        """Map to the presentation summary."""
        return WeatherSummary(
            temperature=self.temp_celsius,
            condition=self.condition,
            icon=self.weather_icon,
            country=self.country,
        )


class HistoricalWeather(BaseModel):
    """Observed weather of one day at one location."""

    model_config = ConfigDict(frozen=True)

    date: _dt.date
    temperature_max: float
    temperature_min: float
    precipitation: Optional[float] = None
    weather_code: Optional[int] = None
    description: str = "Unknown"

    @property
    def mean_temperature(self) -> int:
        """Midpoint of max/min, rounded to the nearest degree."""
        return round((self.temperature_max + self.temperature_min) / 2)
