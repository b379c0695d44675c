"""
Ports (Interfaces) for weather resolution.

Design Pattern: Ports & Adapters (Hexagonal Architecture)
"""

import datetime as _dt
from typing import Optional, Protocol, runtime_checkable

from dayinlife.domain.weather.models import HistoricalWeather, WeatherCacheRow


@runtime_checkable
class IWeatherCache(Protocol):
    """
    Port for the daily weather cache.

    Implementations:
    - InMemoryWeatherCache: tests and local development
    - MongoWeatherCache: persistent, upsert keyed by (date, country, region)

    Rows are written at least once; concurrent writers for the same key
    must converge to a single row.
    """

    async def find(self, date: _dt.date, country: str) -> Optional[WeatherCacheRow]:
        """
        Look up cached weather.

        Args:
            date: Calendar date
            country: Country name

        Returns:
            Cached row or None
        """
        ...

    async def upsert(self, row: WeatherCacheRow) -> WeatherCacheRow:
        """
        Insert or replace a row.

        Args:
            row: Row to store

        Returns:
            Stored row
        """
        ...


@runtime_checkable
class IWeatherProvider(Protocol):
    """
    Port for historical weather.

    Implementations:
    - OpenMeteoClient: Open-Meteo archive API
    """

    async def fetch_historical(
        self, latitude: float, longitude: float, date: _dt.date
    ) -> HistoricalWeather:
        """
        Fetch observed weather for one day.

        Args:
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees
            date: Calendar date (not in the future)

        Returns:
            HistoricalWeather

        Raises:
            ValidationError: Coordinates out of range or future date
            WeatherUnavailableError: Provider has no data for the date
            ExternalServiceError: Provider call failed
        """
        ...
