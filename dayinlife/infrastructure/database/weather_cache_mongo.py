"""
MongoDB implementation of the daily weather cache.

One document per (date, country, region); writes are upserts so
repeated or concurrent writes for the same key converge to one row.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Optional

import structlog
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from dayinlife.domain.shared.errors import CacheError
from dayinlife.domain.weather.models import WeatherCacheRow

logger = structlog.get_logger(__name__)


class MongoWeatherCache:
    """
    MongoDB implementation of IWeatherCache.

    Storage design:
    - Collection: daily_weather
    - Unique index on (date, country, region)

    Example:
        >>> from motor.motor_asyncio import AsyncIOMotorClient
        >>> client = AsyncIOMotorClient("mongodb://localhost:27017")
        >>> cache = MongoWeatherCache(client.dayinlife)
        >>> row = await cache.find(date(2025, 1, 15), "Italy")
    """

    COLLECTION_NAME = "daily_weather"

    def __init__(self, db: AsyncIOMotorDatabase[Any]):
        """
        Initialize cache with MongoDB database.

        Creates indexes on first use.

        Args:
            db: Motor AsyncIOMotorDatabase instance
        """
        self.db = db
        self.collection = db[self.COLLECTION_NAME]
        self._indexes_created = False

    async def _ensure_indexes(self) -> None:
        if self._indexes_created:
            return

        await self.collection.create_index(
            [("date", 1), ("country", 1), ("region", 1)],
            unique=True,
            name="unique_date_country_region",
        )

        self._indexes_created = True

    def _to_document(self, row: WeatherCacheRow) -> dict[str, Any]:
        return {
            "date": row.date.isoformat(),
            "country": row.country,
            "region": row.region,
            "temp_celsius": row.temp_celsius,
            "condition": row.condition,
            "weather_icon": row.weather_icon,
        }

    def _from_document(self, doc: dict[str, Any]) -> WeatherCacheRow:
        return WeatherCacheRow(
            date=doc["date"],
            country=doc["country"],
            region=doc.get("region"),
            temp_celsius=doc["temp_celsius"],
            condition=doc["condition"],
            weather_icon=doc["weather_icon"],
        )

    async def find(self, date: _dt.date, country: str) -> Optional[WeatherCacheRow]:
        """Retrieve the region-less row for (date, country)."""
        try:
            await self._ensure_indexes()
            doc = await self.collection.find_one(
                {"date": date.isoformat(), "country": country, "region": None}
            )
        except PyMongoError as e:
            raise CacheError(f"Weather cache lookup failed: {e}") from e

        if doc is None:
            return None
        return self._from_document(doc)

    async def upsert(self, row: WeatherCacheRow) -> WeatherCacheRow:
        """Insert or replace the row keyed by (date, country, region)."""
        doc = self._to_document(row)
        try:
            await self._ensure_indexes()
            await self.collection.update_one(
                {"date": doc["date"], "country": doc["country"], "region": doc["region"]},
                {"$set": doc},
                upsert=True,
            )
        except PyMongoError as e:
            raise CacheError(f"Weather cache write failed: {e}") from e

        logger.debug("Weather cached", date=doc["date"], country=doc["country"])
        return row
