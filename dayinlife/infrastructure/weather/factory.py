"""Weather cache factory.

Environment-based backend selection:
- WEATHER_CACHE_BACKEND=mongodb: MongoWeatherCache (requires MONGODB_URI)
- WEATHER_CACHE_BACKEND=inmemory: InMemoryWeatherCache (default)

Every call builds a new cache; callers own the instance and inject it
into WeatherResolver.

Usage:
    from dayinlife.infrastructure.weather.factory import create_weather_cache

    cache = create_weather_cache()
    resolver = WeatherResolver(cache=cache, provider=open_meteo)
"""

from __future__ import annotations

from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from dayinlife.domain.weather.ports import IWeatherCache
from dayinlife.infrastructure.config import (
    get_mongodb_database,
    get_mongodb_uri,
    get_weather_cache_backend,
)
from dayinlife.infrastructure.database.weather_cache_mongo import MongoWeatherCache
from dayinlife.infrastructure.weather.cache import InMemoryWeatherCache


def create_mongo_database() -> AsyncIOMotorDatabase[Any]:
    """Motor database handle from MONGODB_URI / MONGODB_DATABASE.

    Raises:
        ValueError: If MONGODB_URI is not set
    """
    uri = get_mongodb_uri()
    if not uri:
        raise ValueError(
            "WEATHER_CACHE_BACKEND=mongodb but MONGODB_URI not set. "
            "Set MONGODB_URI in .env or use WEATHER_CACHE_BACKEND=inmemory"
        )
    client: AsyncIOMotorClient[Any] = AsyncIOMotorClient(uri)
    return client[get_mongodb_database()]


def create_weather_cache(db: Optional[AsyncIOMotorDatabase[Any]] = None) -> IWeatherCache:
    """Create weather cache based on WEATHER_CACHE_BACKEND env var.

    Args:
        db: Existing Motor database to reuse (mongodb backend only)

    Returns:
        IWeatherCache: Cache instance

    Raises:
        ValueError: If mongodb is selected without MONGODB_URI, or the
            backend name is unknown
    """
    mode = get_weather_cache_backend()

    if mode == "mongodb":
        return MongoWeatherCache(db if db is not None else create_mongo_database())

    if mode == "inmemory":
        return InMemoryWeatherCache()

    raise ValueError(
        f"Unknown WEATHER_CACHE_BACKEND '{mode}'. Use 'inmemory' or 'mongodb'"
    )
