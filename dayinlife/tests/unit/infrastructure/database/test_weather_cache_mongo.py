"""Tests for MongoWeatherCache with a mocked Motor collection."""

import datetime as _dt
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from dayinlife.domain.shared.errors import CacheError
from dayinlife.domain.weather.models import WeatherCacheRow
from dayinlife.domain.weather.ports import IWeatherCache
from dayinlife.infrastructure.database.weather_cache_mongo import MongoWeatherCache

DAY = _dt.date(2025, 1, 15)


@pytest.fixture
def collection() -> Any:
    coll = MagicMock()
    coll.create_index = AsyncMock()
    coll.find_one = AsyncMock(return_value=None)
    coll.update_one = AsyncMock()
    return coll


@pytest.fixture
def cache(collection: Any) -> MongoWeatherCache:
    db = MagicMock()
    db.__getitem__.return_value = collection
    return MongoWeatherCache(db)


@pytest.fixture
def row() -> WeatherCacheRow:
    return WeatherCacheRow(
        date=DAY, country="Italy", temp_celsius=12, condition="Rain", weather_icon="🌧"
    )


def test_implements_port(cache: MongoWeatherCache) -> None:
    assert isinstance(cache, IWeatherCache)


@pytest.mark.asyncio
async def test_find_queries_region_less_row(cache: MongoWeatherCache, collection: Any) -> None:
    collection.find_one.return_value = {
        "_id": "abc",
        "date": "2025-01-15",
        "country": "Italy",
        "region": None,
        "temp_celsius": 12,
        "condition": "Rain",
        "weather_icon": "🌧",
    }

    found = await cache.find(DAY, "Italy")

    collection.find_one.assert_awaited_once_with(
        {"date": "2025-01-15", "country": "Italy", "region": None}
    )
    assert found is not None
    assert found.date == DAY
    assert found.to_summary().temperature == 12


@pytest.mark.asyncio
async def test_find_miss(cache: MongoWeatherCache) -> None:
    assert await cache.find(DAY, "Italy") is None


@pytest.mark.asyncio
async def test_upsert_keyed_by_date_country_region(
    cache: MongoWeatherCache, collection: Any, row: WeatherCacheRow
) -> None:
    stored = await cache.upsert(row)

    assert stored == row
    args, kwargs = collection.update_one.call_args
    assert args[0] == {"date": "2025-01-15", "country": "Italy", "region": None}
    assert args[1]["$set"]["temp_celsius"] == 12
    assert kwargs["upsert"] is True


@pytest.mark.asyncio
async def test_indexes_created_once(cache: MongoWeatherCache, collection: Any, row: WeatherCacheRow) -> None:
    await cache.upsert(row)
    await cache.find(DAY, "Italy")

    collection.create_index.assert_awaited_once()
    _, kwargs = collection.create_index.call_args
    assert kwargs["unique"] is True


@pytest.mark.asyncio
async def test_driver_errors_become_database_errors(cache: MongoWeatherCache, collection: Any) -> None:
    collection.find_one.side_effect = ServerSelectionTimeoutError("no servers")

    with pytest.raises(CacheError, match="Weather cache lookup failed"):
        await cache.find(DAY, "Italy")
