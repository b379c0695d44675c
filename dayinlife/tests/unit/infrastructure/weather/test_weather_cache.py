"""Tests for InMemoryWeatherCache."""

import datetime as _dt
import time
from typing import Optional

import pytest

from dayinlife.domain.weather.models import WeatherCacheRow
from dayinlife.domain.weather.ports import IWeatherCache
from dayinlife.infrastructure.weather.cache import InMemoryWeatherCache

DAY = _dt.date(2025, 1, 15)


def _row(country: str = "Italy", temp: int = 12, region: Optional[str] = None) -> WeatherCacheRow:
    return WeatherCacheRow(
        date=DAY,
        country=country,
        region=region,
        temp_celsius=temp,
        condition="Rain",
        weather_icon="🌧",
    )


def test_implements_port() -> None:
    assert isinstance(InMemoryWeatherCache(), IWeatherCache)


@pytest.mark.asyncio
async def test_find_miss(weather_cache: InMemoryWeatherCache) -> None:
    assert await weather_cache.find(DAY, "Italy") is None


@pytest.mark.asyncio
async def test_upsert_then_find(weather_cache: InMemoryWeatherCache) -> None:
    row = _row()

    stored = await weather_cache.upsert(row)

    assert stored == row
    assert await weather_cache.find(DAY, "Italy") == row
    assert await weather_cache.find(DAY, "France") is None
    assert await weather_cache.find(_dt.date(2025, 1, 16), "Italy") is None


@pytest.mark.asyncio
async def test_upsert_replaces_same_key(weather_cache: InMemoryWeatherCache) -> None:
    await weather_cache.upsert(_row(temp=10))
    await weather_cache.upsert(_row(temp=14))

    found = await weather_cache.find(DAY, "Italy")

    assert found is not None and found.temp_celsius == 14
    assert weather_cache.size() == 1


@pytest.mark.asyncio
async def test_regional_rows_do_not_answer_country_lookup(weather_cache: InMemoryWeatherCache) -> None:
    await weather_cache.upsert(_row(region="Lombardy"))

    assert await weather_cache.find(DAY, "Italy") is None
    assert weather_cache.size() == 1


@pytest.mark.asyncio
async def test_expired_entries_are_dropped(monkeypatch: pytest.MonkeyPatch) -> None:
    cache = InMemoryWeatherCache(default_ttl_seconds=60)
    await cache.upsert(_row())

    now = time.time()
    monkeypatch.setattr(time, "time", lambda: now + 120)

    assert await cache.find(DAY, "Italy") is None
    assert cache.size() == 0


@pytest.mark.asyncio
async def test_remove_expired_and_clear(monkeypatch: pytest.MonkeyPatch) -> None:
    cache = InMemoryWeatherCache(default_ttl_seconds=60)
    await cache.upsert(_row("Italy"))
    await cache.upsert(_row("France"))

    now = time.time()
    monkeypatch.setattr(time, "time", lambda: now + 120)
    assert cache.remove_expired() == 2

    await cache.upsert(_row("Spain"))
    cache.clear()
    assert cache.size() == 0
