"""
Tests for WeatherResolver.

Uses the in-memory cache and a mocked provider.
"""

import datetime as _dt
from typing import Any
from unittest.mock import AsyncMock

import pytest

from dayinlife.domain.shared.errors import CacheError, WeatherUnavailableError
from dayinlife.domain.weather.models import WeatherCacheRow
from dayinlife.domain.weather.ports import IWeatherCache
from dayinlife.domain.weather.resolver import WeatherResolver
from dayinlife.infrastructure.weather.cache import InMemoryWeatherCache


@pytest.fixture
def resolver(weather_cache: InMemoryWeatherCache, mock_weather_provider: Any) -> WeatherResolver:
    return WeatherResolver(cache=weather_cache, provider=mock_weather_provider)


# ═══════════════════════════════════════════════════════════
# COUNTRY SELECTION
# ═══════════════════════════════════════════════════════════


def test_dominant_country_is_mode(make_checkin: Any) -> None:
    checkins = [
        make_checkin("c1", "09:00", country="France"),
        make_checkin("c2", "10:00", country="Italy"),
        make_checkin("c3", "11:00", country="Italy"),
    ]

    assert WeatherResolver.dominant_country(checkins) == "Italy"


def test_dominant_country_tie_goes_to_first_seen(make_checkin: Any) -> None:
    checkins = [
        make_checkin("c1", "09:00", country="France"),
        make_checkin("c2", "10:00", country="Italy"),
    ]

    assert WeatherResolver.dominant_country(checkins) == "France"


def test_dominant_country_ignores_missing(make_checkin: Any) -> None:
    checkins = [make_checkin("c1", "09:00", country=None), make_checkin("c2", "10:00", country="Spain")]

    assert WeatherResolver.dominant_country(checkins) == "Spain"


# ═══════════════════════════════════════════════════════════
# RESOLUTION
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_no_checkins_resolves_to_none(
    resolver: WeatherResolver, mock_weather_provider: Any, day: _dt.date
) -> None:
    assert await resolver.resolve(day, []) is None
    mock_weather_provider.fetch_historical.assert_not_awaited()


@pytest.mark.asyncio
async def test_no_country_resolves_to_none(
    resolver: WeatherResolver, mock_weather_provider: Any, make_checkin: Any, day: _dt.date
) -> None:
    result = await resolver.resolve(day, [make_checkin("c1", "09:00", country=None)])

    assert result is None
    mock_weather_provider.fetch_historical.assert_not_awaited()


@pytest.mark.asyncio
async def test_cache_miss_fetches_at_first_checkin_and_caches(
    resolver: WeatherResolver,
    weather_cache: InMemoryWeatherCache,
    mock_weather_provider: Any,
    make_checkin: Any,
    day: _dt.date,
) -> None:
    checkins = [
        make_checkin("c1", "18:00", latitude=48.85, longitude=2.35, country="France"),
        make_checkin("c2", "09:00", latitude=45.46, longitude=9.19, country="Italy"),
        make_checkin("c3", "10:00", latitude=45.47, longitude=9.20, country="Italy"),
    ]

    summary = await resolver.resolve(day, checkins)

    assert summary is not None
    assert summary.country == "Italy"
    assert summary.temperature == 12
    assert summary.condition == "Rain"
    assert summary.icon == "🌧"
    mock_weather_provider.fetch_historical.assert_awaited_once_with(48.85, 2.35, day)

    cached = await weather_cache.find(day, "Italy")
    assert cached is not None
    assert cached.temp_celsius == 12


@pytest.mark.asyncio
async def test_cache_hit_skips_fetch(
    resolver: WeatherResolver,
    weather_cache: InMemoryWeatherCache,
    mock_weather_provider: Any,
    make_checkin: Any,
    day: _dt.date,
) -> None:
    await weather_cache.upsert(
        WeatherCacheRow(
            date=day, country="Italy", temp_celsius=21, condition="Clear sky", weather_icon="☀️"
        )
    )

    summary = await resolver.resolve(day, [make_checkin("c1", "09:00")])

    assert summary is not None
    assert summary.temperature == 21
    assert summary.icon == "☀️"
    mock_weather_provider.fetch_historical.assert_not_awaited()


@pytest.mark.asyncio
async def test_second_resolve_uses_cache(
    resolver: WeatherResolver, mock_weather_provider: Any, make_checkin: Any, day: _dt.date
) -> None:
    checkins = [make_checkin("c1", "09:00")]

    first = await resolver.resolve(day, checkins)
    second = await resolver.resolve(day, checkins)

    assert first == second
    assert mock_weather_provider.fetch_historical.await_count == 1


@pytest.mark.asyncio
async def test_fetch_failure_resolves_to_none(
    weather_cache: InMemoryWeatherCache, make_checkin: Any, day: _dt.date
) -> None:
    provider = AsyncMock()
    provider.fetch_historical = AsyncMock(
        side_effect=WeatherUnavailableError("No weather data available for the specified date")
    )
    resolver = WeatherResolver(cache=weather_cache, provider=provider)

    assert await resolver.resolve(day, [make_checkin("c1", "09:00")]) is None
    assert weather_cache.size() == 0


@pytest.mark.asyncio
async def test_cache_errors_do_not_prevent_weather(
    mock_weather_provider: Any, make_checkin: Any, day: _dt.date
) -> None:
    cache = AsyncMock(spec=IWeatherCache)
    cache.find = AsyncMock(side_effect=CacheError("connection refused"))
    cache.upsert = AsyncMock(side_effect=CacheError("connection refused"))
    resolver = WeatherResolver(cache=cache, provider=mock_weather_provider)

    summary = await resolver.resolve(day, [make_checkin("c1", "09:00")])

    assert summary is not None
    assert summary.temperature == 12
