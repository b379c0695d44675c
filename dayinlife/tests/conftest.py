"""
Shared fixtures for dayinlife tests.

Records are built through factory fixtures so each test states only
the fields it cares about.
"""

import datetime as _dt
from typing import Any, Callable, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from dayinlife.domain.timeline.events import Photo
from dayinlife.domain.timeline.models import Activity, ActivitySource, Checkin
from dayinlife.domain.timeline.ports import IMapReferenceGenerator, IPhotoLookup
from dayinlife.domain.weather.models import HistoricalWeather
from dayinlife.domain.weather.ports import IWeatherProvider
from dayinlife.infrastructure.weather.cache import InMemoryWeatherCache

DAY = _dt.date(2025, 1, 15)


# ═══════════════════════════════════════════════════════════
# TIME FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def day() -> _dt.date:
    """Reference day of all tests."""
    return DAY


@pytest.fixture
def at() -> Callable[[str], _dt.datetime]:
    """Build a UTC instant on the reference day from "HH:MM" or "HH:MM:SS"."""

    def _at(clock: str) -> _dt.datetime:
        parts = [int(p) for p in clock.split(":")]
        while len(parts) < 3:
            parts.append(0)
        return _dt.datetime(DAY.year, DAY.month, DAY.day, *parts, tzinfo=_dt.timezone.utc)

    return _at


# ═══════════════════════════════════════════════════════════
# DOMAIN MODEL FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def make_checkin(at: Callable[[str], _dt.datetime]) -> Callable[..., Checkin]:
    """Check-in factory; defaults to a venue in Milan."""

    def _make(
        checkin_id: str,
        clock: str,
        latitude: float = 45.4642,
        longitude: float = 9.19,
        country: Optional[str] = "Italy",
        **extra: Any,
    ) -> Checkin:
        return Checkin(
            id=checkin_id,
            time=at(clock),
            latitude=latitude,
            longitude=longitude,
            country=country,
            venue_name=extra.pop("venue_name", f"Venue {checkin_id}"),
            **extra,
        )

    return _make


@pytest.fixture
def make_activity(at: Callable[[str], _dt.datetime]) -> Callable[..., Activity]:
    """Activity factory; pass track=True for a mapped (tracked) activity."""

    def _make(
        activity_id: str,
        clock: str,
        duration_seconds: Optional[int] = 3600,
        track: bool = False,
        source: ActivitySource = ActivitySource.GARMIN,
        **extra: Any,
    ) -> Activity:
        geometry = "LINESTRING(9.19 45.46, 9.20 45.47, 9.21 45.48)" if track else None
        return Activity(
            id=activity_id,
            source=source,
            start_time=at(clock),
            duration_seconds=duration_seconds,
            track_geometry=extra.pop("track_geometry", geometry),
            activity_type=extra.pop("activity_type", "running"),
            **extra,
        )

    return _make


@pytest.fixture
def sample_photo() -> Photo:
    """Photo attached to check-in "c1"."""
    return Photo(
        id="p1",
        checkin_id="c1",
        photo_url="https://fastly.4sqi.net/img/general/original/p1.jpg",
        width=1440,
        height=1920,
    )


@pytest.fixture
def sample_historical_weather(day: _dt.date) -> HistoricalWeather:
    """Rainy day, 8.4° to 15.1° (mean rounds to 12)."""
    return HistoricalWeather(
        date=day,
        temperature_max=15.1,
        temperature_min=8.4,
        precipitation=6.2,
        weather_code=63,
        description="Rain: Moderate intensity",
    )


# ═══════════════════════════════════════════════════════════
# PORT MOCKS
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def mock_photo_lookup() -> Any:
    """Photo lookup returning no photos."""
    lookup = AsyncMock(spec=IPhotoLookup)
    lookup.find_photos_for_checkin_ids = AsyncMock(return_value={})
    return lookup


@pytest.fixture
def mock_map_generator() -> Any:
    """Map generator returning a fixed URL per method."""
    generator = MagicMock(spec=IMapReferenceGenerator)
    generator.map_for_points = MagicMock(return_value="https://maps.test/points.png")
    generator.map_for_track = MagicMock(return_value="https://maps.test/track.png")
    generator.map_for_track_with_points = MagicMock(
        return_value="https://maps.test/track-points.png"
    )
    return generator


@pytest.fixture
def mock_weather_provider(sample_historical_weather: HistoricalWeather) -> Any:
    """Weather provider answering with sample_historical_weather."""
    provider = AsyncMock(spec=IWeatherProvider)
    provider.fetch_historical = AsyncMock(return_value=sample_historical_weather)
    return provider


@pytest.fixture
def weather_cache() -> InMemoryWeatherCache:
    """Empty in-memory weather cache."""
    return InMemoryWeatherCache()
