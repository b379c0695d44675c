"""
Weather resolution for a day.

Picks the country the user spent most check-ins in, serves it from the
weather cache when possible and otherwise fetches historical weather
and stores it. Failures resolve to "no weather" and never propagate.
"""

from __future__ import annotations

import datetime as _dt
from collections import Counter
from typing import Optional, Sequence

import structlog

from dayinlife.domain.shared.errors import DomainError
from dayinlife.domain.timeline.models import Checkin
from dayinlife.domain.weather.conditions import condition_label, condition_to_icon
from dayinlife.domain.weather.models import WeatherCacheRow, WeatherSummary
from dayinlife.domain.weather.ports import IWeatherCache, IWeatherProvider

logger = structlog.get_logger(__name__)


class WeatherResolver:
    """Resolves the weather summary of a day from its check-ins.

    Dependencies (injected via Ports):
    - cache: IWeatherCache - (date, country) lookup and upsert
    - provider: IWeatherProvider - historical weather fetch on miss

    Example:
        >>> resolver = WeatherResolver(cache=cache, provider=open_meteo)
        >>> summary = await resolver.resolve(date(2025, 1, 15), checkins)
    """

    def __init__(self, cache: IWeatherCache, provider: IWeatherProvider) -> None:
        self.cache = cache
        self.provider = provider

    async def resolve(
        self, date: _dt.date, checkins: Sequence[Checkin]
    ) -> Optional[WeatherSummary]:
        country = self.dominant_country(checkins)
        if country is None:
            return None

        try:
            cached = await self.cache.find(date, country)
        except DomainError as e:
            logger.warning("Weather cache lookup failed", date=str(date), country=country, error=str(e))
            cached = None

        if cached is not None:
            logger.debug("Weather cache hit", date=str(date), country=country)
            return cached.to_summary()

        logger.debug("Weather cache miss", date=str(date), country=country)

        latitude, longitude = checkins[0].point()
        try:
            observed = await self.provider.fetch_historical(latitude, longitude, date)
        except Exception as e:
            logger.warning("Weather fetch failed", date=str(date), country=country, error=str(e))
            return None

        label = condition_label(observed.weather_code)
        row = WeatherCacheRow(
            date=date,
            country=country,
            temp_celsius=observed.mean_temperature,
            condition=label,
            weather_icon=condition_to_icon(label),
        )

        try:
            row = await self.cache.upsert(row)
        except DomainError as e:
            logger.warning("Weather cache write failed", date=str(date), country=country, error=str(e))

        return row.to_summary()

    @staticmethod
    def dominant_country(checkins: Sequence[Checkin]) -> Optional[str]:
        """Most frequent non-empty country; ties go to the first encountered."""
        counts = Counter(c.country for c in checkins if c.country)
        if not counts:
            return None
        # Counter preserves insertion order, most_common is stable on ties
        return counts.most_common(1)[0][0]
