"""
In-memory weather cache with TTL support.

Implements IWeatherCache for tests and local development. Rows are
process-local and lost on restart; use MongoWeatherCache to persist.
"""

import datetime as _dt
import time
from dataclasses import dataclass
from typing import Optional

import structlog

from dayinlife.domain.weather.models import WeatherCacheRow

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class _CacheEntry:
    row: WeatherCacheRow
    expires_at: float

    def is_expired(self) -> bool:
        return time.time() > self.expires_at


class InMemoryWeatherCache:
    """In-memory daily weather cache with TTL."""

    def __init__(self, default_ttl_seconds: int = 2592000) -> None:
        """Initialize cache.

        Args:
            default_ttl_seconds: Cache TTL (default 30 days)
        """
        self.default_ttl = default_ttl_seconds
        self._cache: dict[str, _CacheEntry] = {}

    def _make_key(self, date: _dt.date, country: str, region: Optional[str] = None) -> str:
        """Generate cache key.

        Example:
            >>> InMemoryWeatherCache()._make_key(date(2025, 1, 15), "Italy")
            '2025-01-15:Italy:'
        """
        return f"{date.isoformat()}:{country}:{region or ''}"

    async def find(self, date: _dt.date, country: str) -> Optional[WeatherCacheRow]:
        """Get cached weather for (date, country) with no region."""
        key = self._make_key(date, country)
        entry = self._cache.get(key)

        if entry is None:
            logger.debug("Cache miss", key=key)
            return None

        if entry.is_expired():
            logger.debug("Cache expired", key=key)
            del self._cache[key]
            return None

        logger.debug("Cache hit", key=key)
        return entry.row

    async def upsert(self, row: WeatherCacheRow) -> WeatherCacheRow:
        """Insert or replace the row for its (date, country, region)."""
        key = self._make_key(row.date, row.country, row.region)
        self._cache[key] = _CacheEntry(row=row, expires_at=time.time() + self.default_ttl)
        logger.debug("Cached weather", key=key, ttl=self.default_ttl)
        return row

    def clear(self) -> None:
        """Clear all cache entries."""
        self._cache.clear()
        logger.info("Cache cleared")

    def remove_expired(self) -> int:
        """Remove expired entries.

        Returns:
            Number of entries removed
        """
        expired_keys = [key for key, entry in self._cache.items() if entry.is_expired()]

        for key in expired_keys:
            del self._cache[key]

        if expired_keys:
            logger.info("Removed expired entries", count=len(expired_keys))

        return len(expired_keys)

    def size(self) -> int:
        """Get cache size."""
        return len(self._cache)
