"""
Ports (Interfaces) for day aggregation data sources.

Persistence and provider sync of the raw records live outside this
package; the aggregation service only depends on these protocols.

Design Pattern: Ports & Adapters (Hexagonal Architecture)
"""

import datetime as _dt
from typing import Optional, Protocol, TypeVar, runtime_checkable

from dayinlife.domain.timeline.models import Activity, Checkin

MetricT_co = TypeVar("MetricT_co", covariant=True)


@runtime_checkable
class ICheckinSource(Protocol):
    """Port for a user's check-ins."""

    async def find_by_user_and_range(
        self, user_id: str, start: _dt.datetime, end: _dt.datetime
    ) -> list[Checkin]:
        """
        Check-ins with start <= time <= end.

        Args:
            user_id: User identifier
            start: First instant (inclusive)
            end: Last instant (inclusive)

        Returns:
            Check-ins in any order
        """
        ...


@runtime_checkable
class IActivitySource(Protocol):
    """
    Port for one fitness provider's activities.

    One instance per provider (Strava, Garmin).
    """

    async def find_by_user_and_range(
        self, user_id: str, start: _dt.datetime, end: _dt.datetime
    ) -> list[Activity]:
        """
        Activities whose start time falls in [start, end].

        Args:
            user_id: User identifier
            start: First instant (inclusive)
            end: Last instant (inclusive)

        Returns:
            Activities of this provider
        """
        ...


@runtime_checkable
class IDailyMetricSource(Protocol[MetricT_co]):
    """
    Port for one kind of daily metric (steps, heart rate, sleep, calories).
    """

    async def find_by_user_and_date(self, user_id: str, date: _dt.date) -> Optional[MetricT_co]:
        """
        Metric record of the day.

        Args:
            user_id: User identifier
            date: Calendar date

        Returns:
            Record or None when the device reported nothing
        """
        ...
