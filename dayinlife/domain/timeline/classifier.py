"""Activity classification: mapped (tracked interval) vs unmapped (point)."""

from __future__ import annotations

from typing import Iterable

import structlog

from dayinlife.domain.timeline.models import (
    Activity,
    ClassifiedActivities,
    MappedActivity,
    UnmappedActivity,
)

logger = structlog.get_logger(__name__)


class ActivityClassifier:
    """Partitions a day's activities by presence of a track geometry.

    Input order (Strava records, then Garmin records) is preserved in both
    partitions; later stages rely on it for tie-breaks.
    """

    def classify(self, activities: Iterable[Activity]) -> ClassifiedActivities:
        mapped: list[MappedActivity] = []
        unmapped: list[UnmappedActivity] = []

        for activity in activities:
            if activity.has_track:
                mapped.append(MappedActivity(activity=activity))
            else:
                unmapped.append(UnmappedActivity(activity=activity))

        logger.debug("Activities classified", mapped=len(mapped), unmapped=len(unmapped))
        return ClassifiedActivities(mapped=mapped, unmapped=unmapped)
