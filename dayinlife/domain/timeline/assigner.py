"""Check-in assignment to the tracked activity that contains it."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

import structlog

from dayinlife.domain.timeline.models import Checkin, MappedActivity

logger = structlog.get_logger(__name__)


class CheckinAssigner:
    """Assigns check-ins to mapped activities using a first-match policy.

    For each check-in (input order) the mapped activities are scanned in
    their given order and the first one whose closed interval contains the
    check-in time wins. Overlapping activities are not disambiguated.
    """

    def assign(
        self,
        checkins: Iterable[Checkin],
        mapped_activities: Sequence[MappedActivity],
    ) -> list[Checkin]:
        """Fill ``assigned_checkins`` in place and return the standalone ones."""
        standalone: list[Checkin] = []

        for checkin in checkins:
            owner = self._find_container(checkin, mapped_activities)
            if owner is None:
                standalone.append(checkin)
            else:
                owner.assigned_checkins.append(checkin)

        logger.debug(
            "Check-ins assigned",
            standalone=len(standalone),
            assigned=sum(len(m.assigned_checkins) for m in mapped_activities),
        )
        return standalone

    @staticmethod
    def _find_container(
        checkin: Checkin, mapped_activities: Sequence[MappedActivity]
    ) -> Optional[MappedActivity]:
        for mapped in mapped_activities:
            if mapped.contains(checkin.time):
                return mapped
        return None
