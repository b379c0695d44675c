"""
Event materialization.

Turns sequenced structures into DayEvents, attaching check-in photos and
static map references. Lookup failures are isolated per event: the
event is still emitted, with empty photos or no map.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Optional, Sequence

import structlog

from dayinlife.domain.timeline.events import (
    CheckinGroupEvent,
    CheckinWithPhotos,
    DayEvent,
    MappedActivityEvent,
    MappedActivityWithCheckinsEvent,
    Photo,
    UnmappedActivityEvent,
)
from dayinlife.domain.timeline.models import (
    ActivityEntry,
    Checkin,
    CheckinGroup,
    SequencedEvent,
)
from dayinlife.domain.timeline.ports import IMapReferenceGenerator, IPhotoLookup

logger = structlog.get_logger(__name__)


class EventMaterializer:
    """Produces the final DayEvent list.

    Dependencies (injected via Ports):
    - photo_lookup: IPhotoLookup - batched photo fetch per event
    - map_generator: IMapReferenceGenerator - static map URLs

    Example:
        >>> materializer = EventMaterializer(photo_repo, static_maps)
        >>> events = await materializer.materialize(sequenced)
    """

    def __init__(self, photo_lookup: IPhotoLookup, map_generator: IMapReferenceGenerator) -> None:
        self.photo_lookup = photo_lookup
        self.map_generator = map_generator

    async def materialize(self, sequenced: Sequence[SequencedEvent]) -> list[DayEvent]:
        """Materialize every event; output order equals input order."""
        return list(await asyncio.gather(*(self._materialize_one(item) for item in sequenced)))

    async def _materialize_one(self, item: SequencedEvent) -> DayEvent:
        if isinstance(item, CheckinGroup):
            return await self._checkin_group(item)
        return await self._activity(item)

    async def _checkin_group(self, group: CheckinGroup) -> CheckinGroupEvent:
        checkins = await self._with_photos(group.members)
        static_map_url = self._safe_map(
            self.map_generator.map_for_points,
            [c.point() for c in group.members],
        )
        return CheckinGroupEvent(
            start_time=group.start_time,
            checkins=tuple(checkins),
            static_map_url=static_map_url,
        )

    async def _activity(self, entry: ActivityEntry) -> DayEvent:
        activity = entry.activity

        if not entry.mapped:
            return UnmappedActivityEvent(start_time=entry.start_time, activity=activity)

        geometry = activity.track_geometry or ""

        if not entry.checkins:
            return MappedActivityEvent(
                start_time=entry.start_time,
                activity=activity,
                static_map_url=self._safe_map(self.map_generator.map_for_track, geometry),
            )

        checkins = await self._with_photos(entry.checkins)
        static_map_url = self._safe_map(
            self.map_generator.map_for_track_with_points,
            geometry,
            [c.point() for c in entry.checkins],
        )
        return MappedActivityWithCheckinsEvent(
            start_time=entry.start_time,
            activity=activity,
            checkins=tuple(checkins),
            static_map_url=static_map_url,
        )

    async def _with_photos(self, checkins: Sequence[Checkin]) -> list[CheckinWithPhotos]:
        photos = await self._safe_photos([c.id for c in checkins])
        return [CheckinWithPhotos.from_checkin(c, photos.get(c.id)) for c in checkins]

    async def _safe_photos(self, checkin_ids: list[str]) -> dict[str, list[Photo]]:
        try:
            return await self.photo_lookup.find_photos_for_checkin_ids(checkin_ids)
        except Exception as e:
            logger.warning("Photo lookup failed", checkin_ids=checkin_ids, error=str(e))
            return {}

    @staticmethod
    def _safe_map(build: Callable[..., Optional[str]], *args: object) -> Optional[str]:
        try:
            return build(*args)
        except Exception as e:
            builder = getattr(build, "__name__", repr(build))
            logger.warning("Static map generation failed", builder=builder, error=str(e))
            return None
