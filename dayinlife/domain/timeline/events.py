"""
Materialized day events.

DayEvent is a discriminated union on ``type``; every variant carries
``start_time`` and serializes directly to JSON via ``model_dump``.
"""

from __future__ import annotations

import datetime as _dt
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from dayinlife.domain.timeline.models import Activity, Checkin


class Photo(BaseModel):
    """Photo attached to a check-in."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str
    checkin_id: str
    photo_url: str
    photo_url_cached: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


class CheckinWithPhotos(Checkin):
    """Check-in as presented in a day event."""

    photos: tuple[Photo, ...] = ()

    @classmethod
    def from_checkin(cls, checkin: Checkin, photos: Optional[list[Photo]] = None) -> CheckinWithPhotos:
        return cls(**checkin.model_dump(), photos=tuple(photos or ()))


class CheckinGroupEvent(BaseModel):
    """Consecutive standalone check-ins shown as one tile."""

    model_config = ConfigDict(frozen=True)

    type: Literal["checkin_group"] = "checkin_group"
    start_time: _dt.datetime
    checkins: tuple[CheckinWithPhotos, ...]
    static_map_url: Optional[str] = None


class MappedActivityEvent(BaseModel):
    """Tracked activity with no check-ins inside its interval."""

    model_config = ConfigDict(frozen=True)

    type: Literal["mapped_activity"] = "mapped_activity"
    start_time: _dt.datetime
    activity: Activity
    static_map_url: Optional[str] = None


class MappedActivityWithCheckinsEvent(BaseModel):
    """Tracked activity with the check-ins made while it was running."""

    model_config = ConfigDict(frozen=True)

    type: Literal["mapped_activity_with_checkins"] = "mapped_activity_with_checkins"
    start_time: _dt.datetime
    activity: Activity
    checkins: tuple[CheckinWithPhotos, ...]
    static_map_url: Optional[str] = None


class UnmappedActivityEvent(BaseModel):
    """Activity without a track; never has a map."""

    model_config = ConfigDict(frozen=True)

    type: Literal["unmapped_activity"] = "unmapped_activity"
    start_time: _dt.datetime
    activity: Activity
    static_map_url: None = None


DayEvent = Annotated[
    Union[
        CheckinGroupEvent,
        MappedActivityEvent,
        MappedActivityWithCheckinsEvent,
        UnmappedActivityEvent,
    ],
    Field(discriminator="type"),
]
