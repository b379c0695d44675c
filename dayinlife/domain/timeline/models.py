"""
Timeline domain models.

Input records (Checkin, Activity) are immutable pydantic models as
delivered by the data-source ports. Runtime variants (MappedActivity,
UnmappedActivity) and sequencing structures (CheckinGroup, ActivityEntry)
are plain dataclasses that live only for one aggregation run.
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field


class ActivitySource(str, Enum):
    """Fitness provider that recorded an activity.

    Declaration order is the provider-concatenation order used when the
    day's activities are collected.
    """

    STRAVA = "strava"
    GARMIN = "garmin"


class Checkin(BaseModel):
    """Single venue visit.

    Example:
        >>> checkin = Checkin(
        ...     id="42",
        ...     time="2025-01-15T09:00:00Z",
        ...     latitude=45.4642,
        ...     longitude=9.19,
        ...     country="Italy",
        ...     venue_name="Bar Magenta",
        ...     category="Café",
        ... )
        >>> assert checkin.point() == (45.4642, 9.19)
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str = Field(..., description="Check-in identifier")
    time: AwareDatetime = Field(..., description="Check-in instant (timezone-aware)")
    latitude: float = Field(..., description="Venue latitude")
    longitude: float = Field(..., description="Venue longitude")
    country: Optional[str] = Field(None, description="Venue country")
    venue_name: str = Field(..., description="Venue name")
    category: Optional[str] = Field(None, description="Venue category")
    venue_id: Optional[str] = Field(None, description="Foursquare venue id")
    city: Optional[str] = Field(None, description="Venue city")
    timezone: Optional[str] = Field(None, description="IANA timezone of the venue")

    def point(self) -> tuple[float, float]:
        """(latitude, longitude) pair."""
        return self.latitude, self.longitude


class Activity(BaseModel):
    """Fitness activity as reported by a provider.

    Example:
        >>> run = Activity(
        ...     id="9001",
        ...     source=ActivitySource.GARMIN,
        ...     start_time="2025-01-15T10:00:00Z",
        ...     duration_seconds=3600,
        ...     track_geometry="LINESTRING(9.19 45.46, 9.20 45.47)",
        ...     activity_type="running",
        ... )
        >>> assert run.has_track
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str = Field(..., description="Provider activity identifier")
    source: ActivitySource = Field(..., description="Recording provider")
    start_time: AwareDatetime = Field(..., description="Start instant (timezone-aware)")
    duration_seconds: Optional[int] = Field(None, ge=0, description="Elapsed time")
    track_geometry: Optional[str] = Field(
        None, description="WKT LINESTRING, encoded polyline or WKB hex"
    )
    activity_type: Optional[str] = Field(None, description="e.g. running, cycling")
    name: Optional[str] = Field(None, description="User-facing title")
    distance_meters: Optional[float] = Field(None, ge=0)
    calories: Optional[float] = Field(None, ge=0)
    avg_heart_rate: Optional[int] = None
    max_heart_rate: Optional[int] = None
    url: Optional[str] = Field(None, description="Link to the provider page")

    @property
    def has_track(self) -> bool:
        """True when a non-empty track geometry is present."""
        return bool(self.track_geometry and self.track_geometry.strip())


# ═══════════════════════════════════════════════════════════
# RUNTIME VARIANTS (one aggregation run only)
# ═══════════════════════════════════════════════════════════


@dataclass(slots=True)
class MappedActivity:
    """Activity with a track, hence a closed time interval.

    assigned_checkins is filled in place by the CheckinAssigner.
    """

    activity: Activity
    assigned_checkins: list[Checkin] = field(default_factory=list)

    @property
    def start_time(self) -> _dt.datetime:
        return self.activity.start_time

    @property
    def end_time(self) -> _dt.datetime:
        seconds = self.activity.duration_seconds or 0
        return self.activity.start_time + _dt.timedelta(seconds=seconds)

    def contains(self, instant: _dt.datetime) -> bool:
        """Inclusive on both bounds."""
        return self.start_time <= instant <= self.end_time


@dataclass(slots=True, frozen=True)
class UnmappedActivity:
    """Activity without a track: an instantaneous event at start_time."""

    activity: Activity

    @property
    def start_time(self) -> _dt.datetime:
        return self.activity.start_time


@dataclass(slots=True, frozen=True)
class ClassifiedActivities:
    """Result of ActivityClassifier.classify()."""

    mapped: list[MappedActivity]
    unmapped: list[UnmappedActivity]


# ═══════════════════════════════════════════════════════════
# SEQUENCED STRUCTURES (input of the materializer)
# ═══════════════════════════════════════════════════════════


@dataclass(slots=True, frozen=True)
class CheckinGroup:
    """Run of consecutive standalone check-ins with no activity in between."""

    members: tuple[Checkin, ...]

    @property
    def start_time(self) -> _dt.datetime:
        return self.members[0].time


@dataclass(slots=True, frozen=True)
class ActivityEntry:
    """Activity in sequenced position, with the check-ins it contains."""

    activity: Activity
    mapped: bool
    checkins: tuple[Checkin, ...] = ()

    @property
    def start_time(self) -> _dt.datetime:
        return self.activity.start_time


SequencedEvent = Union[CheckinGroup, ActivityEntry]
