"""
Event sequencing.

Merges mapped activities, unmapped activities and standalone check-ins
into one chronological stream, then groups consecutive check-ins. A
pending check-in group is flushed every time an activity interrupts it,
so a group never spans an activity.
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence, Union

import structlog

from dayinlife.domain.timeline.models import (
    ActivityEntry,
    Checkin,
    CheckinGroup,
    MappedActivity,
    SequencedEvent,
    UnmappedActivity,
)

logger = structlog.get_logger(__name__)


class EntryKind(IntEnum):
    """Tag of a timeline entry; the value is its tie-break priority."""

    MAPPED_ACTIVITY = 0
    UNMAPPED_ACTIVITY = 1
    CHECKIN = 2


@dataclass(slots=True, frozen=True)
class _Entry:
    kind: EntryKind
    start_time: _dt.datetime
    item: Union[MappedActivity, UnmappedActivity, Checkin]


class EventSequencer:
    """Builds the ordered, grouped event stream of a day.

    Entries sharing a timestamp are ordered mapped, unmapped, check-in;
    within one kind the input order is kept (stable sort).
    """

    def sequence(
        self,
        mapped: Sequence[MappedActivity],
        unmapped: Sequence[UnmappedActivity],
        standalone: Sequence[Checkin],
    ) -> list[SequencedEvent]:
        entries = self._tag(mapped, unmapped, standalone)
        entries.sort(key=lambda e: (e.start_time, e.kind))

        events: list[SequencedEvent] = []
        pending: list[Checkin] = []

        for entry in entries:
            if entry.kind is EntryKind.CHECKIN:
                pending.append(entry.item)  # type: ignore[arg-type]
                continue

            if pending:
                events.append(CheckinGroup(members=tuple(pending)))
                pending = []
            events.append(self._activity_entry(entry))

        if pending:
            events.append(CheckinGroup(members=tuple(pending)))

        logger.debug("Timeline sequenced", entries=len(entries), events=len(events))
        return events

    @staticmethod
    def _tag(
        mapped: Sequence[MappedActivity],
        unmapped: Sequence[UnmappedActivity],
        standalone: Sequence[Checkin],
    ) -> list[_Entry]:
        entries = [_Entry(EntryKind.MAPPED_ACTIVITY, m.start_time, m) for m in mapped]
        entries += [_Entry(EntryKind.UNMAPPED_ACTIVITY, u.start_time, u) for u in unmapped]
        entries += [_Entry(EntryKind.CHECKIN, c.time, c) for c in standalone]
        return entries

    @staticmethod
    def _activity_entry(entry: _Entry) -> ActivityEntry:
        item = entry.item
        if isinstance(item, MappedActivity):
            return ActivityEntry(
                activity=item.activity,
                mapped=True,
                checkins=tuple(item.assigned_checkins),
            )
        return ActivityEntry(activity=item.activity, mapped=False)  # type: ignore[union-attr]
