"""
Ports (Interfaces) for event materialization.

Design Pattern: Ports & Adapters (Hexagonal Architecture)
"""

from typing import Optional, Protocol, Sequence, runtime_checkable

from dayinlife.domain.timeline.events import Photo


@runtime_checkable
class IPhotoLookup(Protocol):
    """
    Port for check-in photo storage.

    Implementations must answer for a whole batch of check-ins in a
    single call.
    """

    async def find_photos_for_checkin_ids(self, checkin_ids: Sequence[str]) -> dict[str, list[Photo]]:
        """
        Fetch photos for several check-ins.

        Args:
            checkin_ids: Check-in identifiers

        Returns:
            Photos keyed by check-in id; ids without photos may be absent
        """
        ...


@runtime_checkable
class IMapReferenceGenerator(Protocol):
    """
    Port for static map image references.

    Every method returns a URL, or None when nothing can be drawn.
    Points are (latitude, longitude) pairs.
    """

    def map_for_points(self, points: Sequence[tuple[float, float]]) -> Optional[str]:
        """Path through the points plus one (possibly clustered) marker per point."""
        ...

    def map_for_track(self, geometry: str) -> Optional[str]:
        """Activity track only."""
        ...

    def map_for_track_with_points(
        self, geometry: str, points: Sequence[tuple[float, float]]
    ) -> Optional[str]:
        """Activity track plus markers for the check-ins made during it."""
        ...
