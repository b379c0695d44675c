"""Mapbox Static Images API URLs - Implements IMapReferenceGenerator port.

Builds image URLs only; nothing is fetched. The browser loads the image.

Key Features:
- Check-in path (orange) with numbered pins
- Nearby pins coalesced into one cluster pin sized by member count
- Activity track (blue) from WKT or encoded polyline
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence
from urllib.parse import quote

import structlog
from geopy.distance import great_circle

from dayinlife.infrastructure.config import get_mapbox_style, get_mapbox_token
from dayinlife.infrastructure.maps.geometry import (
    LatLon,
    dedupe_consecutive,
    encode_points,
    track_to_polyline,
)

logger = structlog.get_logger(__name__)

CHECKIN_COLOR = "ff6b35"
TRACK_COLOR = "3498db"

MIN_CLUSTER_THRESHOLD_M = 10.0
CLUSTER_THRESHOLD_RATIO = 0.025


@dataclass
class MarkerCluster:
    """Pin drawn at the anchor point for one or more nearby check-ins."""

    latitude: float
    longitude: float
    indices: list[int] = field(default_factory=list)

    @property
    def size(self) -> str:
        if len(self.indices) == 1:
            return "s"
        if len(self.indices) == 2:
            return "m"
        return "l"

    def overlay(self) -> str:
        label = self.indices[0] + 1
        return f"pin-{self.size}-{label}+{CHECKIN_COLOR}({self.longitude},{self.latitude})"


def distance_meters(a: LatLon, b: LatLon) -> float:
    """Great-circle distance between two (lat, lon) points."""
    return great_circle(a, b).meters


def cluster_threshold(points: Sequence[LatLon]) -> float:
    """
    Marker coalescing distance for a set of points.

    2.5% of the bounding-box diagonal, never below 10 meters.
    """
    if not points:
        return MIN_CLUSTER_THRESHOLD_M
    lats = [p[0] for p in points]
    lons = [p[1] for p in points]
    diagonal = distance_meters((min(lats), min(lons)), (max(lats), max(lons)))
    return max(MIN_CLUSTER_THRESHOLD_M, diagonal * CLUSTER_THRESHOLD_RATIO)


def cluster_points(points: Sequence[LatLon], threshold_m: float) -> list[MarkerCluster]:
    """
    Greedy clustering.

    Each unused point anchors a cluster and absorbs every later unused
    point within threshold_m of the anchor (not of the other members).
    """
    clusters: list[MarkerCluster] = []
    used: set[int] = set()

    for i, anchor in enumerate(points):
        if i in used:
            continue
        cluster = MarkerCluster(latitude=anchor[0], longitude=anchor[1], indices=[i])
        used.add(i)

        for j in range(i + 1, len(points)):
            if j in used:
                continue
            if distance_meters(anchor, points[j]) <= threshold_m:
                cluster.indices.append(j)
                used.add(j)

        clusters.append(cluster)

    return clusters


class MapboxStaticMapGenerator:
    """
    Static map URL builder implementing IMapReferenceGenerator port.

    Example:
        >>> maps = MapboxStaticMapGenerator(access_token="pk.test")
        >>> url = maps.map_for_points([(45.46, 9.19), (45.47, 9.20)])
        >>> assert url.startswith("https://api.mapbox.com/styles/v1/mapbox/streets-v12/static/")
    """

    BASE_URL = "https://api.mapbox.com/styles/v1"

    def __init__(
        self,
        access_token: Optional[str],
        style: str = "mapbox/streets-v12",
        width: int = 600,
        height: int = 400,
    ) -> None:
        """Initialize generator.

        Args:
            access_token: Mapbox token; without it every method returns None
            style: Mapbox style id
            width: Image width in pixels (rendered @2x)
            height: Image height in pixels (rendered @2x)
        """
        self.access_token = access_token
        self.style = style
        self.width = width
        self.height = height

    @classmethod
    def from_env(cls) -> "MapboxStaticMapGenerator":
        """Build from MAPBOX_TOKEN / MAPBOX_STYLE."""
        return cls(access_token=get_mapbox_token(), style=get_mapbox_style())

    @property
    def base_url(self) -> str:
        return f"{self.BASE_URL}/{self.style}/static"

    def map_for_points(self, points: Sequence[LatLon]) -> Optional[str]:
        """Check-in path plus numbered (clustered) pins."""
        if not points or not self._enabled():
            return None

        path = self._points_path(points)
        markers = self._markers(points)
        return self._url([path, markers])

    def map_for_track(self, geometry: str) -> Optional[str]:
        """Activity track only; None for WKB hex or unparseable WKT."""
        if not self._enabled():
            return None

        path = self._track_path(geometry)
        if path is None:
            return None
        return self._url([path])

    def map_for_track_with_points(
        self, geometry: str, points: Sequence[LatLon]
    ) -> Optional[str]:
        """Activity track plus pins for the check-ins made during it.

        Falls back to the check-in map when the track cannot be drawn.
        """
        if not self._enabled():
            return None

        path = self._track_path(geometry)
        if path is None:
            return self.map_for_points(points)
        if not points:
            return self._url([path])
        return self._url([path, self._markers(points)])

    # ─────────────────────────────────────────────
    # overlays
    # ─────────────────────────────────────────────

    def _enabled(self) -> bool:
        if not self.access_token:
            logger.debug("Mapbox token not configured, skipping static map")
            return False
        return True

    @staticmethod
    def _points_path(points: Sequence[LatLon]) -> str:
        encoded = encode_points(dedupe_consecutive(points))
        return f"path-2+{CHECKIN_COLOR}-0.5({_encode_component(encoded)})"

    @staticmethod
    def _track_path(geometry: str) -> Optional[str]:
        encoded = track_to_polyline(geometry or "")
        if encoded is None:
            logger.warning("Track geometry not drawable", prefix=(geometry or "")[:16])
            return None
        return f"path-3+{TRACK_COLOR}-0.8({_encode_component(encoded)})"

    @staticmethod
    def _markers(points: Sequence[LatLon]) -> str:
        clusters = cluster_points(points, cluster_threshold(points))
        return ",".join(c.overlay() for c in clusters)

    def _url(self, overlays: list[str]) -> str:
        overlay = ",".join(overlays)
        size = f"{self.width}x{self.height}@2x"
        return f"{self.base_url}/{overlay}/auto/{size}?access_token={self.access_token}"


def _encode_component(value: str) -> str:
    """Percent-encode a polyline for use inside a URL path overlay."""
    return quote(value, safe="-_.!~*'()")
