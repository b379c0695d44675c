"""
Track geometry helpers.

Activity tracks arrive as WKT ``LINESTRING(lon lat, ...)`` (Garmin), as
Google encoded polylines (Strava) or, for rows read straight from
PostGIS, as WKB hex which cannot be decoded here.
"""

import re
from typing import Optional, Sequence

import polyline

WKB_LINESTRING_PREFIX = "01020000"

_LINESTRING_RE = re.compile(r"^\s*LINESTRING\s*\((.*)\)\s*$", re.IGNORECASE | re.DOTALL)

LatLon = tuple[float, float]


def is_wkb_hex(geometry: str) -> bool:
    return geometry.startswith(WKB_LINESTRING_PREFIX)


def is_wkt_linestring(geometry: str) -> bool:
    return geometry.lstrip().upper().startswith("LINESTRING")


def parse_linestring(wkt: str) -> list[LatLon]:
    """
    Parse a WKT LINESTRING into (lat, lon) pairs.

    Pairs that are not two numbers are skipped.

    Example:
        >>> parse_linestring("LINESTRING(9.19 45.46, 9.20 45.47)")
        [(45.46, 9.19), (45.47, 9.2)]
    """
    match = _LINESTRING_RE.match(wkt)
    if not match:
        return []

    points: list[LatLon] = []
    for pair in match.group(1).split(","):
        parts = pair.split()
        if len(parts) < 2:
            continue
        try:
            lon, lat = float(parts[0]), float(parts[1])
        except ValueError:
            continue
        points.append((lat, lon))
    return points


def dedupe_consecutive(points: Sequence[LatLon]) -> list[LatLon]:
    """Drop points identical to their predecessor."""
    unique: list[LatLon] = []
    for point in points:
        if not unique or unique[-1] != point:
            unique.append(point)
    return unique


def encode_points(points: Sequence[LatLon]) -> str:
    """Google polyline (precision 5) of (lat, lon) pairs."""
    return polyline.encode(list(points), 5)


def track_to_polyline(geometry: str) -> Optional[str]:
    """
    Encoded polyline for an activity track.

    Returns:
        The polyline, or None for WKB hex and for WKT without usable points.
        Any other string is assumed to be an encoded polyline already.
    """
    geometry = geometry.strip()
    if not geometry or is_wkb_hex(geometry):
        return None
    if is_wkt_linestring(geometry):
        points = parse_linestring(geometry)
        if not points:
            return None
        return encode_points(points)
    return geometry
