"""
Geometry helpers: GeoJSON construction and bounding-box tests.

Coordinates are always stored as GeoJSON (``[lon, lat]``) so MongoDB
2dsphere indexes can be used on them.
"""

from __future__ import annotations

from typing import Any, Optional


def _check_lat(lat: float) -> None:
    if not -90.0 <= lat <= 90.0:
        raise ValueError(f"Latitude out of range: {lat}")


def _check_lon(lon: float) -> None:
    if not -180.0 <= lon <= 180.0:
        raise ValueError(f"Longitude out of range: {lon}")


def make_point(lon: float, lat: float) -> dict[str, Any]:
    """Return a GeoJSON Point for (*lon*, *lat*)."""
    _check_lon(lon)
    _check_lat(lat)
    return {"type": "Point", "coordinates": [float(lon), float(lat)]}


def point_lon_lat(point: Optional[dict[str, Any]]) -> Optional[tuple[float, float]]:
    """Extract ``(lon, lat)`` from a GeoJSON Point, or None."""
    if not point:
        return None
    coords = point.get("coordinates") or []
    if len(coords) < 2:
        return None
    return float(coords[0]), float(coords[1])


def build_bounding_box_polygon(
    min_lat: float, max_lat: float, min_lon: float, max_lon: float
) -> dict[str, Any]:
    """Build a closed GeoJSON Polygon ring for the given box.

    Raises:
        ValueError: when a coordinate is out of range or the box is inverted
            on the latitude axis.
    """
    for lat in (min_lat, max_lat):
        _check_lat(lat)
    for lon in (min_lon, max_lon):
        _check_lon(lon)
    if min_lat > max_lat:
        raise ValueError(f"Inverted latitude range: {min_lat} > {max_lat}")

    ring = [
        [min_lon, min_lat],
        [max_lon, min_lat],
        [max_lon, max_lat],
        [min_lon, max_lat],
        [min_lon, min_lat],
    ]
    return {"type": "Polygon", "coordinates": [ring]}


def in_bounds(
    lat: float,
    lon: float,
    north_east_lat: float,
    north_east_lon: float,
    south_west_lat: float,
    south_west_lon: float,
) -> bool:
    """Inclusive containment test against a north-east/south-west box."""
    return (
        south_west_lat <= lat <= north_east_lat
        and south_west_lon <= lon <= north_east_lon
    )
