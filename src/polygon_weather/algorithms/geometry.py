"""
Polygon geometry helpers.

Coordinates are (latitude, longitude) pairs in degrees.
"""

from typing import Sequence, Tuple

from ..core import constants

Coordinate = Tuple[float, float]


def centroid(vertices: Sequence[Coordinate]) -> Coordinate:
    """
    Arithmetic mean of each coordinate axis.

    This is the vertex average, not the area-weighted centroid; it is only
    used to pick one sample point per polygon.

    Raises:
        ValueError: If no vertices are given
    """
    if not vertices:
        raise ValueError("Cannot compute the centroid of an empty polygon")

    count = len(vertices)
    sum_lat = sum(vertex[0] for vertex in vertices)
    sum_lon = sum(vertex[1] for vertex in vertices)
    return sum_lat / count, sum_lon / count


def normalize_longitude(longitude: float) -> float:
    """Wrap a longitude into [-180, 180]."""
    normalized = longitude
    while normalized < -180:
        normalized += 360
    while normalized > 180:
        normalized -= 360
    return normalized


def sample_point(vertices: Sequence[Coordinate]) -> Coordinate:
    """Centroid with its longitude wrapped into [-180, 180]."""
    lat, lon = centroid(vertices)
    return lat, normalize_longitude(lon)


def validate_vertices(vertices: Sequence[Coordinate]) -> None:
    """
    Check the drawing constraints on vertex count.

    Raises:
        ValueError: If the polygon has fewer than 3 or more than 12 vertices
    """
    count = len(vertices)
    if count < constants.MIN_POLYGON_VERTICES:
        raise ValueError(
            f"Minimum {constants.MIN_POLYGON_VERTICES} points required, got {count}"
        )
    if count > constants.MAX_POLYGON_VERTICES:
        raise ValueError(
            f"Max {constants.MAX_POLYGON_VERTICES} points allowed, got {count}"
        )
