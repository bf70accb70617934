"""Geospatial utility functions.

Points are (longitude, latitude) pairs in degrees, the order used by the
route geometry.
"""

from dataclasses import dataclass
from datetime import timedelta
from math import radians, sin, cos, sqrt, atan2, ceil
from typing import Sequence

from campstops.errors import InvalidRouteError


EARTH_RADIUS_M = 6_371_000
METERS_PER_MILE = 1609.34
KM_PER_DEGREE = 111.0


@dataclass(frozen=True)
class NearestVertex:
    """Closest route vertex to a point."""
    distance_m: float
    index: int


def haversine_distance(
    a: tuple[float, float],
    b: tuple[float, float],
) -> float:
    """
    Calculate the great-circle distance between two points on Earth.
    
    Args:
        a, b: (longitude, latitude) in degrees
    
    Returns:
        Distance in meters
    """
    lon1, lat1 = a
    lon2, lat2 = b
    
    lat1_rad, lat2_rad = radians(lat1), radians(lat2)
    dlat = radians(lat2 - lat1)
    dlon = radians(lon2 - lon1)
    
    h = sin(dlat/2)**2 + cos(lat1_rad) * cos(lat2_rad) * sin(dlon/2)**2
    c = 2 * atan2(sqrt(h), sqrt(1-h))
    
    return EARTH_RADIUS_M * c


def validate_polyline(polyline: Sequence[tuple[float, float]]) -> None:
    """Raise InvalidRouteError unless the polyline has at least 2 points."""
    if polyline is None or len(polyline) < 2:
        count = 0 if polyline is None else len(polyline)
        raise InvalidRouteError(f"Route needs at least 2 points, got {count}")


def nearest_distance_to_polyline(
    point: tuple[float, float],
    polyline: Sequence[tuple[float, float]],
) -> NearestVertex:
    """
    Find the route vertex closest to a point.
    
    Only vertices are measured, not the segments between them, so a point
    beside a long straight segment reads further away than it is. Route
    geometry is densely sampled, which keeps the error small.
    
    Returns:
        NearestVertex with the distance in meters and the vertex index
        (the first one on ties)
    """
    validate_polyline(polyline)
    
    best_distance = float("inf")
    best_index = 0
    for i, vertex in enumerate(polyline):
        d = haversine_distance(point, vertex)
        if d < best_distance:
            best_distance = d
            best_index = i
    
    return NearestVertex(distance_m=best_distance, index=best_index)


def route_length(polyline: Sequence[tuple[float, float]]) -> float:
    """Total length of a polyline in meters."""
    return sum(
        haversine_distance(polyline[i-1], polyline[i])
        for i in range(1, len(polyline))
    )


def densify_polyline(
    polyline: Sequence[tuple[float, float]],
    max_spacing_m: float,
) -> list[tuple[float, float]]:
    """
    Insert interpolated vertices so that no segment exceeds max_spacing_m.
    
    Interpolation is linear in lon/lat, which is close enough at the
    spacings used here. Original vertices are kept.
    """
    validate_polyline(polyline)
    if max_spacing_m <= 0:
        raise ValueError("max_spacing_m must be positive")
    
    points = [tuple(polyline[0])]
    for i in range(1, len(polyline)):
        start, end = polyline[i-1], polyline[i]
        steps = max(1, ceil(haversine_distance(start, end) / max_spacing_m))
        for step in range(1, steps):
            ratio = step / steps
            lon = start[0] + ratio * (end[0] - start[0])
            lat = start[1] + ratio * (end[1] - start[1])
            points.append((lon, lat))
        points.append(tuple(end))
    
    return points


def offset_point(
    point: tuple[float, float],
    distance_km: float,
    bearing_rad: float,
) -> tuple[float, float]:
    """
    Move a point by distance_km along a bearing (0 = north).
    
    Uses a flat approximation of ~111 km per degree, good for offsets of a
    few dozen kilometers. The result is normalized, so an offset across
    the antimeridian comes back on the other side at about -180.
    """
    lon, lat = point
    new_lat = lat + (distance_km / KM_PER_DEGREE) * cos(bearing_rad)
    new_lon = lon + (distance_km / (KM_PER_DEGREE * cos(radians(lat)))) * sin(bearing_rad)
    return normalize_point((new_lon, new_lat))


def normalize_point(point: tuple[float, float]) -> tuple[float, float]:
    """Wrap longitude into [-180, 180) and clamp latitude to [-90, 90]."""
    lon, lat = point
    return ((lon + 180.0) % 360.0 - 180.0, max(-90.0, min(90.0, lat)))


def estimate_driving_time(
    distance_m: float,
    average_speed_mph: float = 55.0,
) -> timedelta:
    """
    Estimate driving time for a straight-line distance.
    
    This is not a routed travel time; it assumes a constant average speed.
    """
    speed_mps = average_speed_mph * METERS_PER_MILE / 3600
    return timedelta(seconds=distance_m / speed_mps)


def format_eta(duration: timedelta) -> str:
    """Format a duration as '2h 5m', or '45m' when under an hour."""
    seconds = int(duration.total_seconds())
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    
    return f"{hours}h {minutes}m" if hours > 0 else f"{minutes}m"
