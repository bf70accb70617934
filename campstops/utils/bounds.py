"""Padded bounding boxes around a route."""

from dataclasses import dataclass
from math import cos, radians
from typing import Sequence

from .geo import KM_PER_DEGREE, validate_polyline


KM_PER_MILE = 1.60934


@dataclass(frozen=True)
class BoundingBox:
    """Latitude/longitude box used to pre-filter store queries."""
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float
    
    def contains(self, point: tuple[float, float]) -> bool:
        lon, lat = point
        return (
            self.min_lat <= lat <= self.max_lat
            and self.min_lng <= lon <= self.max_lng
        )
    
    def as_mapbox_bbox(self) -> str:
        """Format as 'minLng,minLat,maxLng,maxLat' for Mapbox queries."""
        return f"{self.min_lng:.6f},{self.min_lat:.6f},{self.max_lng:.6f},{self.max_lat:.6f}"


def compute_bounds(
    points: Sequence[tuple[float, float]],
    buffer_distance_miles: float,
) -> BoundingBox:
    """
    Bounding box of all points, padded by the buffer distance.
    
    The box is a coarse, generous pre-filter; exact proximity is checked
    afterwards. Longitude padding is scaled by cos(latitude) at the centre
    of the latitude range and grows without bound near the poles.
    
    Args:
        points: (longitude, latitude) pairs, usually a route polyline
        buffer_distance_miles: Padding on every side
    """
    if not points:
        raise ValueError("Cannot compute bounds of an empty point list")
    
    lats = [p[1] for p in points]
    lngs = [p[0] for p in points]
    min_lat, max_lat = min(lats), max(lats)
    min_lng, max_lng = min(lngs), max(lngs)
    
    buffer_km = buffer_distance_miles * KM_PER_MILE
    mean_lat = (min_lat + max_lat) / 2
    lat_buffer = buffer_km / KM_PER_DEGREE
    lng_buffer = buffer_km / (KM_PER_DEGREE * cos(radians(mean_lat)))
    
    return BoundingBox(
        min_lat=min_lat - lat_buffer,
        max_lat=max_lat + lat_buffer,
        min_lng=min_lng - lng_buffer,
        max_lng=max_lng + lng_buffer,
    )


def compute_route_bounds(
    polyline: Sequence[tuple[float, float]],
    buffer_distance_miles: float,
) -> BoundingBox:
    """compute_bounds for a route, rejecting polylines with fewer than 2 points."""
    validate_polyline(polyline)
    return compute_bounds(polyline, buffer_distance_miles)
