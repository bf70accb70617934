"""Geometry and export helpers for stop matching."""

from .geo import (
    haversine_distance,
    nearest_distance_to_polyline,
    route_length,
    densify_polyline,
    estimate_driving_time,
    format_eta,
)
from .bounds import BoundingBox, compute_bounds, compute_route_bounds

__all__ = [
    "haversine_distance",
    "nearest_distance_to_polyline",
    "route_length",
    "densify_polyline",
    "estimate_driving_time",
    "format_eta",
    "BoundingBox",
    "compute_bounds",
    "compute_route_bounds",
]
