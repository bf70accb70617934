"""Data models for stop matching."""

from .request import LonLat, RoutePolyline, Route, SearchConfig
from .response import (
    Coordinates,
    Provenance,
    SourceFailure,
    SourceResult,
    Stop,
    StopDetails,
    StopPlan,
    StopType,
)

__all__ = [
    "LonLat",
    "RoutePolyline",
    "Route",
    "SearchConfig",
    "Coordinates",
    "Provenance",
    "SourceFailure",
    "SourceResult",
    "Stop",
    "StopDetails",
    "StopPlan",
    "StopType",
]
