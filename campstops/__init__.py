"""Campstops - find campsites and trip amenities along a planned route."""

from .errors import CampstopsError, InvalidRouteError
from .models import SearchConfig, Stop, StopPlan, StopType, Provenance
from .pipeline import StopMatchingEngine, SourceAggregator, Deduplicator, build_engine

__all__ = [
    "CampstopsError",
    "InvalidRouteError",
    "SearchConfig",
    "Stop",
    "StopPlan",
    "StopType",
    "Provenance",
    "StopMatchingEngine",
    "SourceAggregator",
    "Deduplicator",
    "build_engine",
]
