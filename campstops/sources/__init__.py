"""Stop sources: persisted store, live places provider and synthetic amenities."""

from .base import StopSource
from .database import DatabaseStopSource
from .live_places import LivePlacesStopSource
from .synthetic import SyntheticAmenitySource

__all__ = [
    "StopSource",
    "DatabaseStopSource",
    "LivePlacesStopSource",
    "SyntheticAmenitySource",
]
