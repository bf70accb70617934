"""Clients for the route provider, campsite store and live places lookups."""

from .routing import MapboxRouteProvider, parse_coordinates
from .store import StopStore, SupabaseStopStore, InMemoryStopStore
from .places import PlaceFeature, PlacesClient, MapboxPlacesClient

__all__ = [
    "MapboxRouteProvider",
    "parse_coordinates",
    "StopStore",
    "SupabaseStopStore",
    "InMemoryStopStore",
    "PlaceFeature",
    "PlacesClient",
    "MapboxPlacesClient",
]
