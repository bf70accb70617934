"""Exception types raised by the stop-matching engine and its adapters."""


class CampstopsError(Exception):
    """Base class for all campstops errors."""


class InvalidRouteError(CampstopsError, ValueError):
    """The route polyline cannot be used for planning (fewer than 2 points)."""


class StoreError(CampstopsError):
    """The persisted campsite store could not be queried."""


class PlacesLookupError(CampstopsError):
    """A live places lookup failed or returned an unusable payload."""


class RouteError(CampstopsError):
    """Directions or geocoding could not produce a route."""
