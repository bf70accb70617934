"""Route acquisition using the Mapbox Directions and Geocoding APIs."""

import logging
import re
from urllib.parse import quote

import httpx

from campstops.errors import RouteError
from campstops.models import Route


logger = logging.getLogger(__name__)

MAPBOX_BASE_URL = "https://api.mapbox.com"

# "lng,lat" typed straight into a location field
COORDINATE_PATTERN = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)\s*$")


def parse_coordinates(location: str) -> tuple[float, float] | None:
    """Return (lon, lat) if the text is a 'lng,lat' pair, else None."""
    match = COORDINATE_PATTERN.match(location)
    if not match:
        return None
    return (float(match.group(1)), float(match.group(2)))


class MapboxRouteProvider:
    """Geocodes places and fetches driving routes between them."""
    
    def __init__(
        self,
        access_token: str,
        client: httpx.AsyncClient | None = None,
        base_url: str = MAPBOX_BASE_URL,
        timeout: float = 30.0,
    ):
        if not access_token:
            raise RouteError("Mapbox token is missing")
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client
    
    async def _get(self, url: str, params: dict) -> httpx.Response:
        params = {**params, "access_token": self.access_token}
        try:
            if self._client is not None:
                return await self._client.get(url, params=params, timeout=self.timeout)
            async with httpx.AsyncClient() as client:
                return await client.get(url, params=params, timeout=self.timeout)
        except httpx.HTTPError as e:
            raise RouteError(f"Mapbox request failed: {e}") from e
    
    async def geocode(self, location: str) -> tuple[tuple[float, float], str]:
        """
        Convert a place name or 'lng,lat' text to coordinates.
        
        Returns:
            ((lon, lat), display name)
        """
        coords = parse_coordinates(location)
        if coords:
            return coords, location.strip()
        
        response = await self._get(
            f"{self.base_url}/geocoding/v5/mapbox.places/{quote(location)}.json",
            {"limit": 1},
        )
        if response.status_code != 200:
            raise RouteError(f"Geocoding failed: {response.status_code}")
        
        features = response.json().get("features", [])
        if not features:
            raise RouteError(f"No results found for location: {location}")
        
        feature = features[0]
        center = feature["center"]
        return (float(center[0]), float(center[1])), feature.get("place_name", location)[:50]
    
    async def get_route(self, start: str, end: str) -> Route:
        """Driving route between two locations (names or 'lng,lat')."""
        start_coords, start_name = await self.geocode(start)
        end_coords, end_name = await self.geocode(end)
        
        lonlats = f"{start_coords[0]},{start_coords[1]};{end_coords[0]},{end_coords[1]}"
        response = await self._get(
            f"{self.base_url}/directions/v5/mapbox/driving/{lonlats}",
            {"geometries": "geojson", "overview": "full", "steps": "false"},
        )
        if response.status_code != 200:
            raise RouteError(
                f"Directions error {response.status_code}: {response.text[:200]}"
            )
        
        routes = response.json().get("routes", [])
        if not routes:
            raise RouteError("No route found")
        
        route = routes[0]
        coords = route.get("geometry", {}).get("coordinates", [])
        logger.info(
            "Route %s -> %s: %.1f km, %d points",
            start_name, end_name, route.get("distance", 0) / 1000, len(coords),
        )
        
        return Route(
            polyline=[(float(c[0]), float(c[1])) for c in coords],
            distance_m=float(route.get("distance", 0)),
            duration_s=float(route.get("duration", 0)),
            start_name=start_name,
            end_name=end_name,
        )
