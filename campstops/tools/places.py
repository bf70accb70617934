"""Live places lookups using the Mapbox forward geocoding API."""

import logging
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

import httpx

from campstops.errors import PlacesLookupError
from campstops.utils.bounds import BoundingBox


logger = logging.getLogger(__name__)

MAPBOX_BASE_URL = "https://api.mapbox.com"


@dataclass(frozen=True)
class PlaceFeature:
    """A named point returned by the places provider."""
    id: str
    name: str
    longitude: float
    latitude: float
    category: str = ""
    address: str | None = None


class PlacesClient(Protocol):
    """Forward search for named points near a location."""
    
    async def search(
        self,
        query: str,
        near: tuple[float, float],
        bounds: BoundingBox,
    ) -> list[PlaceFeature]:
        ...


class MapboxPlacesClient:
    """Search Mapbox POIs around a point, restricted to a bounding box."""
    
    def __init__(
        self,
        access_token: str,
        client: httpx.AsyncClient | None = None,
        base_url: str = MAPBOX_BASE_URL,
        limit: int = 10,
        timeout: float = 10.0,
    ):
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.limit = limit
        self.timeout = timeout
        self._client = client
    
    async def search(
        self,
        query: str,
        near: tuple[float, float],
        bounds: BoundingBox,
    ) -> list[PlaceFeature]:
        url = f"{self.base_url}/geocoding/v5/mapbox.places/{quote(query)}.json"
        params = {
            "proximity": f"{near[0]},{near[1]}",
            "bbox": bounds.as_mapbox_bbox(),
            "types": "poi",
            "limit": self.limit,
            "access_token": self.access_token,
        }
        
        try:
            if self._client is not None:
                response = await self._client.get(url, params=params, timeout=self.timeout)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise PlacesLookupError(f"Places lookup failed: {e}") from e
        
        return parse_features(data)


def parse_features(data: dict) -> list[PlaceFeature]:
    """Convert a Mapbox geocoding response into PlaceFeatures."""
    if not isinstance(data, dict) or "features" not in data:
        raise PlacesLookupError("Places response has no features")
    
    features = []
    for feature in data["features"]:
        center = feature.get("center") or feature.get("geometry", {}).get("coordinates")
        if not center or len(center) < 2:
            continue
        
        props = feature.get("properties", {})
        features.append(PlaceFeature(
            id=str(feature.get("id", f"{center[0]},{center[1]}")),
            name=feature.get("text") or "Unnamed place",
            longitude=float(center[0]),
            latitude=float(center[1]),
            category=props.get("category", "") or "",
            address=feature.get("place_name"),
        ))
    
    return features
