"""Input models for stop matching requests."""

from typing import Sequence

from pydantic import BaseModel, Field

from .response import StopType


# (longitude, latitude), the order Mapbox and GeoJSON use
LonLat = tuple[float, float]
RoutePolyline = Sequence[LonLat]

METERS_PER_MILE = 1609.34


class Route(BaseModel):
    """A route as produced by the directions provider."""
    
    polyline: list[LonLat] = Field(
        ...,
        description="Route geometry as (longitude, latitude) pairs"
    )
    distance_m: float = Field(default=0, ge=0)
    duration_s: float = Field(default=0, ge=0)
    start_name: str = ""
    end_name: str = ""


class SearchConfig(BaseModel):
    """What to look for along the route, and how far from it."""
    
    buffer_distance_miles: float = Field(
        default=20.0,
        gt=0,
        description="Maximum distance from the route, typically 5-50 miles"
    )
    enabled_categories: frozenset[StopType] = Field(
        default_factory=lambda: frozenset(StopType),
        description="Stop types to include"
    )
    max_poi_samples_along_route: int = Field(
        default=10,
        ge=0,
        description="Number of live places lookups spread along the route"
    )
    
    @property
    def buffer_distance_m(self) -> float:
        return self.buffer_distance_miles * METERS_PER_MILE
    
    @property
    def wants_campsites(self) -> bool:
        return StopType.CAMPSITE in self.enabled_categories
    
    @property
    def amenity_categories(self) -> list[StopType]:
        """Enabled non-campsite categories in a stable order."""
        return [t for t in StopType.amenities() if t in self.enabled_categories]
    
    class Config:
        json_schema_extra = {
            "example": {
                "buffer_distance_miles": 20.0,
                "enabled_categories": ["campsite", "gas", "water", "dump"],
                "max_poi_samples_along_route": 10,
            }
        }
