"""Output models for stop matching results."""

from datetime import timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    """GPS coordinates."""
    model_config = ConfigDict(frozen=True)
    
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    
    def as_lonlat(self) -> tuple[float, float]:
        return (self.longitude, self.latitude)
    
    @classmethod
    def from_lonlat(cls, point: tuple[float, float]) -> "Coordinates":
        return cls(longitude=point[0], latitude=point[1])


class StopType(str, Enum):
    """Kinds of stops a trip can include."""
    CAMPSITE = "campsite"
    GAS = "gas"
    WATER = "water"
    DUMP = "dump"
    WALMART = "walmart"
    PROPANE = "propane"
    REPAIR = "repair"
    
    @classmethod
    def amenities(cls) -> list["StopType"]:
        """All non-campsite categories, in declaration order."""
        return [t for t in cls if t is not cls.CAMPSITE]


class Provenance(str, Enum):
    """Which source produced a stop."""
    PERSISTED = "persisted"
    LIVE_PROVIDER = "live-provider"
    SYNTHETIC = "synthetic"


class StopDetails(BaseModel):
    """Free-form stop information, carried through untouched."""
    model_config = ConfigDict(frozen=True)
    
    description: str | None = None
    features: tuple[str, ...] = ()
    images: tuple[str, ...] = ()
    review_count: int = 0
    safety_rating: float | None = Field(default=None, ge=0, le=5)
    address: str | None = None


class Stop(BaseModel):
    """A campsite or amenity found along the route."""
    model_config = ConfigDict(frozen=True)
    
    id: str
    name: str
    stop_type: StopType
    coordinates: Coordinates
    distance_from_route_m: float = Field(
        default=0,
        ge=0,
        description="Distance to the nearest route vertex in meters"
    )
    distance_along_route_m: float = Field(
        default=0,
        ge=0,
        description="Approximate progress along the route in meters"
    )
    estimated_time_from_start: timedelta = timedelta(0)
    provenance: Provenance
    details: StopDetails | None = None
    
    def location_key(self, decimals: int = 5) -> tuple[float, float]:
        """Rounded (lat, lon) used to detect the same place reported twice."""
        return (
            round(self.coordinates.latitude, decimals),
            round(self.coordinates.longitude, decimals),
        )


class SourceFailure(BaseModel):
    """A source that could not deliver its candidates."""
    source: str
    message: str


class SourceResult(BaseModel):
    """Candidates from one source, or the reason it came back empty."""
    source: str
    stops: list[Stop] = Field(default_factory=list)
    error: str | None = None
    
    @property
    def ok(self) -> bool:
        return self.error is None
    
    @classmethod
    def failed(cls, source: str, error: str, stops: list[Stop] | None = None) -> "SourceResult":
        return cls(source=source, stops=stops or [], error=error)


class StopPlan(BaseModel):
    """Stops for a route plus the sources that degraded while finding them."""
    stops: list[Stop] = Field(default_factory=list)
    failures: list[SourceFailure] = Field(default_factory=list)
    
    @property
    def degraded(self) -> bool:
        return bool(self.failures)
