"""Shared fixtures and fakes for the stop matching tests."""

import asyncio

import pytest

from campstops.errors import PlacesLookupError, StoreError
from campstops.models import Coordinates, Provenance, SourceResult, Stop, StopType
from campstops.sources import StopSource
from campstops.tools.places import PlaceFeature


SAN_FRANCISCO = (-122.4194, 37.7749)
LOS_ANGELES = (-118.2437, 34.0522)


def make_stop(
    stop_id: str,
    lon: float,
    lat: float,
    provenance: Provenance = Provenance.LIVE_PROVIDER,
    stop_type: StopType = StopType.CAMPSITE,
) -> Stop:
    return Stop(
        id=stop_id,
        name=stop_id.title(),
        stop_type=stop_type,
        coordinates=Coordinates(latitude=lat, longitude=lon),
        provenance=provenance,
    )


def campsite_record(record_id, lon, lat, name=None):
    return {
        "id": record_id,
        "name": name or f"Camp {record_id}",
        "latitude": lat,
        "longitude": lon,
        "description": "Quiet spot",
        "features": ["Fire ring"],
        "images": [],
        "review_count": 3,
        "safety_rating": 4,
    }


class FailingStore:
    """Store that is always down."""
    
    def __init__(self):
        self.calls = 0
    
    async def fetch_in_bounds(self, bounds):
        self.calls += 1
        raise StoreError("connection refused")


class SlowStore:
    async def fetch_in_bounds(self, bounds):
        await asyncio.sleep(5)
        return []


class FakePlacesClient:
    """Returns canned features per sample point; listed points fail or stall.
    
    A point in stalled_points hangs for longer than any test timeout.
    Passing stall_all=True makes every point hang.
    """
    
    def __init__(self, features_by_point=None, failing_points=(), default=None,
                 stalled_points=(), stall_all=False):
        self.features_by_point = features_by_point or {}
        self.failing_points = set(failing_points)
        self.stalled_points = set(stalled_points)
        self.stall_all = stall_all
        self.default = default or []
        self.queries = []
    
    async def search(self, query, near, bounds):
        self.queries.append((query, near))
        if near in self.failing_points:
            raise PlacesLookupError("503 Service Unavailable")
        if self.stall_all or near in self.stalled_points:
            await asyncio.sleep(5)
        return list(self.features_by_point.get(near, self.default))


class RecordingSource(StopSource):
    """Source that returns fixed stops and counts how often it is asked."""
    
    def __init__(self, name, stops=(), error=None):
        self.name = name
        self.stops = list(stops)
        self.error = error
        self.calls = 0
    
    async def fetch_candidates(self, polyline, config):
        self.calls += 1
        if self.error:
            return SourceResult.failed(self.name, self.error)
        return SourceResult(source=self.name, stops=self.stops)


class ExplodingSource(StopSource):
    """Source with a bug: raises instead of returning a failed result."""
    
    name = "exploding"
    
    async def fetch_candidates(self, polyline, config):
        raise KeyError("geometry")


def place(feature_id, lon, lat, name="Pine Campground", category="campground, camping"):
    return PlaceFeature(
        id=feature_id,
        name=name,
        longitude=lon,
        latitude=lat,
        category=category,
    )


@pytest.fixture
def sf_la_route():
    return [SAN_FRANCISCO, LOS_ANGELES]


@pytest.fixture
def equator_route():
    """Four vertices ~11 km apart along the equator."""
    return [(0.0, 0.0), (0.1, 0.0), (0.2, 0.0), (0.3, 0.0)]
