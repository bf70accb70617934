"""Common contract for stop sources."""

from abc import ABC, abstractmethod
from typing import Sequence

from campstops.models import SearchConfig, SourceResult, Stop
from campstops.utils.geo import nearest_distance_to_polyline


class StopSource(ABC):
    """Something that finds candidate stops near a route.
    
    Implementations never raise for their own I/O failures; they report
    them on the returned SourceResult instead.
    """
    
    name: str = "source"
    
    @abstractmethod
    async def fetch_candidates(
        self,
        polyline: Sequence[tuple[float, float]],
        config: SearchConfig,
    ) -> SourceResult:
        ...


def within_buffer(
    stops: list[Stop],
    polyline: Sequence[tuple[float, float]],
    buffer_m: float,
) -> list[Stop]:
    """Keep stops within buffer_m of a route vertex, with their distance set."""
    kept = []
    for stop in stops:
        nearest = nearest_distance_to_polyline(stop.coordinates.as_lonlat(), polyline)
        if nearest.distance_m > buffer_m:
            continue
        kept.append(stop.model_copy(update={"distance_from_route_m": nearest.distance_m}))
    return kept
