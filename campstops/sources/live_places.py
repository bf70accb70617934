"""Stops found by querying the live places provider along the route."""

import asyncio
import logging
from typing import Sequence

from campstops.models import (
    Coordinates,
    Provenance,
    SearchConfig,
    SourceResult,
    Stop,
    StopDetails,
    StopType,
)
from campstops.tools.places import PlaceFeature, PlacesClient
from campstops.utils.bounds import compute_bounds

from .base import StopSource, within_buffer


logger = logging.getLogger(__name__)

# Text sent to the provider for each category
SEARCH_TERMS = {
    StopType.CAMPSITE: "campground",
    StopType.GAS: "gas station",
    StopType.WATER: "water fill",
    StopType.DUMP: "dump station",
    StopType.WALMART: "walmart",
    StopType.PROPANE: "propane",
    StopType.REPAIR: "rv repair",
}

# A result is relevant if its name or category text contains one of these
CATEGORY_KEYWORDS = {
    StopType.CAMPSITE: ["campground", "camp", "camping", "rv", "park", "caravan", "camp_site"],
    StopType.GAS: ["gas", "fuel", "petrol", "diesel"],
    StopType.WATER: ["water", "spring"],
    StopType.DUMP: ["dump", "sanitary", "rv"],
    StopType.WALMART: ["walmart"],
    StopType.PROPANE: ["propane", "lpg"],
    StopType.REPAIR: ["repair", "mechanic", "tire", "service", "auto"],
}


def sample_indices(vertex_count: int, samples: int) -> list[int]:
    """
    Evenly spaced vertex indices, first and last included.
    
    A single sample uses the middle vertex. Repeated indices (more samples
    than vertices) are dropped, keeping order.
    """
    if samples <= 0 or vertex_count <= 0:
        return []
    if samples == 1:
        return [(vertex_count - 1) // 2]
    
    indices = [(vertex_count - 1) * i // (samples - 1) for i in range(samples)]
    return list(dict.fromkeys(indices))


def is_relevant(feature: PlaceFeature, category: StopType) -> bool:
    text = f"{feature.name} {feature.category}".lower()
    return any(keyword in text for keyword in CATEGORY_KEYWORDS[category])


class LivePlacesStopSource(StopSource):
    """Places provider results for one category, sampled along the route."""
    
    name = "live-places"
    
    def __init__(
        self,
        client: PlacesClient,
        category: StopType = StopType.CAMPSITE,
        timeout: float = 10.0,
        concurrency: int = 4,
    ):
        self.client = client
        self.category = category
        self.timeout = timeout
        self.concurrency = max(1, concurrency)
    
    async def _lookup(
        self,
        semaphore: asyncio.Semaphore,
        point: tuple[float, float],
        config: SearchConfig,
    ) -> list[PlaceFeature]:
        bounds = compute_bounds([point], config.buffer_distance_miles)
        async with semaphore:
            return await asyncio.wait_for(
                self.client.search(SEARCH_TERMS[self.category], point, bounds),
                timeout=self.timeout,
            )
    
    def _to_stop(self, feature: PlaceFeature) -> Stop:
        return Stop(
            id=f"live-{feature.id}",
            name=feature.name,
            stop_type=self.category,
            coordinates=Coordinates(latitude=feature.latitude, longitude=feature.longitude),
            provenance=Provenance.LIVE_PROVIDER,
            details=StopDetails(
                description="Found on the map. Details may be limited.",
                features=("Found on map",),
                address=feature.address,
            ),
        )
    
    async def fetch_candidates(
        self,
        polyline: Sequence[tuple[float, float]],
        config: SearchConfig,
    ) -> SourceResult:
        indices = sample_indices(len(polyline), config.max_poi_samples_along_route)
        if not indices:
            return SourceResult(source=self.name)
        
        semaphore = asyncio.Semaphore(self.concurrency)
        responses = await asyncio.gather(
            *(self._lookup(semaphore, polyline[i], config) for i in indices),
            return_exceptions=True,
        )
        
        stops = []
        seen = set()
        failures = 0
        for index, response in zip(indices, responses):
            if isinstance(response, BaseException):
                failures += 1
                logger.warning(
                    "Places lookup at route vertex %d failed: %s",
                    index, response or type(response).__name__,
                )
                continue
            
            for feature in response:
                if not is_relevant(feature, self.category):
                    continue
                location = (feature.longitude, feature.latitude)
                if location in seen:
                    continue
                seen.add(location)
                stops.append(self._to_stop(feature))
        
        nearby = within_buffer(stops, polyline, config.buffer_distance_m)
        logger.debug(
            "Places: %d/%d samples answered, %d relevant, %d within buffer",
            len(indices) - failures, len(indices), len(stops), len(nearby),
        )
        
        if failures == len(indices):
            return SourceResult.failed(self.name, f"all {failures} places lookups failed")
        return SourceResult(source=self.name, stops=nearby)
