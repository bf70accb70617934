"""Campsites from the persisted store."""

import asyncio
import logging
from typing import Any, Sequence

from campstops.models import (
    Coordinates,
    Provenance,
    SearchConfig,
    SourceResult,
    Stop,
    StopDetails,
    StopType,
)
from campstops.tools.store import StopStore
from campstops.utils.bounds import compute_route_bounds

from .base import StopSource, within_buffer


logger = logging.getLogger(__name__)


def record_to_stop(record: dict[str, Any]) -> Stop:
    """Map a raw store record to a persisted campsite stop."""
    return Stop(
        id=f"persisted-{record['id']}",
        name=record.get("name") or "Unnamed campsite",
        stop_type=StopType.CAMPSITE,
        coordinates=Coordinates(
            latitude=float(record["latitude"]),
            longitude=float(record["longitude"]),
        ),
        provenance=Provenance.PERSISTED,
        details=StopDetails(
            description=record.get("description"),
            features=record.get("features") or (),
            images=record.get("images") or (),
            review_count=record.get("review_count") or 0,
            safety_rating=record.get("safety_rating"),
            address=record.get("location"),
        ),
    )


class DatabaseStopSource(StopSource):
    """User-entered campsites inside the route's buffer."""
    
    name = "database"
    
    def __init__(self, store: StopStore, timeout: float = 10.0):
        self.store = store
        self.timeout = timeout
    
    async def fetch_candidates(
        self,
        polyline: Sequence[tuple[float, float]],
        config: SearchConfig,
    ) -> SourceResult:
        bounds = compute_route_bounds(polyline, config.buffer_distance_miles)
        
        try:
            records = await asyncio.wait_for(
                self.store.fetch_in_bounds(bounds), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            logger.warning("Campsite store timed out after %.1fs", self.timeout)
            return SourceResult.failed(self.name, f"timed out after {self.timeout}s")
        except Exception as e:
            logger.warning("Campsite store unavailable: %s", e)
            return SourceResult.failed(self.name, str(e) or type(e).__name__)
        
        stops = []
        for record in records:
            try:
                stops.append(record_to_stop(record))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed campsite record: %s", e)
        
        nearby = within_buffer(stops, polyline, config.buffer_distance_m)
        logger.debug(
            "Store: %d records in bounds, %d within %.0f m of route",
            len(records), len(nearby), config.buffer_distance_m,
        )
        return SourceResult(source=self.name, stops=nearby)
