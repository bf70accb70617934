"""Runs the stop sources in a fixed order and merges what they return."""

import asyncio
import logging
from typing import Sequence

from campstops.errors import InvalidRouteError
from campstops.models import SearchConfig, SourceFailure, SourceResult, Stop, StopPlan
from campstops.sources import StopSource

from .dedup import Deduplicator


logger = logging.getLogger(__name__)


class SourceAggregator:
    """
    Collects candidate stops from campsite sources and amenity sources.
    
    Campsite sources are listed in priority order (persisted store first);
    a later source only adds stops at locations not already collected.
    Amenity results are appended as they are. Every source is queried
    concurrently, and a failing source just contributes nothing, including
    one that raises instead of returning a failed result.
    """
    
    def __init__(
        self,
        campsite_sources: Sequence[StopSource] = (),
        amenity_sources: Sequence[StopSource] = (),
        deduplicator: Deduplicator | None = None,
    ):
        self.campsite_sources = list(campsite_sources)
        self.amenity_sources = list(amenity_sources)
        self.deduplicator = deduplicator or Deduplicator()
    
    async def collect(
        self,
        polyline: Sequence[tuple[float, float]],
        config: SearchConfig,
    ) -> StopPlan:
        campsite_sources = self.campsite_sources if config.wants_campsites else []
        amenity_sources = self.amenity_sources if config.amenity_categories else []
        
        sources = [*campsite_sources, *amenity_sources]
        outcomes = await asyncio.gather(
            *(source.fetch_candidates(polyline, config) for source in sources),
            return_exceptions=True,
        )
        results = [
            self._as_result(source, outcome)
            for source, outcome in zip(sources, outcomes)
        ]
        campsite_results = results[:len(campsite_sources)]
        amenity_results = results[len(campsite_sources):]
        
        stops: list[Stop] = []
        for result in campsite_results:
            stops = self.deduplicator.merge(stops, result.stops)
        for result in amenity_results:
            stops.extend(result.stops)
        
        failures = [
            SourceFailure(source=r.source, message=r.error)
            for r in results if not r.ok
        ]
        for failure in failures:
            logger.warning("Source %s degraded: %s", failure.source, failure.message)
        
        return StopPlan(stops=stops, failures=failures)

    @staticmethod
    def _as_result(source: StopSource, outcome: SourceResult | BaseException) -> SourceResult:
        """Turn an exception escaping a source into a failed result."""
        if not isinstance(outcome, BaseException):
            return outcome
        if isinstance(outcome, InvalidRouteError):
            raise outcome
        logger.error(
            "Source %s raised %s", source.name, type(outcome).__name__,
            exc_info=outcome,
        )
        return SourceResult.failed(source.name, str(outcome) or type(outcome).__name__)

    async def aggregate(
        self,
        polyline: Sequence[tuple[float, float]],
        config: SearchConfig,
    ) -> list[Stop]:
        plan = await self.collect(polyline, config)
        return plan.stops
