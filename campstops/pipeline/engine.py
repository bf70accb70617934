"""Public entry point: stops along a route, annotated with distance and ETA.

Arrival estimates are straight-line approximations. A stop's progress along
the route is the index of its nearest vertex over the vertex count, scaled by
the route length, and time assumes a constant average speed. Neither is a
routed travel time.
"""

import logging
import random
from typing import Sequence

import httpx

from campstops.config import Settings
from campstops.models import SearchConfig, Stop, StopPlan, StopType
from campstops.sources import (
    DatabaseStopSource,
    LivePlacesStopSource,
    SyntheticAmenitySource,
)
from campstops.tools.places import MapboxPlacesClient
from campstops.tools.store import InMemoryStopStore, SupabaseStopStore
from campstops.utils.geo import (
    densify_polyline,
    estimate_driving_time,
    nearest_distance_to_polyline,
    route_length,
    validate_polyline,
)

from .aggregator import SourceAggregator
from .dedup import Deduplicator


logger = logging.getLogger(__name__)


class StopMatchingEngine:
    """Finds, merges and annotates stops along a route.
    
    Holds no per-request state, so one engine can serve concurrent calls.
    
    The route is densified to densify_spacing_m before matching, so a stop
    beside a long straight segment is measured against a nearby point on
    it. This departs from measuring against the given vertices only: a
    sparse route can now match stops it used to miss. Pass
    densify_spacing_m=None (or DENSIFY_SPACING_M=0) to measure against
    the given vertices exactly, with the vertex-only semantics unchanged.
    """
    
    def __init__(
        self,
        aggregator: SourceAggregator,
        average_speed_mph: float = 55.0,
        densify_spacing_m: float | None = 1000.0,
    ):
        self.aggregator = aggregator
        self.average_speed_mph = average_speed_mph
        self.densify_spacing_m = densify_spacing_m
    
    async def plan(
        self,
        polyline: Sequence[tuple[float, float]],
        config: SearchConfig,
        route_distance_m: float | None = None,
        sort_by_route: bool = False,
    ) -> StopPlan:
        """
        Find stops along a route and report any sources that failed.
        
        Args:
            polyline: Route as (longitude, latitude) pairs, at least 2
            config: Buffer distance, categories and lookup budget
            route_distance_m: Route length from the directions provider;
                measured from the polyline when omitted
            sort_by_route: Order stops by distance along the route
        
        Raises:
            InvalidRouteError: polyline has fewer than 2 points
        """
        validate_polyline(polyline)
        if not config.enabled_categories:
            return StopPlan()
        
        if self.densify_spacing_m:
            polyline = densify_polyline(polyline, self.densify_spacing_m)
        if route_distance_m is None:
            route_distance_m = route_length(polyline)
        
        collected = await self.aggregator.collect(polyline, config)
        stops = self._annotate(collected.stops, polyline, config, route_distance_m)
        
        if sort_by_route:
            stops.sort(key=lambda s: s.distance_along_route_m)
        
        logger.info(
            "Planned %d stops along %.1f km route (%d source failures)",
            len(stops), route_distance_m / 1000, len(collected.failures),
        )
        return StopPlan(stops=stops, failures=collected.failures)
    
    async def plan_stops(
        self,
        polyline: Sequence[tuple[float, float]],
        config: SearchConfig,
        route_distance_m: float | None = None,
        sort_by_route: bool = False,
    ) -> list[Stop]:
        plan = await self.plan(polyline, config, route_distance_m, sort_by_route)
        return plan.stops
    
    def _annotate(
        self,
        stops: list[Stop],
        polyline: Sequence[tuple[float, float]],
        config: SearchConfig,
        route_distance_m: float,
    ) -> list[Stop]:
        vertex_count = len(polyline)
        seen_ids = set()
        annotated = []
        
        for stop in stops:
            if stop.id in seen_ids:
                logger.debug("Dropping stop with repeated id %s", stop.id)
                continue
            
            nearest = nearest_distance_to_polyline(stop.coordinates.as_lonlat(), polyline)
            if nearest.distance_m > config.buffer_distance_m:
                continue
            
            seen_ids.add(stop.id)
            along = nearest.index / vertex_count * route_distance_m
            annotated.append(stop.model_copy(update={
                "distance_from_route_m": nearest.distance_m,
                "distance_along_route_m": along,
                "estimated_time_from_start": estimate_driving_time(along, self.average_speed_mph),
            }))
        
        return annotated


def build_engine(
    settings: Settings,
    client: httpx.AsyncClient | None = None,
    rng: random.Random | None = None,
) -> StopMatchingEngine:
    """
    Wire an engine from settings.
    
    Without Supabase credentials the persisted store is an empty in-memory
    store; without a Mapbox token no live lookups are made.
    """
    timeout = settings.source_timeout_seconds
    
    if settings.store_configured:
        store = SupabaseStopStore(
            settings.supabase_url,
            settings.supabase_key,
            table=settings.supabase_table,
            limit=settings.store_query_limit,
            client=client,
            timeout=timeout,
        )
    else:
        logger.warning("SUPABASE_URL/SUPABASE_KEY not set, persisted campsites disabled")
        store = InMemoryStopStore()
    
    campsite_sources = [DatabaseStopSource(store, timeout=timeout)]
    if settings.mapbox_token:
        places = MapboxPlacesClient(
            settings.mapbox_token,
            client=client,
            base_url=settings.mapbox_base_url,
            timeout=timeout,
        )
        campsite_sources.append(LivePlacesStopSource(
            places,
            category=StopType.CAMPSITE,
            timeout=timeout,
            concurrency=settings.live_lookup_concurrency,
        ))
    
    aggregator = SourceAggregator(
        campsite_sources=campsite_sources,
        amenity_sources=[SyntheticAmenitySource(rng)],
        deduplicator=Deduplicator(settings.dedup_decimals),
    )
    return StopMatchingEngine(
        aggregator,
        average_speed_mph=settings.average_speed_mph,
        densify_spacing_m=settings.densify_spacing_m,
    )
