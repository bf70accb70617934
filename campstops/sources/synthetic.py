"""Generated amenity stops for categories with no live inventory.

These stops are placeholders for display, not factual data. They are always
tagged with synthetic provenance.
"""

import logging
import math
import random
import uuid
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
from campstops.utils.bounds import KM_PER_MILE
from campstops.utils.geo import offset_point

from .base import StopSource, within_buffer


logger = logging.getLogger(__name__)

MIN_STOPS_PER_CATEGORY = 3
MAX_STOPS_PER_CATEGORY = 8

# (name prefixes, name suffix, description, features)
AMENITY_TEMPLATES = {
    StopType.GAS: (
        ["Shell", "Chevron", "Mobil", "BP", "Love's"],
        "Gas Station",
        "Fuel stop with diesel and convenience store.",
        ("Diesel", "Restrooms", "Convenience store"),
    ),
    StopType.WATER: (
        ["Clear", "Mountain", "Spring", "Pure", "Fresh"],
        "Water Fill",
        "Potable water fill station.",
        ("Potable water",),
    ),
    StopType.DUMP: (
        ["RV", "Campground", "Park", "Highway", "Rest Area"],
        "Dump Station",
        "Sanitary dump station for RV black and grey tanks.",
        ("Black tank", "Grey tank", "Rinse water"),
    ),
    StopType.WALMART: (
        ["Walmart Supercenter", "Walmart", "Walmart Neighborhood Market"],
        "",
        "Overnight RV parking may be allowed; check with the store manager.",
        ("Overnight parking", "Groceries"),
    ),
    StopType.PROPANE: (
        ["AmeriGas", "Ferrellgas", "Suburban", "Blue Rhino", "U-Haul"],
        "Propane Refill",
        "Propane tank refill and exchange.",
        ("Refill", "Exchange"),
    ),
    StopType.REPAIR: (
        ["Camping World", "Roadside", "Interstate", "Big Rig", "Mobile"],
        "RV Repair",
        "Mechanical and tire service for RVs and trailers.",
        ("Tires", "Mechanical", "Towing"),
    ),
}


class SyntheticAmenitySource(StopSource):
    """Random amenity stops spread along the route.
    
    Pass a seeded random.Random for reproducible output.
    """
    
    name = "synthetic"
    
    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()
    
    def _name(self, category: StopType) -> str:
        prefixes, suffix, _, _ = AMENITY_TEMPLATES[category]
        prefix = self.rng.choice(prefixes)
        if category is StopType.WALMART:
            return f"{prefix} #{self.rng.randint(1000, 5999)}"
        return f"{prefix} {suffix}"
    
    def generate(
        self,
        polyline: Sequence[tuple[float, float]],
        category: StopType,
        buffer_km: float,
    ) -> list[Stop]:
        """Generate 3-8 stops of one category near evenly spaced route vertices."""
        _, _, description, features = AMENITY_TEMPLATES[category]
        count = self.rng.randint(MIN_STOPS_PER_CATEGORY, MAX_STOPS_PER_CATEGORY)
        last = len(polyline) - 1
        
        stops = []
        for i in range(count):
            base = polyline[last * i // (count - 1)]
            offset_km = self.rng.uniform(0, buffer_km / 2)
            bearing = self.rng.uniform(0, 2 * math.pi)
            lon, lat = offset_point(base, offset_km, bearing)
            
            stops.append(Stop(
                id=f"synthetic-{category.value}-{uuid.UUID(int=self.rng.getrandbits(128), version=4)}",
                name=self._name(category),
                stop_type=category,
                coordinates=Coordinates(latitude=lat, longitude=lon),
                provenance=Provenance.SYNTHETIC,
                details=StopDetails(description=description, features=features),
            ))
        
        return stops
    
    async def fetch_candidates(
        self,
        polyline: Sequence[tuple[float, float]],
        config: SearchConfig,
    ) -> SourceResult:
        buffer_km = config.buffer_distance_miles * KM_PER_MILE
        
        stops = []
        for category in config.amenity_categories:
            stops.extend(self.generate(polyline, category, buffer_km))
        
        nearby = within_buffer(stops, polyline, config.buffer_distance_m)
        logger.debug("Generated %d synthetic amenity stops", len(nearby))
        return SourceResult(source=self.name, stops=nearby)
