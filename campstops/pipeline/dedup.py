"""Removal of the same place reported by more than one source."""

from typing import Iterable

from campstops.models import Provenance, Stop


class Deduplicator:
    """
    Drops provider-origin stops that share a location with another stop.
    
    Locations match when latitude and longitude round to the same value at
    `decimals` places (5 is about 1 m). Persisted stops are never dropped,
    not even against each other; a live or synthetic stop at the location
    of a persisted one is dropped instead.
    """
    
    def __init__(self, decimals: int = 5):
        self.decimals = decimals
    
    def dedupe(self, stops: Iterable[Stop]) -> list[Stop]:
        stops = list(stops)
        persisted_keys = {
            s.location_key(self.decimals)
            for s in stops if s.provenance is Provenance.PERSISTED
        }
        
        seen = set()
        kept = []
        for stop in stops:
            if stop.provenance is Provenance.PERSISTED:
                kept.append(stop)
                continue
            key = stop.location_key(self.decimals)
            if key in persisted_keys or key in seen:
                continue
            seen.add(key)
            kept.append(stop)
        
        return kept
    
    def merge(self, accepted: list[Stop], incoming: Iterable[Stop]) -> list[Stop]:
        """Append incoming stops whose location is not already accepted."""
        keys = {s.location_key(self.decimals) for s in accepted}
        merged = list(accepted)
        for stop in incoming:
            key = stop.location_key(self.decimals)
            if stop.provenance is not Provenance.PERSISTED and key in keys:
                continue
            keys.add(key)
            merged.append(stop)
        return merged


def dedupe(stops: Iterable[Stop], decimals: int = 5) -> list[Stop]:
    return Deduplicator(decimals).dedupe(stops)
