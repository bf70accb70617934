"""Stop matching pipeline: aggregation, dedup and the engine facade."""

from .dedup import Deduplicator, dedupe
from .aggregator import SourceAggregator
from .engine import StopMatchingEngine, build_engine

__all__ = [
    "Deduplicator",
    "dedupe",
    "SourceAggregator",
    "StopMatchingEngine",
    "build_engine",
]
