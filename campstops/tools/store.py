"""Persisted campsite store clients.

The store exposes a single query: all records inside a latitude/longitude
box. Records are returned raw; mapping them to stops is the caller's job.
"""

import logging
from typing import Any, Iterable, Protocol

import httpx

from campstops.errors import StoreError
from campstops.utils.bounds import BoundingBox


logger = logging.getLogger(__name__)


class StopStore(Protocol):
    """Anything that can return raw campsite records inside a box."""
    
    async def fetch_in_bounds(self, bounds: BoundingBox) -> list[dict[str, Any]]:
        ...


class SupabaseStopStore:
    """Campsite records from a Supabase table through its PostgREST API."""
    
    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str = "campsites",
        limit: int = 500,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.table = table
        self.limit = limit
        self.timeout = timeout
        self._client = client
    
    async def fetch_in_bounds(self, bounds: BoundingBox) -> list[dict[str, Any]]:
        # PostgREST wants repeated keys for two filters on one column
        params = [
            ("select", "*"),
            ("latitude", f"gte.{bounds.min_lat}"),
            ("latitude", f"lte.{bounds.max_lat}"),
            ("longitude", f"gte.{bounds.min_lng}"),
            ("longitude", f"lte.{bounds.max_lng}"),
            ("limit", str(self.limit)),
        ]
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }
        url = f"{self.base_url}/rest/v1/{self.table}"
        
        try:
            if self._client is not None:
                response = await self._client.get(
                    url, params=params, headers=headers, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(
                        url, params=params, headers=headers, timeout=self.timeout
                    )
        except httpx.HTTPError as e:
            raise StoreError(f"Store request failed: {e}") from e
        
        if response.status_code != 200:
            raise StoreError(
                f"Store error {response.status_code}: {response.text[:200]}"
            )
        
        data = response.json()
        if not isinstance(data, list):
            raise StoreError("Store returned an unexpected payload")
        
        logger.debug("Store returned %d records for %s", len(data), bounds)
        return data


class InMemoryStopStore:
    """Store backed by a list of records, for local runs and tests."""
    
    def __init__(self, records: Iterable[dict[str, Any]] = ()):
        self.records = list(records)
        self.queries: list[BoundingBox] = []
    
    async def fetch_in_bounds(self, bounds: BoundingBox) -> list[dict[str, Any]]:
        self.queries.append(bounds)
        return [
            record for record in self.records
            if bounds.contains((float(record["longitude"]), float(record["latitude"])))
        ]
