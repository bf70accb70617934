"""GPX file generation utilities."""

from datetime import datetime, timezone
from typing import Sequence

import gpxpy
import gpxpy.gpx

from campstops.models import Stop, StopType
from .geo import format_eta


# Garmin waypoint symbols per stop type
STOP_SYMBOLS = {
    StopType.CAMPSITE: "Campground",
    StopType.GAS: "Gas Station",
    StopType.WATER: "Drinking Water",
    StopType.DUMP: "Restroom",
    StopType.WALMART: "Shopping Center",
    StopType.PROPANE: "Gas Station",
    StopType.REPAIR: "Car Repair",
}


def create_gpx_from_plan(
    name: str,
    polyline: Sequence[tuple[float, float]],
    stops: Sequence[Stop],
    description: str | None = None,
) -> str:
    """
    Create a GPX document with the route as a track and stops as waypoints.
    
    Args:
        name: Name of the track
        polyline: Route as (longitude, latitude) pairs
        stops: Stops to add as waypoints
        description: Optional track description
    
    Returns:
        GPX XML string
    """
    gpx = gpxpy.gpx.GPX()
    gpx.name = name
    gpx.description = description
    gpx.creator = "Campstops Trip Planner"
    gpx.time = datetime.now(timezone.utc)
    
    for stop in stops:
        waypoint = gpxpy.gpx.GPXWaypoint(
            latitude=stop.coordinates.latitude,
            longitude=stop.coordinates.longitude,
        )
        waypoint.name = stop.name
        waypoint.description = (
            f"{stop.stop_type.value} ({stop.provenance.value}), "
            f"{stop.distance_from_route_m / 1000:.1f} km off route, "
            f"ETA {format_eta(stop.estimated_time_from_start)}"
        )
        waypoint.symbol = STOP_SYMBOLS.get(stop.stop_type, "Waypoint")
        waypoint.type = stop.stop_type.value
        gpx.waypoints.append(waypoint)
    
    track = gpxpy.gpx.GPXTrack()
    track.name = name
    track.type = "driving"
    gpx.tracks.append(track)
    
    segment = gpxpy.gpx.GPXTrackSegment()
    track.segments.append(segment)
    for lon, lat in polyline:
        segment.points.append(gpxpy.gpx.GPXTrackPoint(latitude=lat, longitude=lon))
    
    return gpx.to_xml()


def save_gpx_file(gpx_content: str, filepath: str) -> None:
    """Save GPX content to a file."""
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(gpx_content)


def _read_signed(encoded: str, index: int) -> tuple[int, int]:
    """Read one zigzag varint starting at index; returns (value, next index)."""
    shift = 0
    result = 0
    while True:
        if index >= len(encoded):
            raise ValueError("Truncated polyline string")
        chunk = ord(encoded[index]) - 63
        index += 1
        result |= (chunk & 0x1f) << shift
        shift += 5
        if chunk < 0x20:
            break
    value = ~(result >> 1) if result & 1 else result >> 1
    return value, index


def decode_polyline(encoded: str, precision: int = 5) -> list[tuple[float, float]]:
    """
    Decode a Google-style encoded polyline string.
    
    Used by the CLI to accept a pre-computed route (--polyline) instead of
    asking the directions API for one.
    
    Args:
        encoded: The encoded polyline string
        precision: Coordinate precision (5 for Google/Mapbox polyline, 6 for polyline6)
    
    Returns:
        List of (lon, lat) tuples
    
    Raises:
        ValueError: If the string ends partway through a coordinate
    """
    factor = 10 ** precision
    coordinates = []
    index = 0
    lat = lon = 0
    
    while index < len(encoded):
        # Each pair is stored as a lat delta then a lon delta
        dlat, index = _read_signed(encoded, index)
        dlon, index = _read_signed(encoded, index)
        lat += dlat
        lon += dlon
        coordinates.append((lon / factor, lat / factor))
    
    return coordinates
