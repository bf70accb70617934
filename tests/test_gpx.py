"""Tests for GPX export and polyline decoding."""

from datetime import timedelta

import gpxpy
import pytest

from campstops.models import Provenance, StopType
from campstops.utils.gpx import create_gpx_from_plan, decode_polyline

from .conftest import make_stop


class TestDecodePolyline:
    def test_reference_polyline(self):
        """Google's documented example, returned as (lon, lat)."""
        points = decode_polyline("_p~iF~ps|U_ulLnnqC_mqNvxq`@")
        assert points == [
            pytest.approx((-120.2, 38.5)),
            pytest.approx((-120.95, 40.7)),
            pytest.approx((-126.453, 43.252)),
        ]
    
    def test_truncated_polyline_rejected(self):
        with pytest.raises(ValueError):
            decode_polyline("_p~iF~ps|U_ulL")
    
    def test_empty_polyline(self):
        assert decode_polyline("") == []


class TestCreateGpx:
    def test_route_track_and_stop_waypoints(self, equator_route):
        stops = [
            make_stop("persisted-1", 0.1, 0.01, Provenance.PERSISTED),
            make_stop("synthetic-1", 0.2, 0.0, Provenance.SYNTHETIC, StopType.GAS).model_copy(
                update={"estimated_time_from_start": timedelta(minutes=90)}
            ),
        ]
        gpx = gpxpy.parse(create_gpx_from_plan("Test trip", equator_route, stops))
        
        assert [w.name for w in gpx.waypoints] == ["Persisted-1", "Synthetic-1"]
        assert gpx.waypoints[0].symbol == "Campground"
        assert "ETA 1h 30m" in gpx.waypoints[1].description
        points = gpx.tracks[0].segments[0].points
        assert [(p.longitude, p.latitude) for p in points] == [pytest.approx(p) for p in equator_route]
