"""Tests for geospatial helpers and route bounds."""

from datetime import timedelta
from math import cos, radians

import pytest

from campstops.errors import InvalidRouteError
from campstops.utils.bounds import compute_bounds, compute_route_bounds
from campstops.utils.geo import (
    densify_polyline,
    estimate_driving_time,
    format_eta,
    haversine_distance,
    nearest_distance_to_polyline,
    normalize_point,
    offset_point,
    route_length,
)

from .conftest import LOS_ANGELES, SAN_FRANCISCO


class TestHaversine:
    """Test great-circle distance."""
    
    def test_same_point(self):
        """Distance from a point to itself should be 0."""
        assert haversine_distance(SAN_FRANCISCO, SAN_FRANCISCO) == 0
    
    def test_symmetry(self):
        assert haversine_distance(SAN_FRANCISCO, LOS_ANGELES) == pytest.approx(
            haversine_distance(LOS_ANGELES, SAN_FRANCISCO)
        )
    
    def test_known_distance(self):
        """San Francisco to Los Angeles is ~559 km in a straight line."""
        dist = haversine_distance(SAN_FRANCISCO, LOS_ANGELES)
        assert 550_000 < dist < 570_000
    
    def test_short_distance(self):
        """0.001 degree of latitude is ~111 m."""
        dist = haversine_distance((-105.0, 39.000), (-105.0, 39.001))
        assert 100 < dist < 120
    
    def test_triangle_inequality(self):
        denver = (-104.9903, 39.7392)
        direct = haversine_distance(SAN_FRANCISCO, LOS_ANGELES)
        via = haversine_distance(SAN_FRANCISCO, denver) + haversine_distance(denver, LOS_ANGELES)
        assert direct <= via + 1e-6


class TestNearestDistanceToPolyline:
    """Test vertex-based distance to a route."""
    
    def test_point_on_vertex(self, equator_route):
        nearest = nearest_distance_to_polyline((0.2, 0.0), equator_route)
        assert nearest.distance_m == 0
        assert nearest.index == 2
    
    def test_picks_closest_vertex(self, equator_route):
        nearest = nearest_distance_to_polyline((0.09, 0.01), equator_route)
        assert nearest.index == 1
        assert 1000 < nearest.distance_m < 2000
    
    def test_measures_vertices_not_segments(self, sf_la_route):
        """A point on the segment midpoint is far from both vertices."""
        midpoint = (
            (SAN_FRANCISCO[0] + LOS_ANGELES[0]) / 2,
            (SAN_FRANCISCO[1] + LOS_ANGELES[1]) / 2,
        )
        nearest = nearest_distance_to_polyline(midpoint, sf_la_route)
        assert nearest.distance_m > 250_000
    
    @pytest.mark.parametrize("polyline", [[], [SAN_FRANCISCO]])
    def test_rejects_short_polyline(self, polyline):
        with pytest.raises(InvalidRouteError):
            nearest_distance_to_polyline(SAN_FRANCISCO, polyline)


class TestRouteGeometry:
    """Test route length, densification and offsets."""
    
    def test_route_length_sums_segments(self, equator_route):
        expected = 3 * haversine_distance((0.0, 0.0), (0.1, 0.0))
        assert route_length(equator_route) == pytest.approx(expected)
    
    def test_densify_limits_spacing(self, sf_la_route):
        dense = densify_polyline(sf_la_route, 1000)
        assert dense[0] == SAN_FRANCISCO
        assert dense[-1] == pytest.approx(LOS_ANGELES)
        assert all(
            haversine_distance(dense[i-1], dense[i]) <= 1000 + 1
            for i in range(1, len(dense))
        )
    
    def test_densify_keeps_short_segments(self, equator_route):
        assert densify_polyline(equator_route, 50_000) == equator_route
    
    def test_offset_point_distance(self):
        moved = offset_point((-105.0, 39.0), 10.0, radians(90))
        assert haversine_distance((-105.0, 39.0), moved) == pytest.approx(10_000, rel=0.02)
    
    def test_offset_point_wraps_antimeridian(self):
        lon, lat = offset_point((179.99, -16.8), 10.0, radians(90))
        assert -180 <= lon < -179.8
        assert haversine_distance((179.99, -16.8), (lon, lat)) == pytest.approx(10_000, rel=0.02)
    
    def test_normalize_point(self):
        assert normalize_point((180.5, 10.0)) == pytest.approx((-179.5, 10.0))
        assert normalize_point((-181.0, -95.0)) == pytest.approx((179.0, -90.0))
        assert normalize_point((12.0, 45.0)) == (12.0, 45.0)


class TestDrivingTime:
    """Test ETA estimation and formatting."""
    
    def test_one_hour_at_55_mph(self):
        eta = estimate_driving_time(55 * 1609.34)
        assert eta.total_seconds() == pytest.approx(3600)
    
    def test_format_eta(self):
        assert format_eta(timedelta(hours=2, minutes=5, seconds=30)) == "2h 5m"
        assert format_eta(timedelta(minutes=45)) == "45m"
        assert format_eta(timedelta(0)) == "0m"


class TestBufferBounds:
    """Test padded bounding boxes."""
    
    def test_contains_every_vertex(self, sf_la_route):
        bounds = compute_route_bounds(sf_la_route, 20)
        assert all(bounds.contains(p) for p in sf_la_route)
    
    def test_padding(self, sf_la_route):
        bounds = compute_bounds(sf_la_route, 20)
        buffer_km = 20 * 1.60934
        mean_lat = (SAN_FRANCISCO[1] + LOS_ANGELES[1]) / 2
        
        assert bounds.max_lat == pytest.approx(SAN_FRANCISCO[1] + buffer_km / 111)
        assert bounds.min_lat == pytest.approx(LOS_ANGELES[1] - buffer_km / 111)
        assert bounds.min_lng == pytest.approx(
            SAN_FRANCISCO[0] - buffer_km / (111 * cos(radians(mean_lat)))
        )
    
    def test_mapbox_bbox_order(self):
        bounds = compute_bounds([(10.0, 50.0)], 1)
        min_lng, min_lat, max_lng, max_lat = map(float, bounds.as_mapbox_bbox().split(","))
        assert min_lng < 10.0 < max_lng
        assert min_lat < 50.0 < max_lat
    
    def test_route_bounds_reject_single_point(self):
        with pytest.raises(InvalidRouteError):
            compute_route_bounds([SAN_FRANCISCO], 20)
