"""Tests for halalmap.geo.projection (Web Mercator world pixels)."""
import math
import random
import pytest

from halalmap.geo.projection import GeoPoint, WorldPixel, clamp_lat, geo_to_world, world_size, world_to_geo


def test_world_size_doubles_per_zoom():
    assert world_size(0) == 256
    assert world_size(5) == 256 * 32
    assert world_size(6) == 2 * world_size(5)


def test_origin_maps_to_world_center():
    wp = geo_to_world(GeoPoint(0.0, 0.0), 3)
    assert wp.x == pytest.approx(1024.0)
    assert wp.y == pytest.approx(1024.0)


def test_west_edge_and_north_is_up():
    assert geo_to_world(GeoPoint(0.0, -180.0), 4).x == pytest.approx(0.0)
    north = geo_to_world(GeoPoint(10.0, 0.0), 4)
    south = geo_to_world(GeoPoint(-10.0, 0.0), 4)
    assert north.y < south.y


def test_matches_log_tan_formula():
    lat, zoom = 52.0, 7
    scale = 256 * 2 ** zoom
    expected = (1 - math.log(math.tan(math.pi / 4 + lat * math.pi / 360)) / math.pi) / 2 * scale
    assert geo_to_world(GeoPoint(lat, 4.0), zoom).y == pytest.approx(expected)


def test_round_trip_within_tolerance():
    rng = random.Random(7)
    for _ in range(500):
        zoom = rng.randint(3, 15)
        p = GeoPoint(rng.uniform(-85, 85), rng.uniform(-179.9999, 180))
        q = world_to_geo(geo_to_world(p, zoom), zoom)
        assert abs(q.lat - p.lat) < 1e-6
        assert abs(q.lng - p.lng) < 1e-6


def test_round_trip_at_pole_guard_and_antimeridian():
    for p in (GeoPoint(85.0, 180.0), GeoPoint(-85.0, -179.5)):
        for zoom in (3, 15):
            q = world_to_geo(geo_to_world(p, zoom), zoom)
            assert q.lat == pytest.approx(p.lat, abs=1e-6)
            assert q.lng == pytest.approx(p.lng, abs=1e-6)


def test_pure_same_input_same_output():
    p = GeoPoint(-6.2088, 106.8456)
    assert geo_to_world(p, 12) == geo_to_world(p, 12)
    assert world_to_geo(WorldPixel(100.5, 200.25), 9) == world_to_geo(WorldPixel(100.5, 200.25), 9)


def test_clamp_lat():
    assert clamp_lat(90.0) == 85.0
    assert clamp_lat(-91.0) == -85.0
    assert clamp_lat(12.5) == 12.5
