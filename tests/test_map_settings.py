"""Tests for map_settings constants."""
import pytest

from halalmap.map_settings import (
    ALL_PROVINCES,
    CUISINES,
    CULL_MARGIN_PX,
    DEFAULT_CENTER,
    DEFAULT_ZOOM,
    DETAIL_ZOOM,
    FETCH_DEBOUNCE_S,
    MAX_LATITUDE,
    PROVINCES,
    TILE_SIZE,
    TILE_URL,
    ZOOM_MAX,
    ZOOM_MIN,
)


def test_zoom_limits():
    assert ZOOM_MIN == 3
    assert ZOOM_MAX == 15
    assert ZOOM_MIN <= DEFAULT_ZOOM <= ZOOM_MAX
    assert ZOOM_MIN <= DETAIL_ZOOM <= ZOOM_MAX


def test_default_center_in_range():
    lat, lng = DEFAULT_CENTER
    assert -MAX_LATITUDE <= lat <= MAX_LATITUDE
    assert -180 < lng <= 180


def test_tile_settings():
    assert TILE_SIZE == 256
    for part in ("{z}", "{x}", "{y}"):
        assert part in TILE_URL


def test_fetch_and_marker_params():
    assert FETCH_DEBOUNCE_S > 0
    assert CULL_MARGIN_PX >= 0


def test_filter_lists_start_with_all_sentinel():
    assert PROVINCES[0] == ALL_PROVINCES
    assert "DKI Jakarta" in PROVINCES
    assert CUISINES[0].startswith("All")
    assert len(set(PROVINCES)) == len(PROVINCES)
