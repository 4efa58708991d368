"""Tests for halalmap.interaction.selection."""
import pytest

from halalmap.interaction.selection import clear_focus, focus_entity, set_hover
from halalmap.interaction.state import Selection


def test_focus_entity_recenters_at_detail_zoom(map_state, jakarta):
    s = focus_entity(map_state, jakarta)
    assert s.selection == Selection(focused_id="rst-001")
    assert s.viewport.center.lat == pytest.approx(-6.2088)
    assert s.viewport.center.lng == pytest.approx(106.8456)
    assert s.viewport.zoom == 12
    # original state untouched
    assert map_state.viewport.zoom == 5
    assert map_state.selection.focused_id is None


def test_focus_entity_custom_zoom_is_clamped(map_state, jakarta):
    assert focus_entity(map_state, jakarta, zoom=30).viewport.zoom == 15


def test_focus_keeps_hover(map_state, jakarta):
    s = focus_entity(set_hover(map_state, "rst-002"), jakarta)
    assert s.selection.hovered_id == "rst-002"


def test_set_hover_same_id_returns_same_state(map_state):
    s = set_hover(map_state, "a")
    assert set_hover(s, "a") is s


def test_clear_focus_noop_without_focus(map_state):
    assert clear_focus(map_state) is map_state
