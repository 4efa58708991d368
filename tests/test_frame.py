"""Tests for halalmap.frame (one render pass)."""
from halalmap.frame import build_frame
from halalmap.geo.tiles import compute_tile_grid
from halalmap.interaction.selection import focus_entity


def test_build_frame_contents(map_state, sample_entities):
    frame = build_frame(map_state, sample_entities)
    assert frame.zoom == 5
    assert frame.center == (-2.5, 118.0)
    assert frame.tile_keys == {t.key for t in compute_tile_grid(map_state.viewport)}
    assert [m.entity_id for m in frame.markers] == ["rst-001", "rst-002", "rst-004"]
    assert frame.counts == {"total": 3, "visible": 3, "verified": 2, "pending": 1}
    assert frame.quick_access == ["rst-001", "rst-002", "rst-004"]


def test_frame_follows_selection(map_state, sample_entities, jakarta):
    frame = build_frame(focus_entity(map_state, jakarta), sample_entities)
    assert frame.selection.focused_id == "rst-001"
    m = frame.marker_for("rst-001")
    assert abs(m.x - 400) < 1e-6 and abs(m.y - 250) < 1e-6
    assert frame.marker_for("nope") is None


def test_quick_access_is_capped(map_state, jakarta):
    frame = build_frame(map_state, [jakarta] * 25)
    assert len(frame.quick_access) == 10


def test_to_dict(map_state, sample_entities):
    d = build_frame(map_state, sample_entities).to_dict("https://t/{z}/{x}/{y}.png")
    assert d["center"] == {"lat": -2.5, "lng": 118.0}
    assert d["size"] == {"width": 800, "height": 500}
    tile = d["tiles"][0]
    assert tile["url"] == f"https://t/{tile['z']}/{tile['x']}/{tile['y']}.png"
    assert {m["id"] for m in d["markers"]} == {"rst-001", "rst-002", "rst-004"}
    assert d["selection"] == {"focused_id": None, "hovered_id": None}
