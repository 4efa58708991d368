"""Tests for pygame_viz.map_view (tile loading and drawing on an off-screen surface)."""
import os
import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
import pygame

from halalmap.frame import build_frame
from halalmap.geo.tiles import Tile
from halalmap.interaction.selection import focus_entity
from pygame_viz.config import TILE_FAILED, TILE_PLACEHOLDER, VERIFIED
from pygame_viz.map_view import MapView, TileLoader


@pytest.fixture
def png_bytes(tmp_path):
    surf = pygame.Surface((256, 256))
    surf.fill((10, 200, 30))
    path = tmp_path / "tile.png"
    pygame.image.save(surf, str(path))
    return path.read_bytes()


def _tile(x=1, y=2, z=3):
    return Tile(x, y, z, 0.0, 0.0)


def test_loader_fetches_once_and_decodes(png_bytes):
    calls = []

    def fetch(tile, template):
        calls.append(tile.key)
        return png_bytes

    loader = TileLoader(fetch=fetch)
    loader.request(_tile()).join(timeout=5)
    assert loader.request(_tile()) is None
    surf = loader.surface((3, 1, 2))
    assert surf is not None
    assert surf.get_size() == (256, 256)
    assert loader.surface((3, 1, 2)) is surf
    assert calls == [(3, 1, 2)]


def test_loader_remembers_failures():
    loader = TileLoader(fetch=lambda tile, template: None)
    loader.request(_tile()).join(timeout=5)
    assert (3, 1, 2) in loader.failed
    assert loader.request(_tile()) is None
    assert loader.surface((3, 1, 2)) is None


def test_loader_undecodable_data_is_failed():
    loader = TileLoader(fetch=lambda tile, template: b"not an image")
    loader.request(_tile()).join(timeout=5)
    assert loader.surface((3, 1, 2)) is None
    assert (3, 1, 2) in loader.failed


def test_retain_drops_tiles_outside_frame(png_bytes):
    loader = TileLoader(fetch=lambda tile, template: png_bytes)
    loader.request(_tile(1, 2)).join(timeout=5)
    loader.request(_tile(2, 2)).join(timeout=5)
    assert loader.surface((3, 1, 2)) is not None
    loader.retain({(3, 2, 2)})
    assert loader.surface((3, 1, 2)) is None
    assert loader.surface((3, 2, 2)) is not None


def test_map_view_draws_placeholders_and_pins(map_state, sample_entities, jakarta):
    pygame.init()
    try:
        loader = TileLoader(fetch=lambda tile, template: None)
        view = MapView(loader)
        state = focus_entity(map_state, jakarta)
        frame = build_frame(state, sample_entities)
        surface = pygame.Surface((800, 500))
        view.draw(surface, frame)
        # Focused marker sits at the viewport center
        assert surface.get_at((400, 250))[:3] != TILE_PLACEHOLDER
        # Failed tiles show as dark cells on a later draw
        view.draw(surface, frame)
        assert len(loader.failed) <= len(frame.tiles)
        assert surface.get_at((5, 5))[:3] in (TILE_PLACEHOLDER, TILE_FAILED)
    finally:
        pygame.quit()


def test_map_view_pin_colour_for_verified(map_state, sample_entities):
    pygame.init()
    try:
        view = MapView(TileLoader(fetch=lambda tile, template: None))
        frame = build_frame(map_state, sample_entities)
        surface = pygame.Surface((800, 500))
        view.draw(surface, frame)
        m = frame.marker_for("rst-001")
        assert surface.get_at((int(round(m.x)), int(round(m.y))))[:3] == VERIFIED.fill
    finally:
        pygame.quit()


def test_retain_forgets_failures_outside_frame():
    loader = TileLoader(fetch=lambda tile, template: None)
    loader.request(_tile(1, 2)).join(timeout=5)
    loader.request(_tile(2, 2)).join(timeout=5)
    assert loader.failed == {(3, 1, 2), (3, 2, 2)}
    loader.retain({(3, 2, 2)})
    assert loader.failed == {(3, 2, 2)}
    # still in view: not requested again
    assert loader.request(_tile(2, 2)) is None
