"""
Pygame renderer for the restaurant map: raster tiles and marker pins for a Frame.
Tiles are fetched on background threads; missing or failed tiles draw as grey cells.
"""
import io
import logging
import threading
import urllib.request

import pygame

from halalmap.frame import Frame
from halalmap.geo.tiles import Tile, tile_url
from halalmap.map_settings import TILE_SIZE, TILE_TIMEOUT_S, TILE_URL, USER_AGENT
from pygame_viz.config import HALO, TILE_FAILED, TILE_PLACEHOLDER, marker_style

log = logging.getLogger(__name__)


def fetch_tile(tile: Tile, template: str = TILE_URL) -> bytes | None:
    """Download one tile image. Returns None on failure."""
    url = tile_url(tile, template)
    try:
        req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
        with urllib.request.urlopen(req, timeout=TILE_TIMEOUT_S) as resp:
            return resp.read()
    except Exception as exc:
        log.debug("Tile %s failed: %s", url, exc)
        return None


class TileLoader:
    """Fire-and-forget tile requests keyed by (zoom, x, y).

    Images and failure marks are kept only while their address is part of the
    current frame. A failed address is not requested again while it stays in view.
    """

    def __init__(self, fetch=fetch_tile, template: str = TILE_URL):
        self._fetch = fetch
        self._template = template
        self._lock = threading.Lock()
        self._data = {}  # key -> raw bytes, filled by worker threads
        self._surfaces = {}  # key -> decoded pygame.Surface (UI thread only)
        self._pending = set()
        self.failed = set()

    def request(self, tile: Tile):
        key = tile.key
        with self._lock:
            if key in self._pending or key in self._data or key in self._surfaces or key in self.failed:
                return
            self._pending.add(key)
        t = threading.Thread(target=self._load, args=(tile,), daemon=True)
        t.start()
        return t

    def _load(self, tile: Tile):
        data = self._fetch(tile, self._template)
        with self._lock:
            self._pending.discard(tile.key)
            if data is None:
                self.failed.add(tile.key)
            else:
                self._data[tile.key] = data

    def retain(self, keys: set):
        """Drop images and failure marks whose address is no longer in ``keys``."""
        with self._lock:
            for key in [k for k in self._data if k not in keys]:
                del self._data[key]
            self.failed &= keys
        for key in [k for k in self._surfaces if k not in keys]:
            del self._surfaces[key]

    def surface(self, key) -> "pygame.Surface | None":
        if key in self._surfaces:
            return self._surfaces[key]
        with self._lock:
            data = self._data.pop(key, None)
        if data is None:
            return None
        try:
            surf = pygame.image.load(io.BytesIO(data))
        except pygame.error as exc:
            log.debug("Tile %s could not be decoded: %s", key, exc)
            with self._lock:
                self.failed.add(key)
            return None
        self._surfaces[key] = surf
        return surf


class MapView:
    """Draws one Frame: tiles first, then pins (focused/hovered on top)."""

    def __init__(self, loader: TileLoader | None = None):
        self.loader = loader or TileLoader()

    def draw_tiles(self, surface: pygame.Surface, frame: Frame):
        self.loader.retain(frame.tile_keys)
        for tile in frame.tiles:
            self.loader.request(tile)
            rect = (int(round(tile.screen_x)), int(round(tile.screen_y)), TILE_SIZE, TILE_SIZE)
            img = self.loader.surface(tile.key)
            if img is not None:
                surface.blit(img, rect[:2])
            elif tile.key in self.loader.failed:
                surface.fill(TILE_FAILED, rect)
            else:
                surface.fill(TILE_PLACEHOLDER, rect)

    def draw_markers(self, surface: pygame.Surface, frame: Frame):
        sel = frame.selection
        highlighted = []
        for m in frame.markers:
            if not m.visible:
                continue
            if m.entity_id in (sel.focused_id, sel.hovered_id):
                highlighted.append(m)
                continue
            self._draw_pin(surface, m, False, False)
        for m in highlighted:
            self._draw_pin(surface, m, m.entity_id == sel.focused_id, m.entity_id == sel.hovered_id)

    def _draw_pin(self, surface, marker, selected, hovered):
        style = marker_style(marker.verified, selected, hovered)
        pt = (int(round(marker.x)), int(round(marker.y)))
        if selected or hovered:
            pygame.draw.circle(surface, HALO, pt, style.radius + 8, 3)
        pygame.draw.circle(surface, style.fill, pt, style.radius)
        pygame.draw.circle(surface, style.outline, pt, style.radius, 2)

    def draw(self, surface: pygame.Surface, frame: Frame):
        self.draw_tiles(surface, frame)
        self.draw_markers(surface, frame)
