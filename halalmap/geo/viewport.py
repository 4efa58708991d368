"""
Viewport: where the map is looking (center, integer zoom, pixel size).

Screen coordinates are measured from the top-left of the map area; the
viewport center sits at (width_px / 2, height_px / 2). Every consumer
(tiles, markers, zoom anchor) converts through the helpers below so the
layouts never drift apart.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field

from halalmap.geo.projection import GeoPoint, WorldPixel, clamp_lat, geo_to_world, world_to_geo
from halalmap.map_settings import (
    DEFAULT_CENTER,
    DEFAULT_HEIGHT_PX,
    DEFAULT_WIDTH_PX,
    DEFAULT_ZOOM,
    TILE_SIZE,
    ZOOM_MAX,
    ZOOM_MIN,
)


@dataclass
class Viewport:
    center: GeoPoint = field(default_factory=lambda: GeoPoint(*DEFAULT_CENTER))
    zoom: int = DEFAULT_ZOOM
    width_px: float = float(DEFAULT_WIDTH_PX)
    height_px: float = float(DEFAULT_HEIGHT_PX)
    zoom_min: int = ZOOM_MIN
    zoom_max: int = ZOOM_MAX
    tile_size: int = TILE_SIZE

    def __post_init__(self):
        self.zoom = self.clamp_zoom(self.zoom)
        self.center = GeoPoint(clamp_lat(self.center.lat), self.center.lng)

    def clamp_zoom(self, z) -> int:
        return max(self.zoom_min, min(self.zoom_max, int(z)))

    def set_zoom(self, z) -> bool:
        """Clamp and apply ``z``. Returns True if the zoom changed."""
        z = self.clamp_zoom(z)
        if z == self.zoom:
            return False
        self.zoom = z
        return True

    def set_center(self, point: GeoPoint):
        """Latitude is clamped to the pole guard; longitude is stored unwrapped."""
        self.center = GeoPoint(clamp_lat(point.lat), point.lng)

    def resize(self, width_px: float, height_px: float):
        self.width_px = float(width_px)
        self.height_px = float(height_px)

    def copy(self) -> "Viewport":
        return copy.copy(self)

    @property
    def screen_center(self) -> tuple:
        return (self.width_px / 2.0, self.height_px / 2.0)

    def center_world(self, zoom: int | None = None) -> WorldPixel:
        return geo_to_world(self.center, self.zoom if zoom is None else zoom, self.tile_size)

    def world_to_screen(self, pixel: WorldPixel) -> tuple:
        c = self.center_world()
        return (self.width_px / 2.0 + (pixel.x - c.x), self.height_px / 2.0 + (pixel.y - c.y))

    def screen_to_world(self, sx: float, sy: float) -> WorldPixel:
        c = self.center_world()
        return WorldPixel(c.x + (sx - self.width_px / 2.0), c.y + (sy - self.height_px / 2.0))

    def geo_to_screen(self, point: GeoPoint) -> tuple:
        """Screen position of ``point`` (no horizontal wrap applied)."""
        return self.world_to_screen(geo_to_world(point, self.zoom, self.tile_size))

    def screen_to_geo(self, sx: float, sy: float) -> GeoPoint:
        return world_to_geo(self.screen_to_world(sx, sy), self.zoom, self.tile_size)
