"""
Tile grid for a viewport: which (zoom, x, y) raster tiles to draw and where.

Placement is derived from the fractional world position of the viewport
center, so sub-pixel pans move tiles continuously. Columns wrap around the
antimeridian; rows outside [0, 2**zoom) do not exist and are never emitted.
"""
import math
from dataclasses import dataclass
from typing import List

from halalmap.geo.viewport import Viewport
from halalmap.map_settings import TILE_URL


@dataclass(frozen=True)
class Tile:
    tile_x: int
    tile_y: int
    zoom: int
    screen_x: float
    screen_y: float

    @property
    def key(self) -> tuple:
        """Address used to request the image: (zoom, x, y)."""
        return (self.zoom, self.tile_x, self.tile_y)


def wrap_tile_x(tile_x: int, zoom: int) -> int:
    """Wrap a column index into [0, 2**zoom)."""
    return tile_x % (2 ** zoom)


def tile_url(tile: Tile, template: str = TILE_URL) -> str:
    return template.format(z=tile.zoom, x=tile.tile_x, y=tile.tile_y)


def compute_tile_grid(viewport: Viewport) -> List[Tile]:
    """Tiles covering the viewport plus one tile of overscan, row-major."""
    ts = viewport.tile_size
    n = 2 ** viewport.zoom
    center = viewport.center_world()
    half_w = viewport.width_px / 2.0
    half_h = viewport.height_px / 2.0

    center_tx = math.floor(center.x / ts)
    center_ty = math.floor(center.y / ts)
    # Sub-tile offset of the center inside its tile
    offset_x = center.x - center_tx * ts
    offset_y = center.y - center_ty * ts

    cols = math.ceil(viewport.width_px / ts) + 1
    rows = math.ceil(viewport.height_px / ts) + 1
    # First column/row touching the left/top edge, relative to the center tile
    first_dx = math.floor((offset_x - half_w) / ts)
    first_dy = math.floor((offset_y - half_h) / ts)

    tiles = []
    for j in range(rows):
        dy = first_dy + j
        ty = center_ty + dy
        if ty < 0 or ty >= n:
            continue
        sy = half_h + dy * ts - offset_y
        for i in range(cols):
            dx = first_dx + i
            sx = half_w + dx * ts - offset_x
            tiles.append(Tile(wrap_tile_x(center_tx + dx, viewport.zoom), ty, viewport.zoom, sx, sy))
    return tiles
