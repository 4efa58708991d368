from .projection import GeoPoint, WorldPixel, geo_to_world, world_to_geo, clamp_lat, world_size
from .viewport import Viewport
from .tiles import Tile, compute_tile_grid, wrap_tile_x, tile_url
from .markers import Entity, ScreenMarker, project_markers, marker_at, marker_counts

__all__ = [
    "GeoPoint",
    "WorldPixel",
    "geo_to_world",
    "world_to_geo",
    "clamp_lat",
    "world_size",
    "Viewport",
    "Tile",
    "compute_tile_grid",
    "wrap_tile_x",
    "tile_url",
    "Entity",
    "ScreenMarker",
    "project_markers",
    "marker_at",
    "marker_counts",
]
