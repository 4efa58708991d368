"""
Spherical Web Mercator: WGS84 lat/lng <-> world pixels at an integer zoom.

World pixels form a square plane of ``TILE_SIZE * 2**zoom`` pixels per side,
origin at the north-west corner (lng -180, lat ~85.05). Both directions are pure.
Latitude must already be within the pole guard; nothing here clamps.
"""
import math
from dataclasses import dataclass

from halalmap.map_settings import MAX_LATITUDE, TILE_SIZE


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


@dataclass(frozen=True)
class WorldPixel:
    """Continuous world-pixel position; only meaningful with the zoom that produced it."""
    x: float
    y: float


def world_size(zoom: int, tile_size: int = TILE_SIZE) -> float:
    """Edge length of the world-pixel plane at ``zoom``."""
    return tile_size * float(2 ** zoom)


def geo_to_world(point: GeoPoint, zoom: int, tile_size: int = TILE_SIZE) -> WorldPixel:
    """Project ``point`` to world pixels at ``zoom``."""
    scale = world_size(zoom, tile_size)
    x = (point.lng + 180.0) / 360.0 * scale
    lat_rad = math.radians(point.lat)
    y = (1.0 - math.asinh(math.tan(lat_rad)) / math.pi) / 2.0 * scale
    return WorldPixel(x, y)


def world_to_geo(pixel: WorldPixel, zoom: int, tile_size: int = TILE_SIZE) -> GeoPoint:
    """Inverse of geo_to_world."""
    scale = world_size(zoom, tile_size)
    lng = pixel.x / scale * 360.0 - 180.0
    lat_rad = math.atan(math.sinh(math.pi * (1.0 - 2.0 * pixel.y / scale)))
    return GeoPoint(math.degrees(lat_rad), lng)


def clamp_lat(lat: float, limit: float = MAX_LATITUDE) -> float:
    return max(-limit, min(limit, lat))
