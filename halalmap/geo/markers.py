"""
Restaurant markers: entity snapshot records and their per-frame screen positions.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from halalmap.geo.projection import GeoPoint, geo_to_world, world_size
from halalmap.geo.viewport import Viewport
from halalmap.map_settings import CULL_MARGIN_PX, MARKER_HIT_RADIUS_PX

# Record keys mapped onto Entity attributes; everything else lands in ``details``.
_DISPLAY_FIELDS = {
    "name": "name",
    "address": "address",
    "province": "province",
    "cuisine": "cuisine",
    "rating": "rating",
    "reviewCount": "review_count",
    "review_count": "review_count",
}


@dataclass(frozen=True)
class Entity:
    """A restaurant as returned by the entity source. Treated as immutable."""
    id: str
    coordinate: GeoPoint
    verified: bool = False
    name: str = ""
    address: str = ""
    province: str = ""
    cuisine: str = ""
    rating: float = 0.0
    review_count: int = 0
    details: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def from_record(cls, record: dict) -> "Entity":
        """Build from an API record ({id, latitude, longitude, verified, ...} or lat/lng)."""
        lat = record.get("latitude", record.get("lat"))
        lng = record.get("longitude", record.get("lng"))
        kwargs = {}
        details = {}
        for key, value in record.items():
            if key in _DISPLAY_FIELDS:
                kwargs[_DISPLAY_FIELDS[key]] = value
            elif key not in ("id", "latitude", "longitude", "lat", "lng", "verified"):
                details[key] = value
        return cls(
            id=str(record["id"]),
            coordinate=GeoPoint(_to_float(lat), _to_float(lng)),
            verified=bool(record.get("verified", False)),
            details=details,
            **kwargs,
        )

    def to_record(self) -> dict:
        out = dict(self.details)
        out.update({
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "province": self.province,
            "cuisine": self.cuisine,
            "latitude": self.coordinate.lat,
            "longitude": self.coordinate.lng,
            "verified": self.verified,
            "rating": self.rating,
            "reviewCount": self.review_count,
        })
        return out

    @property
    def has_valid_coordinate(self) -> bool:
        lat, lng = self.coordinate.lat, self.coordinate.lng
        return math.isfinite(lat) and math.isfinite(lng) and -90.0 <= lat <= 90.0


def _to_float(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return float("nan")


@dataclass(frozen=True)
class ScreenMarker:
    entity_id: str
    x: float
    y: float
    visible: bool
    verified: bool = False


def project_markers(
    viewport: Viewport,
    entities: Iterable[Entity],
    margin: float = CULL_MARGIN_PX,
) -> List[ScreenMarker]:
    """Screen position of each entity, in input order.

    Positions use the same center-relative offset as the tile grid. Horizontally
    the copy of the entity nearest the viewport center is used so markers follow
    wrapped tiles. Entities without a finite coordinate are skipped.
    """
    zoom = viewport.zoom
    span = world_size(zoom, viewport.tile_size)
    center = viewport.center_world()
    half_w = viewport.width_px / 2.0
    half_h = viewport.height_px / 2.0
    out = []
    for entity in entities:
        if not entity.has_valid_coordinate:
            continue
        wp = geo_to_world(entity.coordinate, zoom, viewport.tile_size)
        dx = wp.x - center.x
        dx -= round(dx / span) * span
        x = half_w + dx
        y = half_h + (wp.y - center.y)
        visible = (
            -margin <= x <= viewport.width_px + margin
            and -margin <= y <= viewport.height_px + margin
        )
        out.append(ScreenMarker(entity.id, x, y, visible, entity.verified))
    return out


def marker_at(
    markers: List[ScreenMarker],
    x: float,
    y: float,
    radius: float = MARKER_HIT_RADIUS_PX,
) -> Optional[ScreenMarker]:
    """Topmost visible marker within ``radius`` of (x, y); later markers draw on top."""
    r2 = radius * radius
    for m in reversed(markers):
        if m.visible and (m.x - x) ** 2 + (m.y - y) ** 2 <= r2:
            return m
    return None


def marker_counts(markers: List[ScreenMarker]) -> dict:
    """Legend counts: all projected markers, visible ones, verified and pending."""
    verified = sum(1 for m in markers if m.verified)
    return {
        "total": len(markers),
        "visible": sum(1 for m in markers if m.visible),
        "verified": verified,
        "pending": len(markers) - verified,
    }
