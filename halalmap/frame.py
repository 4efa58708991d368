"""
One render pass: tiles, markers and selection recomputed from the current state.
Nothing is carried over between frames.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from halalmap.geo.markers import Entity, ScreenMarker, marker_counts, project_markers
from halalmap.geo.tiles import Tile, compute_tile_grid, tile_url
from halalmap.interaction.state import MapState, Selection
from halalmap.map_settings import QUICK_ACCESS_COUNT, TILE_URL


@dataclass
class Frame:
    zoom: int
    center: tuple
    width_px: float
    height_px: float
    tiles: List[Tile]
    markers: List[ScreenMarker]
    selection: Selection
    counts: dict = field(default_factory=dict)
    quick_access: List[str] = field(default_factory=list)

    @property
    def tile_keys(self) -> set:
        return {t.key for t in self.tiles}

    def marker_for(self, entity_id: str) -> Optional[ScreenMarker]:
        for m in self.markers:
            if m.entity_id == entity_id:
                return m
        return None

    def to_dict(self, tile_template: str = TILE_URL) -> dict:
        return {
            "zoom": self.zoom,
            "center": {"lat": self.center[0], "lng": self.center[1]},
            "size": {"width": self.width_px, "height": self.height_px},
            "tiles": [
                {
                    "x": t.tile_x,
                    "y": t.tile_y,
                    "z": t.zoom,
                    "left": t.screen_x,
                    "top": t.screen_y,
                    "url": tile_url(t, tile_template),
                }
                for t in self.tiles
            ],
            "markers": [
                {"id": m.entity_id, "x": m.x, "y": m.y, "visible": m.visible, "verified": m.verified}
                for m in self.markers
            ],
            "selection": {
                "focused_id": self.selection.focused_id,
                "hovered_id": self.selection.hovered_id,
            },
            "counts": dict(self.counts),
            "quick_access": list(self.quick_access),
        }


def build_frame(state: MapState, entities: Sequence[Entity]) -> Frame:
    vp = state.viewport
    markers = project_markers(vp, entities)
    return Frame(
        zoom=vp.zoom,
        center=(vp.center.lat, vp.center.lng),
        width_px=vp.width_px,
        height_px=vp.height_px,
        tiles=compute_tile_grid(vp),
        markers=markers,
        selection=state.selection,
        counts=marker_counts(markers),
        quick_access=[e.id for e in entities[:QUICK_ACCESS_COUNT]],
    )
