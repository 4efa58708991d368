"""
Selection: which restaurant is focused (details panel) or hovered (tooltip).
Focusing recenters the map on the restaurant at DETAIL_ZOOM.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Optional

from halalmap.geo.markers import Entity
from halalmap.interaction.state import MapState
from halalmap.map_settings import DETAIL_ZOOM


def focus_entity(state: MapState, entity: Entity, zoom: int = DETAIL_ZOOM) -> MapState:
    def mutate(vp):
        vp.set_center(entity.coordinate)
        vp.set_zoom(zoom)

    new = state.with_viewport(mutate)
    return replace(new, selection=replace(state.selection, focused_id=entity.id))


def set_hover(state: MapState, entity_id: Optional[str]) -> MapState:
    if state.selection.hovered_id == entity_id:
        return state
    return replace(state, selection=replace(state.selection, hovered_id=entity_id))


def clear_focus(state: MapState) -> MapState:
    if state.selection.focused_id is None:
        return state
    return replace(state, selection=replace(state.selection, focused_id=None))
