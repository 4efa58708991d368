"""
Interaction state machine: pointer, wheel and control events -> viewport changes.

States are ``idle`` and ``dragging`` (a DragSession is present). handle_event is
pure: it returns a new MapState and leaves the one passed in untouched. Inputs
are clamped, never rejected; an event that cannot change anything returns the
same state object.
"""
from __future__ import annotations

import logging
from dataclasses import replace

from halalmap.geo.projection import GeoPoint, WorldPixel, geo_to_world, world_to_geo
from halalmap.interaction import events as ev
from halalmap.interaction.selection import clear_focus, focus_entity, set_hover
from halalmap.interaction.state import DragSession, MapState
from halalmap.map_settings import DEFAULT_CENTER, DEFAULT_ZOOM

log = logging.getLogger(__name__)


def _start_drag(state: MapState, x: float, y: float) -> DragSession:
    c = state.viewport.center_world()
    return DragSession(x, y, c.x, c.y)


def _drag_to(state: MapState, x: float, y: float) -> MapState:
    d = state.drag
    dx = x - d.start_pointer_x
    dy = y - d.start_pointer_y
    target = WorldPixel(d.start_center_world_x - dx, d.start_center_world_y - dy)
    zoom = state.viewport.zoom
    new = state.with_viewport(lambda vp: vp.set_center(world_to_geo(target, zoom, vp.tile_size)))
    return replace(new, pointer=(x, y))


def _rebase_drag(state: MapState) -> MapState:
    """Re-anchor an active drag after the zoom changed under it."""
    if state.drag is None:
        return state
    px, py = state.pointer if state.pointer is not None else (
        state.drag.start_pointer_x, state.drag.start_pointer_y)
    return replace(state, drag=_start_drag(state, px, py))


def zoom_at(state: MapState, x: float, y: float, new_zoom: int) -> MapState:
    """Change zoom keeping the geographic point under (x, y) fixed on screen."""
    vp = state.viewport
    target_zoom = vp.clamp_zoom(new_zoom)
    if target_zoom == vp.zoom:
        return state
    under_cursor = vp.screen_to_geo(x, y)
    cursor_world = geo_to_world(under_cursor, target_zoom, vp.tile_size)
    cx, cy = vp.screen_center
    new_center_world = WorldPixel(cursor_world.x - (x - cx), cursor_world.y - (y - cy))
    new_center = world_to_geo(new_center_world, target_zoom, vp.tile_size)

    def mutate(v):
        v.set_zoom(target_zoom)
        v.set_center(new_center)

    return state.with_viewport(mutate)


def zoom_by(state: MapState, step: int) -> MapState:
    """Zoom around the viewport center (explicit +/- controls)."""
    z = state.viewport.zoom + step
    if state.viewport.clamp_zoom(z) == state.viewport.zoom:
        return state
    return state.with_viewport(lambda vp: vp.set_zoom(z))


def reset_view(state: MapState) -> MapState:
    def mutate(vp):
        vp.set_center(GeoPoint(*DEFAULT_CENTER))
        vp.set_zoom(DEFAULT_ZOOM)

    return clear_focus(replace(state.with_viewport(mutate), drag=None))


def handle_event(state: MapState, event) -> MapState:
    """Apply one input event and return the resulting state."""
    if isinstance(event, ev.PointerDown):
        if event.on_control:
            return state
        new = replace(state, pointer=(event.x, event.y))
        return replace(new, drag=_start_drag(new, event.x, event.y))

    if isinstance(event, ev.PointerMove):
        if state.drag is None:
            return replace(state, pointer=(event.x, event.y))
        return _drag_to(state, event.x, event.y)

    if isinstance(event, (ev.PointerUp, ev.PointerLeave)):
        if state.drag is None:
            return state
        return replace(state, drag=None)

    if isinstance(event, ev.Wheel):
        step = -1 if event.delta_y > 0 else 1
        new = zoom_at(replace(state, pointer=(event.x, event.y)), event.x, event.y,
                      state.viewport.zoom + step)
        if new.viewport is state.viewport:
            return state
        return _rebase_drag(new)

    if isinstance(event, ev.ZoomIn):
        return _rebase_drag(zoom_by(state, 1))

    if isinstance(event, ev.ZoomOut):
        return _rebase_drag(zoom_by(state, -1))

    if isinstance(event, ev.ResetView):
        return reset_view(state)

    if isinstance(event, ev.Resize):
        return state.with_viewport(lambda vp: vp.resize(event.width, event.height))

    if isinstance(event, ev.MarkerClick):
        return replace(focus_entity(state, event.entity), drag=None)

    if isinstance(event, ev.Hover):
        return set_hover(state, event.entity_id)

    if isinstance(event, ev.ClearFocus):
        return clear_focus(state)

    log.debug("Ignoring unknown event %r", event)
    return state
