"""
Explicit map UI state: viewport, drag session and selection.

Transitions take a MapState and return a new one; the viewport is copied
before it is mutated so callers never observe changes to the state they passed in.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from halalmap.geo.viewport import Viewport

IDLE = "idle"
DRAGGING = "dragging"


@dataclass(frozen=True)
class DragSession:
    """Anchor captured on pointer-down; every move is computed from it."""
    start_pointer_x: float
    start_pointer_y: float
    start_center_world_x: float
    start_center_world_y: float


@dataclass(frozen=True)
class Selection:
    focused_id: Optional[str] = None
    hovered_id: Optional[str] = None


@dataclass(frozen=True)
class MapState:
    viewport: Viewport = field(default_factory=Viewport)
    drag: Optional[DragSession] = None
    selection: Selection = field(default_factory=Selection)
    # Last pointer position seen, used to rebase a drag across zoom changes
    pointer: Optional[Tuple[float, float]] = None

    @property
    def mode(self) -> str:
        return DRAGGING if self.drag is not None else IDLE

    def with_viewport(self, mutate) -> "MapState":
        """Copy the viewport, apply ``mutate(viewport)`` and return the new state."""
        vp = self.viewport.copy()
        mutate(vp)
        return replace(self, viewport=vp)
