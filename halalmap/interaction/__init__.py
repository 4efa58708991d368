from .state import MapState, DragSession, Selection, IDLE, DRAGGING
from .selection import focus_entity, set_hover, clear_focus
from .controller import handle_event, zoom_at, zoom_by, reset_view

__all__ = [
    "MapState",
    "DragSession",
    "Selection",
    "IDLE",
    "DRAGGING",
    "focus_entity",
    "set_hover",
    "clear_focus",
    "handle_event",
    "zoom_at",
    "zoom_by",
    "reset_view",
]
