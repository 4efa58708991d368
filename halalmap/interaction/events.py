"""
Input events delivered by the host (pygame window, web client). Positions are
map-area screen pixels; the engine never reads raw device state.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from halalmap.geo.markers import Entity


@dataclass(frozen=True)
class PointerDown:
    x: float
    y: float
    on_control: bool = False  # pressed on a button/link drawn over the map


@dataclass(frozen=True)
class PointerMove:
    x: float
    y: float


@dataclass(frozen=True)
class PointerUp:
    pass


@dataclass(frozen=True)
class PointerLeave:
    pass


@dataclass(frozen=True)
class Wheel:
    x: float
    y: float
    delta_y: float  # > 0 scrolls down (zoom out)


@dataclass(frozen=True)
class ZoomIn:
    pass


@dataclass(frozen=True)
class ZoomOut:
    pass


@dataclass(frozen=True)
class ResetView:
    pass


@dataclass(frozen=True)
class Resize:
    width: float
    height: float


@dataclass(frozen=True)
class MarkerClick:
    entity: Entity


@dataclass(frozen=True)
class Hover:
    entity_id: Optional[str]


@dataclass(frozen=True)
class ClearFocus:
    pass
