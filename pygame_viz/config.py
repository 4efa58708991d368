"""
Viewer colours and marker styles (verified / pending pins, selected / hovered states).
"""
from dataclasses import dataclass
from typing import Tuple

Color = Tuple[int, int, int]

BACKGROUND: Color = (30, 30, 30)
PANEL_BG: Color = (40, 42, 46)
TILE_PLACEHOLDER: Color = (60, 60, 60)
TILE_FAILED: Color = (48, 44, 44)
TEXT: Color = (230, 230, 230)
TEXT_DIM: Color = (160, 160, 160)
ERROR_TEXT: Color = (230, 110, 100)
BUTTON: Color = (70, 90, 110)
BUTTON_ACTIVE: Color = (0, 120, 80)


@dataclass
class MarkerStyle:
    fill: Color
    outline: Color
    radius: int = 8

    def scaled(self, factor: float) -> "MarkerStyle":
        """Enlarged pin for selected/hovered markers."""
        return MarkerStyle(self.fill, self.outline, max(1, int(round(self.radius * factor))))


VERIFIED = MarkerStyle((74, 222, 128), (34, 197, 94))
VERIFIED_SELECTED = MarkerStyle((34, 197, 94), (22, 163, 74))
PENDING = MarkerStyle((251, 146, 60), (249, 115, 22))
PENDING_SELECTED = MarkerStyle((249, 115, 22), (234, 88, 12))
HALO: Color = (34, 120, 60)


def marker_style(verified: bool, selected: bool, hovered: bool) -> MarkerStyle:
    """Green pins for verified restaurants, orange for pending; larger when selected or hovered."""
    if verified:
        style = VERIFIED_SELECTED if selected else VERIFIED
    else:
        style = PENDING_SELECTED if selected else PENDING
    if selected or hovered:
        return style.scaled(1.25)
    return style
