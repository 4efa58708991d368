"""Tests for pygame_viz.config."""
import pytest

from pygame_viz.config import (
    PENDING,
    PENDING_SELECTED,
    VERIFIED,
    VERIFIED_SELECTED,
    MarkerStyle,
    marker_style,
)


def test_verified_and_pending_pins_differ():
    assert marker_style(True, False, False) is VERIFIED
    assert marker_style(False, False, False) is PENDING
    assert VERIFIED.fill != PENDING.fill


def test_selected_pin_is_larger():
    style = marker_style(True, True, False)
    assert style.fill == VERIFIED_SELECTED.fill
    assert style.radius > VERIFIED.radius


def test_hovered_pin_keeps_colour_but_grows():
    style = marker_style(False, False, True)
    assert style.fill == PENDING.fill
    assert style.radius > PENDING.radius
    assert marker_style(False, True, True).fill == PENDING_SELECTED.fill


def test_scaled_never_below_one():
    assert MarkerStyle((0, 0, 0), (0, 0, 0), 1).scaled(0.1).radius == 1
