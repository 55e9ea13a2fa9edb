# render/colors.py
"""Color calculations for liquid rendering.

Pure functions of cell amounts; no pygame calls, so the appearance rules can
be checked without a display.
"""
from __future__ import annotations

from typing import cast

from render.config import (
    RGBA,
    COLOR_LIQUID,
    COLOR_LIQUID_DARK,
    COLOR_LIQUID_THIN,
    LIQUID_BASE_ALPHA,
    OPAQUE_THRESHOLD,
    SURFACE_THRESHOLD,
    DARKEN_SCALE,
    LERP_MAX,
)
from utils import clamp


def lerp_color(color1: RGBA, color2: RGBA, t: float) -> RGBA:
    """Interpolate two RGBA colors. `t` is clamped to [0, LERP_MAX], channels to [0, 255]."""
    t = clamp(t, 0.0, LERP_MAX)
    return cast(RGBA, tuple(
        int(clamp(c1 + (c2 - c1) * t, 0, 255)) for c1, c2 in zip(color1, color2)
    ))


def with_alpha(color: RGBA, alpha: float) -> RGBA:
    """Replace the alpha channel; `alpha` is a 0-1 fraction."""
    r, g, b, _ = color
    return (r, g, b, int(clamp(alpha, 0.0, 1.0) * 255))


def liquid_color(amount: float, below_amount: float = 0.0, above_amount: float = 0.0) -> RGBA:
    """Color of a liquid cell holding `amount` between its vertical neighbours.

    Thin films are pale, deep (compressed) cells darken, and liquid resting on
    a filled cell is drawn more opaque so columns read as one body.
    """
    base = with_alpha(COLOR_LIQUID, LIQUID_BASE_ALPHA)
    if amount < 1:
        base = lerp_color(COLOR_LIQUID_THIN, COLOR_LIQUID, amount)

    color = lerp_color(base, COLOR_LIQUID_DARK, amount / DARKEN_SCALE)
    alpha = color[3] / 255

    if amount > OPAQUE_THRESHOLD:
        alpha = min(1.0, amount / 2)
    if below_amount > OPAQUE_THRESHOLD:
        alpha = min(0.95, alpha + amount / 2)
    if above_amount > SURFACE_THRESHOLD:
        # Submerged: drawn as part of the body above it
        alpha = min(1.0, amount / 2)

    return with_alpha(color, alpha)
