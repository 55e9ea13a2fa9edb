"""
utils.py - Common utility functions for Seep

Provides shared, stateless helper functions used across different modules.
"""
from __future__ import annotations

from typing import List, Tuple

Point = Tuple[int, int]


def clamp(val: float, low: float, high: float) -> float:
    """Clamp a value between low and high bounds."""
    return max(low, min(high, val))


def cells_on_line(p1: Point, p2: Point) -> List[Point]:
    """Grid cells crossed by a straight stroke from p1 to p2 (inclusive).

    Bresenham's line, so a fast mouse drag paints a continuous stroke
    instead of isolated dots.

    Example: (0,0) to (3,1) -> [(0,0), (1,0), (2,1), (3,1)]
    """
    x0, y0 = p1
    x1, y1 = p2
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    points = []
    while True:
        points.append((x0, y0))
        if x0 == x1 and y0 == y1:
            return points
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
