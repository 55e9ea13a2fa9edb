# render/grid.py
"""Grid rendering: walls, empty cavities and liquid bars.

Liquid is drawn as a bar rising from the bottom of its cell, as tall as the
amount it holds. Liquid still falling into an open cell below is not drawn,
and cells with liquid resting on top of them are drawn full height so a
pool reads as one continuous body.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Tuple

import numpy as np
import pygame

from render.colors import liquid_color
from render.config import (
    COLOR_EMPTY,
    COLOR_SOLID,
    FULL_BELOW_THRESHOLD,
    SURFACE_THRESHOLD,
)
from simulation.cell import CellType

if TYPE_CHECKING:
    from simulation.simulator import GridSnapshot

Rect = Tuple[int, int, int, int]


def liquid_rect(
    x: int,
    y: int,
    cell_size: int,
    amount: float,
    below_open: bool,
    below_amount: float,
    above_amount: float,
) -> Optional[Rect]:
    """Screen rectangle of the liquid bar in cell (x, y), or None if hidden.

    Args:
        x, y: Grid coordinates
        cell_size: Pixels per cell
        amount: Liquid in the cell
        below_open: Cell below exists and is not Solid
        below_amount: Liquid in the cell below
        above_amount: Liquid in the cell above
    """
    if amount <= 0:
        return None

    if above_amount > SURFACE_THRESHOLD:
        height = cell_size
    elif below_open and below_amount <= FULL_BELOW_THRESHOLD:
        # Still falling; drawing it would show a floating sliver
        return None
    else:
        height = max(1, int(min(cell_size, amount * cell_size)))

    top = (y + 1) * cell_size - height
    return (x * cell_size, top, cell_size, height)


def render_cells(surface: pygame.Surface, snapshot: "GridSnapshot", cell_size: int) -> None:
    """Draw every cell of `snapshot` onto `surface` (origin at the grid's top-left)."""
    size = snapshot.size
    cell_type = snapshot.cell_type
    liquid = snapshot.liquid

    surface.fill(COLOR_EMPTY)

    for x, y in zip(*np.nonzero(cell_type == CellType.SOLID)):
        pygame.draw.rect(surface, COLOR_SOLID, (x * cell_size, y * cell_size, cell_size, cell_size))

    # Per-pixel alpha layer for the liquid
    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    for x, y in zip(*np.nonzero((cell_type == CellType.FLUID) & (liquid > 0))):
        x, y = int(x), int(y)
        amount = float(liquid[x, y])
        has_below = y + 1 < size
        below_amount = float(liquid[x, y + 1]) if has_below else 0.0
        below_open = has_below and cell_type[x, y + 1] != CellType.SOLID
        above_amount = float(liquid[x, y - 1]) if y > 0 else 0.0

        rect = liquid_rect(x, y, cell_size, amount, below_open, below_amount, above_amount)
        if rect is None:
            continue
        overlay.fill(liquid_color(amount, below_amount, above_amount), rect)

    surface.blit(overlay, (0, 0))


def screen_to_cell(pos: Tuple[int, int], cell_size: int, size: int) -> Optional[Tuple[int, int]]:
    """Grid cell under a pixel position, or None if it falls outside the grid."""
    x, y = pos[0] // cell_size, pos[1] // cell_size
    if 0 <= x < size and 0 <= y < size:
        return (x, y)
    return None
