# simulation/grid.py
"""Array-based cell grid for the liquid simulation.

All per-cell state lives in NumPy arrays of shape (size, size) indexed
[x, y], with y growing downward (row y + 1 is "below" row y):

- cell_type:    int8, CellType.SOLID or CellType.FLUID
- liquid:       float64 liquid amount
- settled:      bool, cell is dormant and skipped by the solver
- settle_count: int32 consecutive quiet ticks
- flow_flags:   uint8 Direction bits for transfers made on the last tick

Neighbours are not stored; they are derived from coordinates when needed.
The outer ring of cells is Solid for the lifetime of the grid.
"""
from __future__ import annotations

import logging
import math
from typing import Dict, Tuple

import numpy as np
from scipy.ndimage import binary_dilation, generate_binary_structure

from simulation.cell import DIRECTION_OFFSETS, FLOW_ORDER, Cell, CellType, Direction
from simulation.errors import InvalidArgument, OutOfRange

logger = logging.getLogger(__name__)

Point = Tuple[int, int]

# 4-connected neighbourhood (cross) used when waking cells around a change
NEIGHBOR_STRUCTURE = generate_binary_structure(2, 1)


class Grid:
    """Owner of every cell's state. Shape is fixed at construction."""

    def __init__(self, size: int):
        if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
            raise InvalidArgument(f"Grid size must be an integer, got {size!r}")
        if size < 1:
            raise InvalidArgument(f"Grid size must be positive, got {size}")

        self.size = int(size)
        shape = (self.size, self.size)

        self.cell_type = np.full(shape, CellType.FLUID, dtype=np.int8)
        self.liquid = np.zeros(shape, dtype=np.float64)
        self.settled = np.zeros(shape, dtype=bool)
        self.settle_count = np.zeros(shape, dtype=np.int32)
        self.flow_flags = np.zeros(shape, dtype=np.uint8)

        # Container wall
        self.cell_type[self.boundary_mask()] = CellType.SOLID

    @property
    def width(self) -> int:
        return self.size

    @property
    def height(self) -> int:
        return self.size

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.size, self.size)

    # =========================================================================
    # Coordinates
    # =========================================================================

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def check_bounds(self, x: int, y: int) -> None:
        """Raise OutOfRange unless (x, y) lies on the grid."""
        if not self.in_bounds(x, y):
            raise OutOfRange(f"Cell ({x}, {y}) is outside the {self.size}x{self.size} grid")

    def is_boundary(self, x: int, y: int) -> bool:
        """True for cells on the outer ring (the fixed container wall)."""
        last = self.size - 1
        return x == 0 or y == 0 or x == last or y == last

    def boundary_mask(self) -> np.ndarray:
        mask = np.zeros(self.shape, dtype=bool)
        mask[0, :] = mask[-1, :] = True
        mask[:, 0] = mask[:, -1] = True
        return mask

    def neighbors(self, x: int, y: int) -> Dict[Direction, Point]:
        """Coordinates of the neighbours of (x, y) that exist, keyed by direction."""
        self.check_bounds(x, y)
        result = {}
        for direction in FLOW_ORDER:
            dx, dy = DIRECTION_OFFSETS[direction]
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                result[direction] = (nx, ny)
        return result

    # =========================================================================
    # Reads
    # =========================================================================

    def cell_at(self, x: int, y: int) -> Cell:
        self.check_bounds(x, y)
        return Cell(
            x=x,
            y=y,
            type=CellType(int(self.cell_type[x, y])),
            liquid_amount=float(self.liquid[x, y]),
            is_settled=bool(self.settled[x, y]),
            settle_count=int(self.settle_count[x, y]),
            flow_directions=Direction(int(self.flow_flags[x, y])),
            neighbors=tuple(self.neighbors(x, y)),
        )

    def fluid_mask(self) -> np.ndarray:
        return self.cell_type == CellType.FLUID

    def total_liquid(self) -> float:
        return float(self.liquid.sum())

    # =========================================================================
    # Edits
    # =========================================================================

    def _check_interior(self, x: int, y: int) -> None:
        self.check_bounds(x, y)
        if self.is_boundary(x, y):
            raise OutOfRange(f"Cell ({x}, {y}) is part of the fixed outer wall")

    def set_solid(self, x: int, y: int) -> None:
        """Turn a cell into wall. Any liquid it held is removed."""
        self.check_bounds(x, y)
        if self.is_boundary(x, y):
            # Already Solid and must stay that way
            return
        self.cell_type[x, y] = CellType.SOLID
        self.liquid[x, y] = 0.0
        self.flow_flags[x, y] = 0
        self.wake_around(x, y)
        logger.debug("Cell (%d, %d) set solid", x, y)

    def set_fluid(self, x: int, y: int) -> None:
        """Carve an empty cavity at (x, y)."""
        self._check_interior(x, y)
        self.cell_type[x, y] = CellType.FLUID
        self.liquid[x, y] = 0.0
        self.flow_flags[x, y] = 0
        self.wake_around(x, y)
        logger.debug("Cell (%d, %d) set fluid", x, y)

    def add_liquid(self, x: int, y: int, amount: float) -> bool:
        """Pour `amount` into a Fluid cell.

        Returns False (and changes nothing) when the cell is Solid.
        """
        self._check_interior(x, y)
        try:
            amount = float(amount)
        except (TypeError, ValueError) as exc:
            raise InvalidArgument(f"Liquid amount must be a number, got {amount!r}") from exc
        if not math.isfinite(amount) or amount < 0:
            raise InvalidArgument(f"Liquid amount must be finite and non-negative, got {amount!r}")

        if self.cell_type[x, y] != CellType.FLUID:
            return False

        self.liquid[x, y] += amount
        self.settled[x, y] = False
        self.settle_count[x, y] = 0
        logger.debug("Added %.3f liquid at (%d, %d)", amount, x, y)
        return True

    # =========================================================================
    # Settle state
    # =========================================================================

    def wake(self, mask: np.ndarray) -> None:
        """Wake every masked cell and its four neighbours."""
        if not mask.any():
            return
        region = binary_dilation(mask, structure=NEIGHBOR_STRUCTURE)
        self.settled[region] = False
        self.settle_count[region] = 0

    def wake_around(self, x: int, y: int) -> None:
        mask = np.zeros(self.shape, dtype=bool)
        mask[x, y] = True
        self.wake(mask)
