# simulation/cell.py
"""Cell types, flow directions and the read-only cell view.

Cell state itself lives column-wise in the Grid's NumPy arrays; a Cell is
only a snapshot handed to callers of cell_at().
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import Dict, Tuple

Point = Tuple[int, int]


class CellType(IntEnum):
    """Closed set of cell kinds. Stored as int8 in the grid."""
    SOLID = 0
    FLUID = 1


class Direction(IntFlag):
    """Axis-aligned neighbour directions, usable as a bit set.

    Declared in the order the solver attempts transfers.
    """
    NONE = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 4
    UP = 8


# Flow order is part of the algorithm: gravity first, then spreading, then pressure
FLOW_ORDER: Tuple[Direction, ...] = (Direction.DOWN, Direction.LEFT, Direction.RIGHT, Direction.UP)

# Grid is indexed [x, y] with y growing downward
DIRECTION_OFFSETS: Dict[Direction, Point] = {
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.UP: (0, -1),
}


def directions_in(flags: int) -> Tuple[Direction, ...]:
    """Expand a stored flag value into its individual directions (flow order)."""
    return tuple(d for d in FLOW_ORDER if flags & d)


@dataclass(frozen=True)
class Cell:
    """Immutable view of one grid cell at the time it was read."""
    x: int
    y: int
    type: CellType
    liquid_amount: float
    is_settled: bool
    settle_count: int
    flow_directions: Direction = Direction.NONE
    # Directions in which a neighbour exists (absent only at the grid edge)
    neighbors: Tuple[Direction, ...] = field(default_factory=tuple)

    @property
    def is_solid(self) -> bool:
        return self.type == CellType.SOLID

    @property
    def is_empty(self) -> bool:
        return self.liquid_amount <= 0

    def has_neighbor(self, direction: Direction) -> bool:
        return direction in self.neighbors

    def flows(self, direction: Direction) -> bool:
        """True if liquid left this cell toward `direction` on the last tick."""
        return bool(self.flow_directions & direction)
