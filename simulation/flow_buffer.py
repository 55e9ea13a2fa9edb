# simulation/flow_buffer.py
"""Pending liquid deltas for one tick.

The buffer carries a one-cell halo around the grid so that a transfer toward
a neighbour is a shifted slice rather than per-cell index arithmetic. The
halo never receives liquid because the grid's outer ring is Solid.
"""
from __future__ import annotations

from typing import Tuple

import numpy as np

from simulation.cell import DIRECTION_OFFSETS, Direction


def shifted_slice(direction: Direction) -> Tuple[slice, slice]:
    """Slice of a halo-padded array aligned with each cell's neighbour.

    For direction DOWN (dx=0, dy=1) this is padded[1:-1, 2:], so element
    [x, y] of the slice is the padded cell at grid (x, y + 1).
    """
    dx, dy = DIRECTION_OFFSETS[direction]
    return (slice(1 + dx, -1 + dx if -1 + dx != 0 else None),
            slice(1 + dy, -1 + dy if -1 + dy != 0 else None))


CENTER: Tuple[slice, slice] = (slice(1, -1), slice(1, -1))


def padded(array: np.ndarray, fill) -> np.ndarray:
    """Copy of `array` with a one-cell halo of `fill` for neighbour slicing."""
    return np.pad(array, 1, mode='constant', constant_values=fill)


class FlowChangeBuffer:
    """Scatter target for a tick; drained into the grid on commit."""

    def __init__(self, width: int, height: int):
        self._padded = np.zeros((width + 2, height + 2), dtype=np.float64)

    @property
    def shape(self) -> Tuple[int, int]:
        w, h = self._padded.shape
        return (w - 2, h - 2)

    @property
    def deltas(self) -> np.ndarray:
        """Writable view of the pending deltas, shaped like the grid."""
        return self._padded[CENTER]

    def reset(self) -> None:
        """Zero every pending delta. Called before each scatter phase."""
        self._padded.fill(0.0)

    def transfer(self, flow: np.ndarray, direction: Direction) -> None:
        """Move `flow[x, y]` from each cell to its neighbour in `direction`."""
        self._padded[CENTER] -= flow
        self._padded[shifted_slice(direction)] += flow

    def discard(self, residue: np.ndarray) -> None:
        """Remove liquid from the source cells without a destination."""
        self._padded[CENTER] -= residue

    def drain_into(self, liquid: np.ndarray) -> None:
        """Apply every pending delta to `liquid` in place and clear the buffer."""
        liquid += self._padded[CENTER]
        self.reset()

    def halo_total(self) -> float:
        """Liquid that leaked into the halo (always 0 while the outer ring is Solid)."""
        return float(self._padded.sum() - self._padded[CENTER].sum())
