# simulation/solver.py
"""Per-tick liquid flow resolution (vectorized).

A tick has two phases:

1. Scatter: every awake, non-empty Fluid cell works out how much liquid it
   sends Down, Left, Right and Up (in that order), writing only into the
   FlowChangeBuffer and its own settle bookkeeping. All reads come from the
   start-of-tick grid, so the result does not depend on visitation order and
   the whole grid can be evaluated at once with NumPy.
2. Commit: the buffer is added to the grid, cells that received liquid or
   sit next to a changing cell are woken, and amounts that fell below the
   tracking threshold are dropped to exactly zero.

Liquid below MIN_LIQUID_AMOUNT is discarded rather than tracked; every
discarded amount is reported in TickStats so callers can audit mass.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from simulation.cell import FLOW_ORDER, Direction
from simulation.config import DEFAULT_SETTINGS, FlowSettings
from simulation.flow_buffer import CENTER, padded, shifted_slice
from simulation.vertical import vertical_flow

if TYPE_CHECKING:
    from simulation.flow_buffer import FlowChangeBuffer
    from simulation.grid import Grid

logger = logging.getLogger(__name__)

# Share of the remaining liquid offered to each lateral neighbour. Right is
# evaluated after Left has taken its share, hence the smaller divisor.
LATERAL_DIVISORS = {
    Direction.LEFT: 4.0,
    Direction.RIGHT: 3.0,
}


@dataclass
class TickStats:
    """Summary of one tick, returned by FlowSolver.step()."""
    tick: int = 0
    processed: int = 0          # Cells evaluated in the scatter phase
    moved: int = 0              # Cells whose amount changed by more than the settle epsilon
    newly_settled: int = 0      # Cells that went dormant this tick
    transferred: float = 0.0    # Liquid moved between cells
    discarded: float = 0.0      # Liquid dropped below the tracking threshold


class FlowSolver:
    """Stateless driver: all state lives in the Grid and the buffer."""

    def __init__(self, settings: FlowSettings = DEFAULT_SETTINGS):
        self.settings = settings

    def _vertical(self, source: np.ndarray, dest: np.ndarray) -> np.ndarray:
        s = self.settings
        return vertical_flow(source, dest, s.max_liquid_amount, s.max_compression)

    def _desired_flow(
        self,
        direction: Direction,
        amount: np.ndarray,
        remaining: np.ndarray,
        neighbor: np.ndarray,
    ) -> np.ndarray:
        """Ideal transfer toward `direction` before damping and clamping."""
        s = self.settings

        if direction == Direction.DOWN:
            flow = self._vertical(amount, neighbor) - neighbor
            # Falling into an empty cell is not damped
            damp = (neighbor > 0) & (flow > s.min_flow)
        elif direction == Direction.UP:
            flow = remaining - self._vertical(remaining, neighbor)
            damp = flow > s.min_flow
        else:
            flow = (remaining - neighbor) / LATERAL_DIVISORS[direction]
            damp = flow > s.min_flow

        return np.where(damp, flow * s.flow_speed, flow)

    def step(self, grid: "Grid", buffer: "FlowChangeBuffer", tick: int = 0) -> TickStats:
        """Advance `grid` by one tick using `buffer` as scratch space."""
        s = self.settings
        stats = TickStats(tick=tick)

        buffer.reset()

        # Solid cells and untracked trickles hold exactly zero
        fluid = grid.fluid_mask()
        empty = ~fluid | (grid.liquid <= 0) | (grid.liquid < s.min_liquid_amount)
        stats.discarded += float(grid.liquid[empty].sum())
        grid.liquid[empty] = 0.0

        active = ~empty & ~grid.settled
        amount = np.where(active, grid.liquid, 0.0)
        remaining = amount.copy()
        alive = active.copy()

        liquid_padded = padded(grid.liquid, 0.0)
        open_padded = padded(fluid, False)
        received_padded = np.zeros_like(open_padded)
        flags = np.zeros(grid.shape, dtype=np.uint8)

        # Scatter
        for direction in FLOW_ORDER:
            neighbor_slice = shifted_slice(direction)
            neighbor = liquid_padded[neighbor_slice]
            can_flow = alive & open_padded[neighbor_slice]
            if not can_flow.any():
                continue

            flow = self._desired_flow(direction, amount, remaining, neighbor)

            # Never pull from a neighbour, never exceed MAX_FLOW or what is left
            source_limit = amount if direction == Direction.DOWN else remaining
            flow = np.clip(np.maximum(flow, 0.0), 0.0, np.minimum(s.max_flow, source_limit))
            flow = np.where(can_flow, flow, 0.0)

            moving = flow > 0
            remaining -= flow
            buffer.transfer(flow, direction)
            flags[moving] |= np.uint8(direction)
            received_padded[neighbor_slice] |= moving
            stats.transferred += float(flow.sum())

            # Too little left to track: drop it and stop for this cell
            exhausted = alive & (remaining < s.min_liquid_amount)
            if exhausted.any():
                residue = np.where(exhausted, remaining, 0.0)
                buffer.discard(residue)
                stats.discarded += float(residue.sum())
                remaining[exhausted] = 0.0
                alive &= ~exhausted

        # Settle bookkeeping
        quiet = active & (np.abs(amount - remaining) < s.settle_epsilon)
        moved = active & ~quiet

        grid.settle_count[quiet] += 1
        newly_settled = quiet & (grid.settle_count >= s.settle_threshold)
        grid.settled[newly_settled] = True
        flags[newly_settled] = 0
        grid.flow_flags[...] = flags

        # Commit
        buffer.drain_into(grid.liquid)
        grid.settled[received_padded[CENTER]] = False
        grid.wake(moved)

        below = grid.liquid < s.min_liquid_amount
        stats.discarded += float(grid.liquid[below].sum())
        grid.liquid[below] = 0.0
        grid.settled[below] = False

        # Cells woken by the commit did not stay settled
        newly_settled &= grid.settled

        stats.processed = int(active.sum())
        stats.moved = int(moved.sum())
        stats.newly_settled = int(newly_settled.sum())
        return stats
