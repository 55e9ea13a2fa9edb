# simulation/simulator.py
"""Public entry point of the liquid simulation.

LiquidSimulator owns the grid, the flow buffer and the solver. The
presentation layer talks only to this class: initialize() once, tick() per
fixed time step, the three editing calls between ticks, and the read
accessors for drawing.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from simulation.cell import Cell
from simulation.config import DEFAULT_SETTINGS, FlowSettings
from simulation.errors import NotInitialized, TickInProgress
from simulation.flow_buffer import FlowChangeBuffer
from simulation.grid import Grid
from simulation.solver import FlowSolver, TickStats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridSnapshot:
    """Read-only copies of the grid arrays, indexed [x, y]."""
    cell_type: np.ndarray
    liquid: np.ndarray
    settled: np.ndarray
    flow_flags: np.ndarray

    @property
    def size(self) -> int:
        return self.liquid.shape[0]


def _frozen_copy(array: np.ndarray) -> np.ndarray:
    copy = array.copy()
    copy.flags.writeable = False
    return copy


class LiquidSimulator:
    """Cellular-automaton liquid simulation on a square grid."""

    def __init__(self, settings: Optional[FlowSettings] = None):
        self.settings = settings or DEFAULT_SETTINGS
        self.solver = FlowSolver(self.settings)
        self._grid: Optional[Grid] = None
        self._buffer: Optional[FlowChangeBuffer] = None
        self._ticking = False
        self.tick_count = 0
        self.last_stats: Optional[TickStats] = None

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def initialize(self, size: int) -> None:
        """Create a fresh size x size grid walled in by Solid cells.

        Replaces any previous grid; Cell views read before this call are stale.
        """
        self._guard_edit()
        grid = Grid(size)
        self._grid = grid
        self._buffer = FlowChangeBuffer(grid.width, grid.height)
        self.tick_count = 0
        self.last_stats = None
        logger.info("Initialized %dx%d liquid grid", size, size)

    @property
    def is_initialized(self) -> bool:
        return self._grid is not None

    @property
    def grid(self) -> Grid:
        if self._grid is None:
            raise NotInitialized("Call initialize(size) before using the simulator")
        return self._grid

    @property
    def size(self) -> int:
        return self.grid.size

    def tick(self) -> TickStats:
        """Advance the simulation by one discrete step."""
        grid = self.grid
        self._guard_edit()
        self._ticking = True
        try:
            stats = self.solver.step(grid, self._buffer, self.tick_count + 1)
        finally:
            self._ticking = False

        self.tick_count += 1
        self.last_stats = stats
        logger.debug(
            "Tick %d: processed=%d moved=%d settled=%d transferred=%.4f discarded=%.6f",
            stats.tick, stats.processed, stats.moved, stats.newly_settled,
            stats.transferred, stats.discarded,
        )
        return stats

    def run(self, ticks: int) -> TickStats:
        """Run `ticks` steps and return the accumulated stats."""
        total = TickStats(tick=self.tick_count)
        for _ in range(ticks):
            stats = self.tick()
            total.tick = stats.tick
            total.processed += stats.processed
            total.moved += stats.moved
            total.newly_settled += stats.newly_settled
            total.transferred += stats.transferred
            total.discarded += stats.discarded
        return total

    # =========================================================================
    # Reads
    # =========================================================================

    def cell_at(self, x: int, y: int) -> Cell:
        return self.grid.cell_at(x, y)

    def total_liquid(self) -> float:
        return self.grid.total_liquid()

    def snapshot(self) -> GridSnapshot:
        grid = self.grid
        return GridSnapshot(
            cell_type=_frozen_copy(grid.cell_type),
            liquid=_frozen_copy(grid.liquid),
            settled=_frozen_copy(grid.settled),
            flow_flags=_frozen_copy(grid.flow_flags),
        )

    # =========================================================================
    # Edits (between ticks only)
    # =========================================================================

    def _guard_edit(self) -> None:
        if self._ticking:
            raise TickInProgress("The grid cannot be edited while a tick is running")

    def add_liquid(self, x: int, y: int, amount: float) -> bool:
        """Pour liquid into a Fluid cell. Returns False if the cell is Solid."""
        grid = self.grid
        self._guard_edit()
        return grid.add_liquid(x, y, amount)

    def set_solid(self, x: int, y: int) -> None:
        grid = self.grid
        self._guard_edit()
        grid.set_solid(x, y)

    def set_fluid(self, x: int, y: int) -> None:
        grid = self.grid
        self._guard_edit()
        grid.set_fluid(x, y)
