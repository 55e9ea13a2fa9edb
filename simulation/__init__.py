# simulation/__init__.py
"""Liquid simulation core.

- grid: array-based cell state and editing
- solver: per-tick scatter/commit flow resolution
- simulator: the public facade used by the frontends
"""

from simulation.cell import Cell, CellType, Direction
from simulation.config import FlowSettings
from simulation.errors import (
    InvalidArgument,
    NotInitialized,
    OutOfRange,
    SimulationError,
    TickInProgress,
)
from simulation.simulator import GridSnapshot, LiquidSimulator
from simulation.solver import TickStats
from simulation.vertical import vertical_flow

__all__ = [
    "Cell",
    "CellType",
    "Direction",
    "FlowSettings",
    "GridSnapshot",
    "InvalidArgument",
    "LiquidSimulator",
    "NotInitialized",
    "OutOfRange",
    "SimulationError",
    "TickInProgress",
    "TickStats",
    "vertical_flow",
]
