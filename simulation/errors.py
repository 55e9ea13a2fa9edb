# simulation/errors.py
"""Exceptions raised at the simulator's mutation and query boundary.

Each error also derives from the matching builtin so callers that only know
about IndexError / ValueError / RuntimeError still catch it.
"""
from __future__ import annotations


class SimulationError(Exception):
    """Base class for all liquid simulation errors."""


class OutOfRange(SimulationError, IndexError):
    """A coordinate lies outside the grid (or on its fixed outer wall)."""


class InvalidArgument(SimulationError, ValueError):
    """A liquid amount, grid size or tuning value is not acceptable."""


class NotInitialized(SimulationError, RuntimeError):
    """An operation was attempted before initialize() was called."""


class TickInProgress(SimulationError, RuntimeError):
    """An edit was attempted while a tick is being resolved."""
