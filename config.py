# config.py
"""
Centralized sandbox configuration for Seep.

This file contains high-level, cross-cutting constants.
Domain-specific constants are in:
- simulation/config.py (liquid physics, settling)
- render/config.py (colors, cell size, panel dimensions)
"""
from __future__ import annotations

# =============================================================================
# GRID
# =============================================================================
# Square grid; the outer ring is always wall, so the playable area is
# (GRID_SIZE - 2) x (GRID_SIZE - 2)
GRID_SIZE = 128

# =============================================================================
# TIME & SIMULATION
# =============================================================================
TICK_INTERVAL = 1.0 / 60.0   # Seconds per simulation tick (fixed step)
MAX_TICKS_PER_FRAME = 4      # Catch-up limit after a slow frame

# =============================================================================
# EDITING
# =============================================================================
DEFAULT_POUR_AMOUNT = 2.0    # Liquid added per painted cell per frame
POUR_STEP = 0.1              # Arrow key / mouse wheel increment
MIN_POUR_AMOUNT = 0.1
MAX_POUR_AMOUNT = 10.0

# =============================================================================
# LOGGING
# =============================================================================
LOG_LEVEL = "INFO"
LOG_FILE = None              # Set to a path to also log to a file
