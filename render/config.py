# render/config.py
"""
Configuration constants for the rendering domain.
Includes cell size, panel dimensions, colors and font sizes.
"""
from __future__ import annotations

from typing import Tuple

# =============================================================================
# UI LAYOUT & DIMENSIONS
# =============================================================================
CELL_SIZE = 5                  # Pixels per grid cell
PANEL_HEIGHT = 64              # Status panel under the grid
LINE_HEIGHT = 18
FONT_SIZE = 18
PANEL_MARGIN = 8
FPS_LIMIT = 60

# =============================================================================
# COLORS
# =============================================================================
RGBA = Tuple[int, int, int, int]

# UI Colors
COLOR_BG_DARK = (20, 20, 25)
COLOR_BG_PANEL = (25, 25, 30)
COLOR_BORDER_LIGHT = (80, 80, 85)
COLOR_TEXT_WHITE = (230, 230, 230)
COLOR_TEXT_GRAY = (160, 160, 160)
COLOR_TEXT_HIGHLIGHT = (220, 200, 120)

# Cells
COLOR_EMPTY = (235, 235, 235)
COLOR_SOLID = (0, 0, 0)

# Liquid (gold by default; thin films fade toward white, deep cells darken)
COLOR_LIQUID: RGBA = (255, 215, 0, 255)
COLOR_LIQUID_DARK: RGBA = (184, 134, 11, 255)
COLOR_LIQUID_THIN: RGBA = (255, 255, 255, 255)
LIQUID_BASE_ALPHA = 0.7

# Amount thresholds that change how a cell is drawn
OPAQUE_THRESHOLD = 0.4         # Above this, alpha follows the amount
FULL_BELOW_THRESHOLD = 0.99    # Cell below counts as full from here
SURFACE_THRESHOLD = 0.05       # Liquid above this makes a cell draw full height
DARKEN_SCALE = 4.0             # Amount at which the dark color is reached
LERP_MAX = 1.5                 # Color lerp may overshoot up to this factor
