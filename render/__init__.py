"""
Rendering module for the Seep pygame frontend.

Provides rendering functions for the cell grid, status panel and overlays.
"""
from render.colors import lerp_color, liquid_color, with_alpha
from render.primitives import draw_text
from render.grid import liquid_rect, render_cells, screen_to_cell
from render.overlays import render_help_overlay, render_status_panel, status_lines

__all__ = [
    # Colors
    "lerp_color",
    "liquid_color",
    "with_alpha",
    # Primitives
    "draw_text",
    # Grid
    "liquid_rect",
    "render_cells",
    "screen_to_cell",
    # Overlays
    "render_help_overlay",
    "render_status_panel",
    "status_lines",
]
