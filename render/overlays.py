# render/overlays.py
"""Overlay rendering: status panel and help screen."""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Tuple

import pygame

from render.primitives import draw_text
from render.config import (
    LINE_HEIGHT,
    PANEL_MARGIN,
    COLOR_BG_PANEL,
    COLOR_BORDER_LIGHT,
    COLOR_TEXT_HIGHLIGHT,
    COLOR_TEXT_GRAY,
)

if TYPE_CHECKING:
    from simulation.solver import TickStats


def status_lines(
    placing_liquid: bool,
    pour_amount: float,
    total_liquid: float,
    stats: Optional["TickStats"] = None,
    paused: bool = False,
) -> List[str]:
    """Text shown in the status panel."""
    mode = "Liquid" if placing_liquid else "Solid"
    lines = [
        f"(Space) Draw mode: {mode}    (Up/Down) Pour amount: {pour_amount:.1f}",
        f"Liquid total: {total_liquid:.2f}",
    ]
    if stats is not None:
        lines[1] += f"    tick {stats.tick}  active {stats.processed}  moving {stats.moved}"
    if paused:
        lines[1] += "    [PAUSED]"
    return lines


def render_status_panel(surface, font, rect: pygame.Rect, lines: List[str]) -> None:
    """Render the status panel below the grid."""
    pygame.draw.rect(surface, COLOR_BG_PANEL, rect, 0)
    pygame.draw.line(surface, COLOR_BORDER_LIGHT, rect.topleft, rect.topright, 2)

    x, y = rect.x + PANEL_MARGIN, rect.y + PANEL_MARGIN
    for i, line in enumerate(lines):
        color = COLOR_TEXT_HIGHLIGHT if i == 0 else COLOR_TEXT_GRAY
        draw_text(surface, font, line, (x, y), color=color)
        y += LINE_HEIGHT


def render_help_overlay(
    surface,
    font,
    controls: List[str],
    pos: Tuple[int, int],
    available_width: int,
    available_height: int,
) -> None:
    """Render the help overlay with control descriptions.

    Args:
        surface: The pygame surface to draw on.
        font: The pygame font to use for rendering text.
        controls: A list of strings, each describing a control.
        pos: The (x, y) coordinates for the top-left corner of the overlay.
        available_width: The maximum width for the overlay.
        available_height: The maximum height for the overlay.
    """
    x, y = pos
    col_width, row_height = 150, LINE_HEIGHT
    cols = max(1, available_width // col_width)

    pygame.draw.rect(surface, COLOR_BG_PANEL, (x - 4, y - 4, available_width, available_height), 0)
    draw_text(surface, font, "CONTROLS", (x, y), color=COLOR_TEXT_HIGHLIGHT)
    y += row_height + 4

    for i, control in enumerate(controls):
        cx = x + (i % cols * col_width)
        cy = y + (i // cols * row_height)
        if cy + row_height < pos[1] + available_height:
            draw_text(surface, font, control, (cx, cy), color=COLOR_TEXT_GRAY)
