# pygame_runner.py
"""
Pygame-CE frontend for the Seep liquid sandbox.

The window shows the grid at CELL_SIZE pixels per cell with a status panel
underneath. The simulation advances on a fixed TICK_INTERVAL independent of
the frame rate; edits are applied between ticks.

Controls:
- Left mouse: pour liquid (liquid mode) or draw walls (solid mode)
- Right mouse: carve an empty cavity
- Space: toggle draw mode
- Up/Down, mouse wheel: change pour amount
- P: pause, N: single step while paused, C: clear
- H: show help
- ESC: quit
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Optional, Tuple

try:
    import pygame
except ImportError as exc:
    raise SystemExit("pygame-ce is required. Install with: pip install pygame-ce") from exc

from config import (
    GRID_SIZE,
    TICK_INTERVAL,
    MAX_TICKS_PER_FRAME,
    DEFAULT_POUR_AMOUNT,
    POUR_STEP,
    MIN_POUR_AMOUNT,
    MAX_POUR_AMOUNT,
)
from keybindings import (
    CONTROL_DESCRIPTIONS,
    TOGGLE_MODE_KEY,
    POUR_MORE_KEY,
    POUR_LESS_KEY,
    PAUSE_KEY,
    STEP_KEY,
    RESET_KEY,
    QUIT_KEY,
    HELP_KEY,
)
from render import (
    render_cells,
    render_help_overlay,
    render_status_panel,
    screen_to_cell,
    status_lines,
)
from render.config import (
    CELL_SIZE,
    PANEL_HEIGHT,
    FONT_SIZE,
    FPS_LIMIT,
    COLOR_BG_DARK,
)
from simulation import LiquidSimulator, SimulationError
from utils import cells_on_line, clamp

logger = logging.getLogger(__name__)

Point = Tuple[int, int]


@dataclass
class EditorState:
    """Editing mode and input tracking for the sandbox."""
    placing_liquid: bool = True
    pour_amount: float = DEFAULT_POUR_AMOUNT
    paused: bool = False
    show_help: bool = False
    last_cell: Optional[Point] = None   # Previous cell of the current drag stroke
    tick_timer: float = 0.0

    def adjust_pour(self, steps: int) -> None:
        self.pour_amount = round(clamp(self.pour_amount + steps * POUR_STEP, MIN_POUR_AMOUNT, MAX_POUR_AMOUNT), 2)


def paint(simulator: LiquidSimulator, editor: EditorState, cell: Point, carve: bool) -> None:
    """Apply the current tool along the stroke from the last painted cell to `cell`."""
    start = editor.last_cell if editor.last_cell is not None else cell
    for x, y in cells_on_line(start, cell):
        if simulator.grid.is_boundary(x, y):
            continue
        try:
            if carve:
                simulator.set_fluid(x, y)
            elif editor.placing_liquid:
                simulator.add_liquid(x, y, editor.pour_amount)
            else:
                simulator.set_solid(x, y)
        except SimulationError as exc:
            logger.warning("Edit at (%d, %d) rejected: %s", x, y, exc)
    editor.last_cell = cell


def handle_mouse(simulator: LiquidSimulator, editor: EditorState) -> None:
    """Paint with whichever mouse button is held down."""
    left, _, right = pygame.mouse.get_pressed()[:3]
    if not (left or right):
        editor.last_cell = None
        return

    cell = screen_to_cell(pygame.mouse.get_pos(), CELL_SIZE, simulator.size)
    if cell is None:
        editor.last_cell = None
        return

    paint(simulator, editor, cell, carve=bool(right) and not left)


def handle_key(simulator: LiquidSimulator, editor: EditorState, key: int) -> bool:
    """Process a key press. Returns False when the sandbox should quit."""
    if key == QUIT_KEY:
        return False
    if key == HELP_KEY:
        editor.show_help = not editor.show_help
    elif key == TOGGLE_MODE_KEY:
        editor.placing_liquid = not editor.placing_liquid
    elif key == PAUSE_KEY:
        editor.paused = not editor.paused
    elif key == STEP_KEY and editor.paused:
        simulator.tick()
    elif key == RESET_KEY:
        simulator.initialize(simulator.size)
    return True


def advance(simulator: LiquidSimulator, editor: EditorState, dt: float) -> int:
    """Run as many fixed-interval ticks as `dt` allows. Returns ticks run."""
    if editor.paused:
        editor.tick_timer = 0.0
        return 0

    editor.tick_timer += dt
    ticks = 0
    while editor.tick_timer >= TICK_INTERVAL and ticks < MAX_TICKS_PER_FRAME:
        simulator.tick()
        editor.tick_timer -= TICK_INTERVAL
        ticks += 1

    # Drop the backlog after a stall instead of spiralling
    if ticks == MAX_TICKS_PER_FRAME:
        editor.tick_timer = 0.0
    return ticks


def run(size: int = GRID_SIZE, simulator: Optional[LiquidSimulator] = None) -> None:
    """Main sandbox loop."""
    if simulator is None:
        simulator = LiquidSimulator()
        simulator.initialize(size)
    size = simulator.size

    pygame.init()
    grid_px = size * CELL_SIZE
    screen = pygame.display.set_mode((grid_px, grid_px + PANEL_HEIGHT))
    pygame.display.set_caption("Seep - Liquid Sandbox")

    font = pygame.font.Font(None, FONT_SIZE)
    clock = pygame.time.Clock()

    grid_surface = pygame.Surface((grid_px, grid_px))
    panel_rect = pygame.Rect(0, grid_px, grid_px, PANEL_HEIGHT)
    editor = EditorState()

    running = True
    while running:
        dt = clock.tick(FPS_LIMIT) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                running = handle_key(simulator, editor, event.key)
            elif event.type == pygame.MOUSEWHEEL:
                editor.adjust_pour(event.y)

        # Continuous pour amount change while arrow keys are held
        keys = pygame.key.get_pressed()
        if keys[POUR_MORE_KEY]:
            editor.adjust_pour(1)
        elif keys[POUR_LESS_KEY]:
            editor.adjust_pour(-1)

        handle_mouse(simulator, editor)
        advance(simulator, editor, dt)

        screen.fill(COLOR_BG_DARK)
        render_cells(grid_surface, simulator.snapshot(), CELL_SIZE)
        screen.blit(grid_surface, (0, 0))

        lines = status_lines(
            editor.placing_liquid,
            editor.pour_amount,
            simulator.total_liquid(),
            simulator.last_stats,
            editor.paused,
        )
        render_status_panel(screen, font, panel_rect, lines)

        if editor.show_help:
            render_help_overlay(screen, font, CONTROL_DESCRIPTIONS,
                                (16, 16), grid_px - 32, grid_px // 3)

        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    try:
        run()
    except KeyboardInterrupt:
        sys.exit(0)
