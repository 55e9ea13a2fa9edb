"""
keybindings.py - Centralized key mappings for Seep (Pygame version)

Single source of truth for all keyboard controls.
"""
from __future__ import annotations

import pygame

# Editing
TOGGLE_MODE_KEY = pygame.K_SPACE     # Switch left-click between pouring liquid and drawing walls
POUR_MORE_KEY = pygame.K_UP          # Increase pour amount
POUR_LESS_KEY = pygame.K_DOWN        # Decrease pour amount

# Simulation
PAUSE_KEY = pygame.K_p
STEP_KEY = pygame.K_n                # Single tick while paused
RESET_KEY = pygame.K_c               # Clear the grid (re-initialize)

# System keys
QUIT_KEY = pygame.K_ESCAPE
HELP_KEY = pygame.K_h

# Control descriptions for help display
CONTROL_DESCRIPTIONS = [
    "LClick: pour / wall",
    "RClick: carve",
    "Space: toggle mode",
    "Up/Down: amount",
    "Wheel: amount",
    "P: pause",
    "N: step",
    "C: clear",
    "H: help",
    "Esc: quit",
]
