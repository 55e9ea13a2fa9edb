import os

import numpy as np
import pytest

# pygame must not try to open a real display or audio device during tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from simulation import CellType, LiquidSimulator


def open_only(simulator, cells):
    """Wall off every interior cell except `cells`."""
    keep = set(cells)
    size = simulator.size
    for x in range(1, size - 1):
        for y in range(1, size - 1):
            if (x, y) not in keep:
                simulator.set_solid(x, y)


def random_grid(simulator, seed, wall_fraction=0.2, fill_fraction=0.5, max_amount=3.0):
    """Scatter walls and liquid over the interior with a fixed seed."""
    rng = np.random.default_rng(seed)
    size = simulator.size
    for x in range(1, size - 1):
        for y in range(1, size - 1):
            roll = rng.random()
            if roll < wall_fraction:
                simulator.set_solid(x, y)
            elif roll < wall_fraction + fill_fraction:
                simulator.add_liquid(x, y, float(rng.uniform(0.0, max_amount)))


@pytest.fixture
def simulator():
    sim = LiquidSimulator()
    sim.initialize(8)
    return sim


@pytest.fixture
def column():
    """5x5 grid with a single open column of two cells: (2, 1) above (2, 2)."""
    sim = LiquidSimulator()
    sim.initialize(5)
    open_only(sim, [(2, 1), (2, 2)])
    return sim


@pytest.fixture
def basin():
    """5x5 grid: the whole 3x3 interior is open, row y=3 sits on the wall."""
    sim = LiquidSimulator()
    sim.initialize(5)
    return sim


def solid_mask(simulator):
    return simulator.snapshot().cell_type == CellType.SOLID
