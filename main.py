"""
Seep - Cellular-automaton liquid sandbox
Headless entry point: build a grid, pour liquid, run ticks, print the result.

Usage:
    python main.py                                  # Interactive sandbox (pygame)
    python main.py --headless --size 16 --pour 8 2 3 --ticks 50 --dump
    python main.py --headless --wall 5 10 --wall 6 10 --pour 5 2 1.5
"""
from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence

from config import GRID_SIZE, LOG_FILE, LOG_LEVEL
from logging_config import setup_logging
from simulation import CellType, LiquidSimulator, SimulationError
from simulation.simulator import GridSnapshot

logger = logging.getLogger(__name__)

# ASCII map symbols
SYMBOL_SOLID = "X"
SYMBOL_LIQUID = "L"
SYMBOL_EMPTY = "#"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def format_cells(snapshot: GridSnapshot) -> str:
    """Render the grid as text, one line per row (y), cells separated by spaces."""
    rows = []
    for y in range(snapshot.size):
        symbols = []
        for x in range(snapshot.size):
            if snapshot.cell_type[x, y] == CellType.SOLID:
                symbols.append(SYMBOL_SOLID)
            elif snapshot.liquid[x, y] > 0:
                symbols.append(SYMBOL_LIQUID)
            else:
                symbols.append(SYMBOL_EMPTY)
        rows.append(" ".join(symbols))
    return "\n".join(rows)


def format_amounts(snapshot: GridSnapshot, precision: int = 2) -> str:
    """Liquid amounts of every Fluid cell, walls shown as blanks."""
    width = precision + 3
    rows = []
    for y in range(snapshot.size):
        cells = []
        for x in range(snapshot.size):
            if snapshot.cell_type[x, y] == CellType.SOLID:
                cells.append(" " * width)
            else:
                cells.append(f"{snapshot.liquid[x, y]:{width}.{precision}f}")
        rows.append(" ".join(cells))
    return "\n".join(rows)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cellular-automaton liquid sandbox")
    parser.add_argument("--size", type=int, default=GRID_SIZE, help="Grid side length in cells")
    parser.add_argument("--headless", action="store_true", help="Run without a window")
    parser.add_argument("--ticks", type=int, default=100, help="Ticks to run in headless mode")
    parser.add_argument("--pour", nargs=3, action="append", default=[], metavar=("X", "Y", "AMOUNT"),
                        help="Add liquid to a cell before running (repeatable)")
    parser.add_argument("--wall", nargs=2, action="append", default=[], type=int, metavar=("X", "Y"),
                        help="Make a cell solid before running (repeatable)")
    parser.add_argument("--dump", choices=("map", "amounts"), nargs="?", const="map",
                        help="Print the final grid")
    parser.add_argument("--log-level", default=LOG_LEVEL, type=str.upper, choices=LOG_LEVELS,
                        help="Logging verbosity")
    parser.add_argument("--log-file", default=LOG_FILE, help="Also write the log to this file")
    return parser


def build_simulator(size: int, walls: Sequence[Sequence[int]], pours: Sequence[Sequence[str]]) -> LiquidSimulator:
    """Create and edit a simulator from command line style arguments."""
    simulator = LiquidSimulator()
    simulator.initialize(size)
    for x, y in walls:
        simulator.set_solid(int(x), int(y))
    for x, y, amount in pours:
        if not simulator.add_liquid(int(x), int(y), float(amount)):
            logger.warning("Cell (%s, %s) is solid; %s liquid not added", x, y, amount)
    return simulator


def run_headless(simulator: LiquidSimulator, ticks: int) -> None:
    start_total = simulator.total_liquid()
    stats = simulator.run(ticks)
    logger.info(
        "Ran %d ticks: liquid %.4f -> %.4f (discarded %.6f), %d cell-moves",
        ticks, start_total, simulator.total_liquid(), stats.discarded, stats.moved,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        simulator = build_simulator(args.size, args.wall, args.pour)
    except (SimulationError, ValueError) as exc:
        logger.error("Invalid setup: %s", exc)
        return 2

    if not args.headless:
        from pygame_runner import run
        run(simulator=simulator)
        return 0

    run_headless(simulator, args.ticks)

    if args.dump == "map":
        print(format_cells(simulator.snapshot()))
    elif args.dump == "amounts":
        print(format_amounts(simulator.snapshot()))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
