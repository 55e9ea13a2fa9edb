#!/usr/bin/env python3
"""
Performance benchmarking script for the Seep liquid simulation.

Runs the simulation headless (no rendering) to measure pure simulation performance.
Profiles tick times, memory usage and mass loss, and identifies hot code paths.

Usage:
    python -m performance.benchmarks.simulation            # 1000 ticks, profiled
    python -m performance.benchmarks.simulation compare    # several grid sizes
"""
from __future__ import annotations

import cProfile
import io
import pstats
import sys
import time
import tracemalloc
from statistics import mean, median, stdev
from typing import List, Tuple

from config import GRID_SIZE
from simulation import LiquidSimulator

REPORT_WIDTH = 80


# =============================================================================
# Timing and report helpers
# =============================================================================

class Timer:
    """Wall-clock timer for a `with` block; result in `elapsed` seconds."""

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, *args):
        self.elapsed = time.perf_counter() - self.start


def get_time_stats(times: List[float]) -> Tuple[float, float, float, float, float]:
    """(mean, median, stdev, min, max) of tick durations, all zero when empty."""
    if not times:
        return (0.0, 0.0, 0.0, 0.0, 0.0)
    spread = stdev(times) if len(times) > 1 else 0.0
    return (mean(times), median(times), spread, min(times), max(times))


def format_time_ms(seconds: float) -> str:
    return f"{seconds * 1000:.2f}ms"


def format_memory_mb(bytes_: int) -> str:
    return f"{bytes_ / (1024 * 1024):.1f} MB"


def print_section_header(title: str) -> None:
    rule = "=" * REPORT_WIDTH
    print(f"\n{rule}\n{title}\n{rule}")


def print_metric(label: str, value: str) -> None:
    print(f"  {label:<25} {value}")


class PerformanceMetrics:
    """Tracks performance metrics during a benchmark run."""

    def __init__(self, size: int):
        self.size = size
        self.tick_times: List[float] = []
        self.active_cells: List[int] = []
        self.memory_snapshots: List[int] = []  # Bytes
        self.total_time: float = 0.0
        self.start_liquid: float = 0.0
        self.end_liquid: float = 0.0
        self.discarded: float = 0.0

    def record_memory(self):
        """Record current memory usage."""
        current, _peak = tracemalloc.get_traced_memory()
        self.memory_snapshots.append(current)

    def print_report(self):
        """Print a performance report."""
        print_section_header(f"SEEP PERFORMANCE REPORT - {self.size}x{self.size} cells")

        total_ticks = len(self.tick_times)
        print("\nOVERALL")
        print_metric("Total Runtime:", f"{self.total_time:.2f}s")
        print_metric("Total Ticks:", str(total_ticks))
        if self.total_time > 0:
            print_metric("Average TPS:", f"{total_ticks / self.total_time:.1f} ticks/sec")

        if self.tick_times:
            avg, med, dev, low, high = get_time_stats(self.tick_times)
            print("\nTICK TIMING")
            print_metric("Mean:", format_time_ms(avg))
            print_metric("Median:", format_time_ms(med))
            print_metric("Std Dev:", format_time_ms(dev))
            print_metric("Min:", format_time_ms(low))
            print_metric("Max:", format_time_ms(high))

        if self.active_cells:
            print("\nACTIVITY")
            print_metric("Active cells (first):", str(self.active_cells[0]))
            print_metric("Active cells (last):", str(self.active_cells[-1]))
            print_metric("Active cells (peak):", str(max(self.active_cells)))

        print("\nMASS")
        print_metric("Liquid at start:", f"{self.start_liquid:.4f}")
        print_metric("Liquid at end:", f"{self.end_liquid:.4f}")
        print_metric("Discarded:", f"{self.discarded:.6f}")

        if self.memory_snapshots:
            print("\nMEMORY USAGE")
            print_metric("Peak:", format_memory_mb(max(self.memory_snapshots)))
            print_metric("Last:", format_memory_mb(self.memory_snapshots[-1]))

        print("\n" + "=" * REPORT_WIDTH)


def build_dam_break(size: int) -> LiquidSimulator:
    """Left third of the container full of liquid, a short ledge in the middle."""
    simulator = LiquidSimulator()
    simulator.initialize(size)

    interior = range(1, size - 1)
    for x in range(1, max(2, size // 3)):
        for y in interior:
            simulator.add_liquid(x, y, 1.0)

    ledge_y = (2 * size) // 3
    for x in range(size // 2, (3 * size) // 4):
        simulator.set_solid(x, ledge_y)
    return simulator


def run_benchmark(num_ticks: int = 1000, size: int = GRID_SIZE, profile_hotspots: bool = True) -> PerformanceMetrics:
    """
    Run a headless simulation benchmark.

    Args:
        num_ticks: Number of simulation ticks to run
        size: Grid side length
        profile_hotspots: If True, run cProfile to identify hot code paths

    Returns:
        PerformanceMetrics object with collected data
    """
    print(f"\nStarting benchmark: {num_ticks} ticks on {size}x{size} grid...")
    tracemalloc.start()

    simulator = build_dam_break(size)
    metrics = PerformanceMetrics(size)
    metrics.start_liquid = simulator.total_liquid()

    profiler = cProfile.Profile() if profile_hotspots else None
    if profiler is not None:
        profiler.enable()

    with Timer() as total:
        for i in range(num_ticks):
            with Timer() as tick_timer:
                stats = simulator.tick()
            metrics.tick_times.append(tick_timer.elapsed)
            metrics.active_cells.append(stats.processed)
            metrics.discarded += stats.discarded

            if i % 100 == 0:
                metrics.record_memory()
                print(f"    Ticks: {100 * i // num_ticks}% ({i}/{num_ticks})", end="\r")

    print(f"    Ticks: 100% ({num_ticks}/{num_ticks})")

    if profiler is not None:
        profiler.disable()

    metrics.total_time = total.elapsed
    metrics.end_liquid = simulator.total_liquid()
    tracemalloc.stop()

    metrics.print_report()

    if profiler is not None:
        for sort_key in ("cumulative", "tottime"):
            print(f"\nHOT CODE PATHS (Top 20 functions by {sort_key} time)")
            print("=" * REPORT_WIDTH)
            s = io.StringIO()
            pstats.Stats(profiler, stream=s).sort_stats(sort_key).print_stats(20)
            for line in s.getvalue().split('\n')[:25]:
                if line.strip():
                    print(line)

    return metrics


def compare_grid_sizes(sizes=(32, 64, 128, 256), num_ticks: int = 300):
    """Run benchmarks at different grid sizes for comparison."""
    print_section_header("GRID SIZE COMPARISON BENCHMARK")
    results = []
    for size in sizes:
        metrics = run_benchmark(num_ticks=num_ticks, size=size, profile_hotspots=False)
        results.append((size, get_time_stats(metrics.tick_times)[0]))

    print_section_header("SUMMARY")
    for size, avg in results:
        print_metric(f"{size}x{size}:", format_time_ms(avg))


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "compare":
        compare_grid_sizes()
    else:
        # Default: run 1000 ticks with profiling
        run_benchmark(num_ticks=1000, profile_hotspots=True)
