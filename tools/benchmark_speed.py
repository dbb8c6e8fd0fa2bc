"""
Performance Benchmark
=====================

Measures engine tick throughput with a random-turning autopilot.

Usage:
    python -m tools.benchmark_speed [--grids N ...] [--steps S]
"""

from __future__ import annotations

import argparse
import sys
import time
import numpy as np

from daily_snake.snake_core.config_loader import load_config
from daily_snake.snake_core.game import create_initial_state, queue_direction, step
from daily_snake.snake_core.rng import SeededRng
from daily_snake.snake_core.session import GameSession
from daily_snake.snake_core.state import DIRECTIONS

DIRECTION_NAMES = list(DIRECTIONS)


def benchmark_engine(
    grid_size: int = 16,
    num_steps: int = 1000,
    seed: int = 42
) -> dict:
    """
    Benchmark the pure step() function.

    Args:
        grid_size: Cells per board side.
        num_steps: Number of ticks to run.
        seed: Seed for the autopilot's turn choices.

    Returns:
        Dict with timing results.
    """
    config = load_config()
    turns = np.random.default_rng(seed)
    rng = SeededRng(f"bench-{seed}")
    state = create_initial_state(grid_size, rng, config)
    games = 1

    start = time.perf_counter()

    for _ in range(num_steps):
        state = queue_direction(state, DIRECTION_NAMES[turns.integers(len(DIRECTION_NAMES))])
        state = step(state, rng, config)
        if state.is_game_over:
            state = create_initial_state(grid_size, rng, config)
            games += 1

    elapsed = time.perf_counter() - start

    return {
        "mode": "engine",
        "grid_size": grid_size,
        "num_steps": num_steps,
        "games": games,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def benchmark_session(
    grid_size: int = 16,
    num_steps: int = 1000,
    seed: int = 42
) -> dict:
    """
    Benchmark GameSession.tick() including its bookkeeping.

    Args:
        grid_size: Cells per board side.
        num_steps: Number of ticks to run.
        seed: Seed for the autopilot's turn choices.

    Returns:
        Dict with timing results.
    """
    turns = np.random.default_rng(seed)
    session = GameSession(grid_size=grid_size, seed_label=f"bench-{seed}")
    games = 1

    start = time.perf_counter()

    for _ in range(num_steps):
        session.queue_direction(DIRECTION_NAMES[turns.integers(len(DIRECTION_NAMES))])
        result = session.tick()
        if result.game_over:
            session.restart(seed_label=f"bench-{seed}-{games}")
            games += 1

    elapsed = time.perf_counter() - start

    return {
        "mode": "session",
        "grid_size": grid_size,
        "num_steps": num_steps,
        "games": games,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def run_all_benchmarks(
    grid_sizes: list = [8, 16, 32],
    steps: int = 1000
) -> list:
    """Run comprehensive benchmarks."""
    results = []

    print("=" * 60)
    print("DAILY SNAKE ENGINE BENCHMARK")
    print("=" * 60)
    print()

    for grid_size in grid_sizes:
        print(f"Benchmarking step() (grid={grid_size})...")
        result = benchmark_engine(grid_size=grid_size, num_steps=steps)
        results.append(result)
        print(f"  Steps/sec: {result['steps_per_second']:.1f}")
        print(f"  ms/step:   {result['ms_per_step']:.3f}")
        print()

        print(f"Benchmarking GameSession.tick() (grid={grid_size})...")
        result = benchmark_session(grid_size=grid_size, num_steps=steps)
        results.append(result)
        print(f"  Steps/sec: {result['steps_per_second']:.1f}")
        print(f"  ms/step:   {result['ms_per_step']:.3f}")
        print()

    print("=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print()
    print(f"{'Mode':<10} {'Grid':>6} {'Games':>7} {'Steps/s':>12} {'ms/step':>10}")
    print("-" * 50)

    for r in results:
        print(
            f"{r['mode']:<10} {r['grid_size']:>6} {r['games']:>7} "
            f"{r['steps_per_second']:>12.1f} {r['ms_per_step']:>10.3f}"
        )

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark Daily Snake engine performance")
    parser.add_argument("--steps", type=int, default=1000, help="Ticks per benchmark")
    parser.add_argument("--grids", type=int, nargs="+", default=[8, 16, 32],
                        help="Grid sizes to test")
    parser.add_argument("--quick", action="store_true", help="Quick benchmark (fewer steps)")

    args = parser.parse_args()

    steps = 100 if args.quick else args.steps

    run_all_benchmarks(
        grid_sizes=args.grids,
        steps=steps
    )

    return 0


if __name__ == "__main__":
    sys.exit(main())
