"""
Game Rules
==========

Handles direction gating, food and portal spawn placement, board edges,
and the difficulty-scaled tick interval.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from daily_snake.snake_core.config_loader import GameConfig, get_config
from daily_snake.snake_core.rng import RandomSource
from daily_snake.snake_core.state import (
    DIRECTIONS,
    FOOD_GOLD,
    FOOD_NORMAL,
    OPPOSITE,
    Cell,
    Food,
    GameState,
    PortalPair,
)


# ---------- Direction gating ----------

def is_opposite(current: str, requested: str) -> bool:
    """True if ``requested`` would reverse ``current`` in place."""
    return OPPOSITE.get(current) == requested


def can_change_direction(current: str, requested: str) -> bool:
    """
    Check whether a heading change is allowed.

    Unknown directions and 180-degree reversals are rejected.
    """
    if not isinstance(requested, str) or requested not in DIRECTIONS:
        return False
    return not is_opposite(current, requested)


# ---------- Board edges ----------

def wrap_position(cell: Tuple[int, int], grid_size: int) -> Cell:
    """Fold a coordinate back onto the board on both axes."""
    x, y = cell
    return Cell(x % grid_size, y % grid_size)


def is_out_of_bounds(cell: Tuple[int, int], grid_size: int) -> bool:
    x, y = cell
    return x < 0 or x >= grid_size or y < 0 or y >= grid_size


# ---------- Spawning ----------

def _pick_index(rng: RandomSource, count: int) -> int:
    """Map one draw onto [0, count)."""
    return min(int(math.floor(rng() * count)), count - 1)


def open_cells(grid_size: int, occupied: Iterable[Tuple[int, int]]) -> List[Cell]:
    """
    Enumerate every free cell in row-major order (y outer, x inner).

    Cells outside the board in ``occupied`` are ignored.
    """
    free = np.ones((grid_size, grid_size), dtype=bool)  # indexed [y, x]
    for x, y in occupied:
        if 0 <= x < grid_size and 0 <= y < grid_size:
            free[y, x] = False
    return [Cell(int(x), int(y)) for y, x in np.argwhere(free)]


def spawn_food(
    grid_size: int,
    snake: Sequence[Tuple[int, int]],
    rng: RandomSource,
    blocked_cells: Iterable[Tuple[int, int]] = (),
    config: Optional[GameConfig] = None
) -> Optional[Food]:
    """
    Place a new food uniformly among open cells.

    Consumes two draws when a cell is available: one for the position, one
    for the kind.

    Args:
        grid_size: Cells per board side.
        snake: Current snake body.
        rng: Random source.
        blocked_cells: Extra cells to avoid (active portals).
        config: Game configuration. Uses default if None.

    Returns:
        The spawned Food, or None if the board is full.
    """
    if config is None:
        config = get_config()

    candidates = open_cells(grid_size, [*snake, *blocked_cells])
    if not candidates:
        return None

    position = candidates[_pick_index(rng, len(candidates))]
    if rng() < config.food.gold_chance:
        return Food(position=position, kind=FOOD_GOLD, ttl=config.food.gold_ttl)
    return Food(position=position, kind=FOOD_NORMAL, ttl=None)


def spawn_portals(
    grid_size: int,
    snake: Sequence[Tuple[int, int]],
    food: Optional[Food],
    rng: RandomSource,
    config: Optional[GameConfig] = None
) -> Optional[PortalPair]:
    """
    Place a portal pair on two distinct open cells.

    Args:
        grid_size: Cells per board side.
        snake: Current snake body.
        food: Current food, whose cell is avoided.
        rng: Random source.
        config: Game configuration. Uses default if None.

    Returns:
        The spawned PortalPair, or None if fewer than two cells are free.
    """
    if config is None:
        config = get_config()

    occupied = list(snake)
    if food is not None:
        occupied.append(food.position)

    candidates = open_cells(grid_size, occupied)
    if len(candidates) < 2:
        return None

    a = candidates.pop(_pick_index(rng, len(candidates)))
    b = candidates[_pick_index(rng, len(candidates))]
    return PortalPair(a=a, b=b, ttl=config.portals.ttl)


def random_cell(grid_size: int, rng: RandomSource) -> Cell:
    """Any cell on the board, occupied or not (debug helper)."""
    return Cell(_pick_index(rng, grid_size), _pick_index(rng, grid_size))


# ---------- Timing ----------

def get_tick_ms(state: GameState, config: Optional[GameConfig] = None) -> int:
    """
    Tick interval for the current score.

    Non-increasing in score and floored at ``timing.min_tick_ms``.
    """
    if config is None:
        config = get_config()

    timing = config.timing
    return max(timing.min_tick_ms, timing.base_tick_ms - timing.ms_per_point * state.score)
