"""
Core Game
=========

Pure transition engine for the snake board.

Every function takes a GameState snapshot and returns a new one; nothing
here keeps state between calls. Randomness is injected as a zero-argument
callable so a SeededRng reproduces a whole day's game exactly.
"""

from __future__ import annotations

import random
from dataclasses import replace
from typing import Optional

from daily_snake.snake_core.config_loader import GameConfig, get_config
from daily_snake.snake_core.rng import RandomSource
from daily_snake.snake_core.rules import (
    can_change_direction,
    is_out_of_bounds,
    spawn_food,
    spawn_portals,
    wrap_position,
)
from daily_snake.snake_core.scoring import chain_combo, decay_combo, score_for_food
from daily_snake.snake_core.state import DIRECTIONS, RIGHT, Cell, GameState


def create_initial_state(
    grid_size: Optional[int] = None,
    rng: RandomSource = random.random,
    config: Optional[GameConfig] = None
) -> GameState:
    """
    Build the opening snapshot.

    The snake lies horizontally with its head on the centre cell, facing
    right. The first food is spawned from ``rng``.

    Args:
        grid_size: Cells per board side. Uses the configured size if None.
        rng: Random source.
        config: Game configuration. Uses default if None.

    Returns:
        Fresh GameState.

    Raises:
        ValueError: If the grid cannot hold the starting snake.
    """
    if config is None:
        config = get_config()
    if grid_size is None:
        grid_size = config.board.grid_size

    length = config.board.initial_length
    mid = grid_size // 2
    if grid_size <= 0 or mid - (length - 1) < 0:
        raise ValueError(f"Grid size {grid_size} cannot hold a snake of length {length}")

    snake = tuple(Cell(mid - i, mid) for i in range(length))

    return GameState(
        grid_size=grid_size,
        snake=snake,
        direction=RIGHT,
        pending_direction=RIGHT,
        food=spawn_food(grid_size, snake, rng, config=config),
        portals=None,
        score=0,
        combo=0,
        combo_ticks_left=0,
        wrap_ticks_left=0,
        is_game_over=False,
        is_paused=False,
    )


def queue_direction(state: GameState, requested: str) -> GameState:
    """
    Buffer a heading for the next tick.

    Unknown directions and reversals of the committed heading are ignored
    and the same snapshot is returned.
    """
    if can_change_direction(state.direction, requested):
        return replace(state, pending_direction=requested)
    return state


def step(
    state: GameState,
    rng: RandomSource = random.random,
    config: Optional[GameConfig] = None
) -> GameState:
    """
    Advance the game by one tick.

    Args:
        state: Current snapshot.
        rng: Random source for respawns and portal rolls.
        config: Game configuration. Uses default if None.

    Returns:
        The next snapshot, or ``state`` itself when paused or over.
    """
    if not state.is_running:
        return state
    if config is None:
        config = get_config()

    grid_size = state.grid_size
    direction = (
        state.pending_direction
        if can_change_direction(state.direction, state.pending_direction)
        else state.direction
    )

    dx, dy = DIRECTIONS[direction]
    hx, hy = state.snake[0]
    next_head = Cell(hx + dx, hy + dy)

    if state.wrap_ticks_left > 0:
        next_head = wrap_position(next_head, grid_size)
    elif is_out_of_bounds(next_head, grid_size):
        return replace(state, direction=direction, is_game_over=True)

    portals = state.portals
    if portals is not None:
        exit_cell = portals.exit_for(next_head)
        if exit_cell is not None:
            next_head = Cell(*exit_cell)

    eaten = state.food if state.food is not None and next_head == state.food.position else None

    # The tail moves out of the way this tick unless the snake grows
    body_to_check = state.snake if eaten is not None else state.snake[:-1]
    if next_head in body_to_check:
        return replace(state, direction=direction, is_game_over=True)

    snake = (next_head,) + tuple(state.snake)
    if eaten is None:
        snake = snake[:-1]

    combo, combo_ticks_left = decay_combo(state.combo, state.combo_ticks_left)
    wrap_ticks_left = max(0, state.wrap_ticks_left - 1)
    score = state.score
    food = state.food

    if portals is not None:
        ttl = portals.ttl - 1
        portals = replace(portals, ttl=ttl) if ttl > 0 else None

    blocked = portals.cells if portals is not None else ()

    if eaten is not None:
        combo, combo_ticks_left = chain_combo(state.combo, state.combo_ticks_left, config)
        score += score_for_food(eaten.kind, combo, config)
        food = spawn_food(grid_size, snake, rng, blocked, config=config)

        if eaten.is_gold:
            wrap_ticks_left = config.wrap.ticks_on_gold

        if portals is None and rng() < config.portals.chance:
            portals = spawn_portals(grid_size, snake, food, rng, config=config)

    elif food is not None and food.is_gold:
        ttl = food.ttl - 1
        if ttl > 0:
            food = replace(food, ttl=ttl)
        else:
            food = spawn_food(grid_size, snake, rng, blocked, config=config)

    return replace(
        state,
        snake=snake,
        direction=direction,
        pending_direction=direction,
        food=food,
        portals=portals,
        score=score,
        combo=combo,
        combo_ticks_left=combo_ticks_left,
        wrap_ticks_left=wrap_ticks_left,
    )


def toggle_pause(state: GameState) -> GameState:
    """Pause or resume. A finished game stays as it is."""
    if state.is_game_over:
        return state
    return replace(state, is_paused=not state.is_paused)


def restart_game(
    state: GameState,
    rng: RandomSource = random.random,
    config: Optional[GameConfig] = None
) -> GameState:
    """Start over on the same board size; nothing carries over."""
    return create_initial_state(state.grid_size, rng, config)
