"""
Scoring System
==============

Food values and combo bookkeeping.

A combo chains when food is eaten while the window opened by the previous
eat is still running. The window is checked against the value *before* this
tick's decay, while the idle reset uses the value *after* it, so a combo
survives through the tick where the counter reaches zero and resets on the
tick after.
"""

from __future__ import annotations

from typing import Optional, Tuple

from daily_snake.snake_core.config_loader import GameConfig, get_config
from daily_snake.snake_core.state import FOOD_GOLD


def food_value(kind: str, config: Optional[GameConfig] = None) -> int:
    """Base points for a food kind."""
    if config is None:
        config = get_config()
    return config.food.gold_value if kind == FOOD_GOLD else config.food.normal_value


def score_for_food(kind: str, combo: int, config: Optional[GameConfig] = None) -> int:
    """Points awarded for eating ``kind`` at multiplier ``combo``."""
    return food_value(kind, config) * combo


def decay_combo(combo: int, combo_ticks_left: int) -> Tuple[int, int]:
    """
    Advance the combo window by one idle tick.

    Returns:
        (combo, combo_ticks_left) after decay.
    """
    ticks_left = max(0, combo_ticks_left - 1)
    return (combo if ticks_left > 0 else 0), ticks_left


def chain_combo(
    previous_combo: int,
    previous_ticks_left: int,
    config: Optional[GameConfig] = None
) -> Tuple[int, int]:
    """
    Combo after an eat, given the counters as they were before the tick.

    Returns:
        (combo, combo_ticks_left) with the window reopened.
    """
    if config is None:
        config = get_config()
    combo = previous_combo + 1 if previous_ticks_left > 0 else 1
    return combo, config.combo.window
