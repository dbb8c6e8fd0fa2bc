"""
Snake Core - The heart of the game.

This module provides the pure state-transition engine, the daily seeded RNG,
the high score ledger and the session/replay helpers a driver builds on.

Main exports:
- create_initial_state / step / queue_direction / toggle_pause / restart_game
- SeededRng, create_seeded_rng, get_daily_seed_label
- GameState and its parts (Cell, Food, PortalPair)
- High score ledger functions and key-value stores
- GameSession: driver-owned live game
- ReplayRecorder: record and re-run sessions
- GameConfig: Configuration loaded from game_config.yaml
"""

from daily_snake.snake_core.config_loader import GameConfig, load_config, get_config
from daily_snake.snake_core.rng import SeededRng, create_seeded_rng, get_daily_seed_label
from daily_snake.snake_core.state import (
    UP,
    DOWN,
    LEFT,
    RIGHT,
    DIRECTIONS,
    FOOD_NORMAL,
    FOOD_GOLD,
    Cell,
    Food,
    PortalPair,
    GameState,
)
from daily_snake.snake_core.rules import (
    can_change_direction,
    get_tick_ms,
    random_cell,
    spawn_food,
    spawn_portals,
)
from daily_snake.snake_core.game import (
    create_initial_state,
    queue_direction,
    step,
    toggle_pause,
    restart_game,
)
from daily_snake.snake_core.highscores import (
    HighScoreEntry,
    MAX_HIGH_SCORES,
    HIGH_SCORE_STORAGE_KEY,
    sanitize_name,
    sort_high_scores,
    qualifies_for_high_score,
    add_high_score,
    load_high_scores,
    save_high_scores,
)
from daily_snake.snake_core.storage import KeyValueStore, MemoryStore, JsonFileStore
from daily_snake.snake_core.state_snapshot import BoardSnapshot, build_snapshot
from daily_snake.snake_core.session import GameSession, TickResult
from daily_snake.snake_core.replay_recorder import ReplayRecorder, load_replay, replay

__all__ = [
    "GameConfig",
    "load_config",
    "get_config",
    "SeededRng",
    "create_seeded_rng",
    "get_daily_seed_label",
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "DIRECTIONS",
    "FOOD_NORMAL",
    "FOOD_GOLD",
    "Cell",
    "Food",
    "PortalPair",
    "GameState",
    "can_change_direction",
    "get_tick_ms",
    "random_cell",
    "spawn_food",
    "spawn_portals",
    "create_initial_state",
    "queue_direction",
    "step",
    "toggle_pause",
    "restart_game",
    "HighScoreEntry",
    "MAX_HIGH_SCORES",
    "HIGH_SCORE_STORAGE_KEY",
    "sanitize_name",
    "sort_high_scores",
    "qualifies_for_high_score",
    "add_high_score",
    "load_high_scores",
    "save_high_scores",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "BoardSnapshot",
    "build_snapshot",
    "GameSession",
    "TickResult",
    "ReplayRecorder",
    "load_replay",
    "replay",
]
