"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


@dataclass(frozen=True)
class BoardConfig:
    """Board geometry."""
    grid_size: int        # Cells per side of the square board
    initial_length: int   # Segments in the opening snake


@dataclass(frozen=True)
class FoodConfig:
    """Food spawn and value parameters."""
    gold_chance: float
    gold_ttl: int
    normal_value: int
    gold_value: int


@dataclass(frozen=True)
class WrapConfig:
    """Wrap mode granted by gold food."""
    ticks_on_gold: int


@dataclass(frozen=True)
class ComboConfig:
    """Combo window."""
    window: int


@dataclass(frozen=True)
class PortalConfig:
    """Portal pair spawn parameters."""
    chance: float
    ttl: int


@dataclass(frozen=True)
class TimingConfig:
    """Difficulty scaling of the tick interval."""
    base_tick_ms: int
    ms_per_point: int
    min_tick_ms: int


@dataclass(frozen=True)
class HighScoreConfig:
    """High score ledger parameters."""
    max_entries: int
    storage_key: str
    name_max_length: int
    default_name: str


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    board: BoardConfig
    food: FoodConfig
    wrap: WrapConfig
    combo: ComboConfig
    portals: PortalConfig
    timing: TimingConfig
    highscores: HighScoreConfig

    def gameplay_dict(self) -> Dict[str, Any]:
        """Every value that influences a run, for hashing replays."""
        return {
            "board": {
                "initial_length": self.board.initial_length,
            },
            "food": {
                "gold_chance": self.food.gold_chance,
                "gold_ttl": self.food.gold_ttl,
                "normal_value": self.food.normal_value,
                "gold_value": self.food.gold_value,
            },
            "wrap": {"ticks_on_gold": self.wrap.ticks_on_gold},
            "combo": {"window": self.combo.window},
            "portals": {"chance": self.portals.chance, "ttl": self.portals.ttl},
        }


def _check_probability(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be within [0, 1], got {value}")


def _check_positive(name: str, value: int) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    _check_probability("food.gold_chance", config.food.gold_chance)
    _check_probability("portals.chance", config.portals.chance)

    _check_positive("board.initial_length", config.board.initial_length)
    _check_positive("food.gold_ttl", config.food.gold_ttl)
    _check_positive("wrap.ticks_on_gold", config.wrap.ticks_on_gold)
    _check_positive("combo.window", config.combo.window)
    _check_positive("portals.ttl", config.portals.ttl)
    _check_positive("highscores.max_entries", config.highscores.max_entries)
    _check_positive("highscores.name_max_length", config.highscores.name_max_length)

    # The opening snake extends left from the centre cell
    mid = config.board.grid_size // 2
    if config.board.initial_length > mid + 1:
        raise ValueError(
            f"board.grid_size ({config.board.grid_size}) is too small for an "
            f"initial snake of length {config.board.initial_length}"
        )

    if config.timing.min_tick_ms > config.timing.base_tick_ms:
        raise ValueError(
            f"timing.min_tick_ms ({config.timing.min_tick_ms}) exceeds "
            f"timing.base_tick_ms ({config.timing.base_tick_ms})"
        )

    if not config.highscores.default_name.strip():
        raise ValueError("highscores.default_name must not be blank")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    board_data = raw["board"]
    board = BoardConfig(
        grid_size=int(board_data["grid_size"]),
        initial_length=int(board_data.get("initial_length", 3))
    )

    food_data = raw["food"]
    food = FoodConfig(
        gold_chance=float(food_data["gold_chance"]),
        gold_ttl=int(food_data["gold_ttl"]),
        normal_value=int(food_data.get("normal_value", 1)),
        gold_value=int(food_data.get("gold_value", 3))
    )

    wrap = WrapConfig(ticks_on_gold=int(raw["wrap"]["ticks_on_gold"]))
    combo = ComboConfig(window=int(raw["combo"]["window"]))

    portal_data = raw["portals"]
    portals = PortalConfig(
        chance=float(portal_data["chance"]),
        ttl=int(portal_data["ttl"])
    )

    timing_data = raw["timing"]
    timing = TimingConfig(
        base_tick_ms=int(timing_data["base_tick_ms"]),
        ms_per_point=int(timing_data["ms_per_point"]),
        min_tick_ms=int(timing_data["min_tick_ms"])
    )

    # Ledger section is optional; defaults match the v1 storage schema
    hs_data = raw.get("highscores", {})
    highscores = HighScoreConfig(
        max_entries=int(hs_data.get("max_entries", 3)),
        storage_key=str(hs_data.get("storage_key", "snake-highscores-v1")),
        name_max_length=int(hs_data.get("name_max_length", 16)),
        default_name=str(hs_data.get("default_name", "Player"))
    )

    config = GameConfig(
        board=board,
        food=food,
        wrap=wrap,
        combo=combo,
        portals=portals,
        timing=timing,
        highscores=highscores
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
