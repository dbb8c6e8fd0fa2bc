"""
Game Session
============

Driver-owned session that ties the pure engine to a seeded random stream
and the high score ledger.

A renderer or input loop holds one GameSession, calls ``tick()`` every
``tick_ms`` milliseconds and forwards player intents to it. Restarting
builds a fresh stream and state; the engine itself stays stateless.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from daily_snake.snake_core.config_loader import GameConfig, get_config
from daily_snake.snake_core import game
from daily_snake.snake_core.highscores import (
    HighScoreEntry,
    add_high_score,
    load_high_scores,
    qualifies_for_high_score,
    save_high_scores,
)
from daily_snake.snake_core.rng import SeededRng, get_daily_seed_label
from daily_snake.snake_core.rules import get_tick_ms
from daily_snake.snake_core.state import GameState
from daily_snake.snake_core.state_snapshot import BoardSnapshot, build_snapshot
from daily_snake.snake_core.storage import KeyValueStore, MemoryStore

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """Result of a single session tick."""
    state: GameState
    delta_score: int
    ate_food: bool
    game_over: bool       # True only on the tick the game ended


class GameSession:
    """
    One player's live game.

    Owns:
    - The daily seed label and its SeededRng
    - The current GameState snapshot
    - The loaded high score ledger and the per-run submission flag
    """

    def __init__(
        self,
        grid_size: Optional[int] = None,
        seed_label: Optional[str] = None,
        store: Optional[KeyValueStore] = None,
        config: Optional[GameConfig] = None
    ):
        """
        Initialize session.

        Args:
            grid_size: Cells per board side. Uses the configured size if None.
            seed_label: Seed for the run. Today's UTC label if None.
            store: Persistence for high scores. In-memory if None.
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._grid_size = grid_size if grid_size is not None else config.board.grid_size
        self._store = store if store is not None else MemoryStore()

        self._high_scores: List[HighScoreEntry] = load_high_scores(self._store, config=config)

        self._seed_label = ""
        self._rng: SeededRng
        self._state: GameState
        self._ticks: int = 0
        self._submitted_current_run: bool = False
        self._start(seed_label)

    def _start(self, seed_label: Optional[str]) -> None:
        self._seed_label = seed_label if seed_label is not None else get_daily_seed_label()
        self._rng = SeededRng(self._seed_label)
        self._state = game.create_initial_state(self._grid_size, self._rng, self._config)
        self._ticks = 0
        self._submitted_current_run = False

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def seed_label(self) -> str:
        """Label the current run was seeded from."""
        return self._seed_label

    @property
    def rng(self) -> SeededRng:
        return self._rng

    @property
    def state(self) -> GameState:
        """Current snapshot."""
        return self._state

    @property
    def ticks(self) -> int:
        """Number of tick() calls since the run started."""
        return self._ticks

    @property
    def high_scores(self) -> List[HighScoreEntry]:
        return list(self._high_scores)

    @property
    def submitted_current_run(self) -> bool:
        return self._submitted_current_run

    @property
    def tick_ms(self) -> int:
        """Delay before the next tick should fire."""
        return get_tick_ms(self._state, self._config)

    @property
    def can_submit_score(self) -> bool:
        """True once a finished run earns a ledger place it has not claimed yet."""
        return (
            self._state.is_game_over
            and not self._submitted_current_run
            and qualifies_for_high_score(
                self._high_scores,
                self._state.score,
                config=self._config,
            )
        )

    def tick(self) -> TickResult:
        """
        Advance the run by one tick.

        Returns:
            TickResult describing what changed.
        """
        previous = self._state
        self._state = game.step(previous, self._rng, self._config)
        self._ticks += 1

        ended = self._state.is_game_over and not previous.is_game_over
        if ended:
            logger.debug(
                "Run %s ended after %d ticks with score %d",
                self._seed_label, self._ticks, self._state.score,
            )

        return TickResult(
            state=self._state,
            delta_score=self._state.score - previous.score,
            ate_food=len(self._state.snake) > len(previous.snake),
            game_over=ended,
        )

    def queue_direction(self, direction: str) -> GameState:
        self._state = game.queue_direction(self._state, direction)
        return self._state

    def toggle_pause(self) -> GameState:
        self._state = game.toggle_pause(self._state)
        return self._state

    def restart(self, seed_label: Optional[str] = None) -> GameState:
        """
        Start a new run with a fresh random stream.

        Args:
            seed_label: Seed for the new run. Today's UTC label if None.

        Returns:
            Opening snapshot of the new run.
        """
        self._start(seed_label)
        logger.debug("Restarted session with seed %s", self._seed_label)
        return self._state

    def submit_score(self, name: str) -> bool:
        """
        Record the finished run on the ledger and persist it.

        Returns:
            True if the score was added, False if the run cannot be submitted.
        """
        if not self.can_submit_score:
            return False

        self._high_scores = add_high_score(
            self._high_scores, name, self._state.score, config=self._config
        )
        save_high_scores(self._store, self._high_scores, config=self._config)
        self._submitted_current_run = True
        return True

    def snapshot(self) -> BoardSnapshot:
        """Render view of the current tick."""
        return build_snapshot(self._state, self._seed_label)
