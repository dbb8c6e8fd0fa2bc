"""
Replay Recorder
===============

Records a GameSession's player inputs so the run can be replayed exactly.

Because every spawn decision comes from the seed label, a run is fully
described by its seed, board size and the inputs issued before each tick.

Usage:
    from daily_snake.snake_core import GameSession, ReplayRecorder

    session = GameSession(seed_label="2026-02-18")
    recorder = ReplayRecorder(session)

    recorder.queue_direction("UP")
    while not session.state.is_game_over:
        recorder.tick()

    recorder.save("2026-02-18.json")

    final_state = replay(load_replay("2026-02-18.json"))
"""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from daily_snake.snake_core.config_loader import GameConfig, get_config
from daily_snake.snake_core import game
from daily_snake.snake_core.rng import SeededRng
from daily_snake.snake_core.session import GameSession, TickResult
from daily_snake.snake_core.state import GameState

logger = logging.getLogger(__name__)

EVENT_DIRECTION = "direction"
EVENT_PAUSE = "pause"


def compute_config_hash(config: Optional[GameConfig] = None) -> str:
    """Hash of every config value that affects gameplay."""
    if config is None:
        config = get_config()
    payload = json.dumps(config.gameplay_dict(), sort_keys=True)
    return hashlib.md5(payload.encode()).hexdigest()[:8]


class ReplayRecorder:
    """
    Wrapper that records session inputs for replay.

    Inputs are stamped with the session tick count at the moment they were
    issued, i.e. they apply before the next tick.
    """

    def __init__(self, session: GameSession):
        """
        Initialize the replay recorder.

        Args:
            session: The session to drive and record.
        """
        self.session = session
        self._events: List[Dict[str, Any]] = []
        self._config_hash = compute_config_hash(session.config)

    @property
    def events(self) -> List[Dict[str, Any]]:
        return [dict(event) for event in self._events]

    def queue_direction(self, direction: str) -> GameState:
        self._events.append(
            {"tick": self.session.ticks, "type": EVENT_DIRECTION, "value": direction}
        )
        return self.session.queue_direction(direction)

    def toggle_pause(self) -> GameState:
        self._events.append({"tick": self.session.ticks, "type": EVENT_PAUSE})
        return self.session.toggle_pause()

    def tick(self) -> TickResult:
        return self.session.tick()

    def restart(self, seed_label: Optional[str] = None) -> GameState:
        """Restart the session and clear the recording."""
        self._events = []
        return self.session.restart(seed_label)

    def get_replay_data(self) -> Dict[str, Any]:
        """
        Get the current replay data as a dictionary.

        Returns:
            Dictionary containing all replay data.
        """
        state = self.session.state
        return {
            "seed_label": self.session.seed_label,
            "grid_size": state.grid_size,
            "config_hash": self._config_hash,
            "events": self.events,
            "total_ticks": self.session.ticks,
            "final_score": state.score,
            "game_over": state.is_game_over,
        }

    def save(self, path: Union[str, Path], overwrite: bool = True) -> Path:
        """
        Save the replay to a JSON file.

        Args:
            path: Destination file.
            overwrite: If False, refuse to replace an existing file.

        Returns:
            Path where the replay was saved.
        """
        path = Path(path)
        if path.exists() and not overwrite:
            raise FileExistsError(f"Replay file already exists: {path}")

        path.parent.mkdir(parents=True, exist_ok=True)
        replay_data = self.get_replay_data()

        with open(path, "w") as f:
            json.dump(replay_data, f, indent=2)

        logger.info(
            "Replay saved: %s (seed %s, %d ticks, score %d)",
            path, replay_data["seed_label"], replay_data["total_ticks"],
            replay_data["final_score"],
        )
        return path


def load_replay(path: Union[str, Path]) -> Dict[str, Any]:
    """Read replay data written by ReplayRecorder.save()."""
    with open(path, "r") as f:
        return json.load(f)


def replay(data: Dict[str, Any], config: Optional[GameConfig] = None) -> GameState:
    """
    Re-run a recorded game and return its final state.

    Args:
        data: Replay data from ReplayRecorder.get_replay_data() or load_replay().
        config: Game configuration. Uses default if None.

    Returns:
        The state after ``total_ticks`` ticks.

    Raises:
        ValueError: If the replay was recorded under a different config or
            contains an unknown event.
    """
    if config is None:
        config = get_config()

    expected = compute_config_hash(config)
    if data.get("config_hash") != expected:
        raise ValueError(
            f"Replay config hash {data.get('config_hash')!r} does not match {expected!r}"
        )

    events_by_tick: Dict[int, List[Dict[str, Any]]] = {}
    for event in data.get("events", []):
        events_by_tick.setdefault(int(event["tick"]), []).append(event)

    rng = SeededRng(data["seed_label"])
    state = game.create_initial_state(int(data["grid_size"]), rng, config)

    total_ticks = int(data["total_ticks"])
    for tick in range(total_ticks + 1):
        for event in events_by_tick.get(tick, []):
            if event["type"] == EVENT_DIRECTION:
                state = game.queue_direction(state, event["value"])
            elif event["type"] == EVENT_PAUSE:
                state = game.toggle_pause(state)
            else:
                raise ValueError(f"Unknown replay event type: {event['type']!r}")
        if tick < total_ticks:
            state = game.step(state, rng, config)

    return state
