"""
State Snapshot
==============

Packs a GameState into a numpy board plus the HUD strings a driver shows
next to it. Drivers paint from this instead of walking the snapshot fields
themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np

from daily_snake.snake_core.state import GameState

# Board cell codes
EMPTY = 0
SNAKE = 1
HEAD = 2
FOOD = 3
GOLD_FOOD = 4
PORTAL_A = 5
PORTAL_B = 6


@dataclass
class BoardSnapshot:
    """Render-ready view of one tick."""
    board: np.ndarray        # (grid, grid) int8, indexed [y, x]
    score: int
    combo_label: str
    mode_label: str
    status_text: str
    seed_label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form."""
        return {
            "board": self.board.tolist(),
            "score": self.score,
            "combo": self.combo_label,
            "mode": self.mode_label,
            "status": self.status_text,
            "seed": self.seed_label,
        }


def build_board(state: GameState) -> np.ndarray:
    """
    Encode the board as cell codes.

    Snake segments are drawn over portals, and portals over food.
    """
    board = np.full((state.grid_size, state.grid_size), EMPTY, dtype=np.int8)

    if state.food is not None:
        fx, fy = state.food.position
        board[fy, fx] = GOLD_FOOD if state.food.is_gold else FOOD

    if state.portals is not None:
        ax, ay = state.portals.a
        bx, by = state.portals.b
        board[ay, ax] = PORTAL_A
        board[by, bx] = PORTAL_B

    for x, y in state.snake[1:]:
        board[y, x] = SNAKE
    hx, hy = state.snake[0]
    board[hy, hx] = HEAD

    return board


def mode_label(state: GameState) -> str:
    if state.wrap_ticks_left > 0:
        return f"Wrap ({state.wrap_ticks_left})"
    if state.portals is not None:
        return f"Portals ({state.portals.ttl})"
    return "Classic"


def status_text(state: GameState) -> str:
    if state.is_game_over:
        return "Game over. Press Restart to play again."
    if state.is_paused:
        return "Paused"
    if state.portals is not None:
        return f"Portals open ({state.portals.ttl})"
    if state.food is not None and state.food.is_gold:
        return f"Gold food active ({state.food.ttl})"
    return ""


def combo_label(state: GameState) -> str:
    return f"x{state.combo}" if state.combo > 1 else "x1"


def build_snapshot(state: GameState, seed_label: Optional[str] = None) -> BoardSnapshot:
    """Build the render view of ``state``."""
    return BoardSnapshot(
        board=build_board(state),
        score=state.score,
        combo_label=combo_label(state),
        mode_label=mode_label(state),
        status_text=status_text(state),
        seed_label=seed_label,
    )
