"""
Game State
==========

Immutable snapshot types for one instant of a game.

Every transition builds a new GameState with ``dataclasses.replace``; a
snapshot that has been handed out is never modified, so history can be kept
for replay or undo without copying.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, NamedTuple, Optional, Tuple


class Cell(NamedTuple):
    """Grid coordinate. (0, 0) is the top-left cell."""
    x: int
    y: int


# ----- Directions -----
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"

DIRECTIONS: Dict[str, Tuple[int, int]] = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

OPPOSITE: Dict[str, str] = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# ----- Food kinds -----
FOOD_NORMAL = "normal"
FOOD_GOLD = "gold"


@dataclass(frozen=True)
class Food:
    """A single food item. Normal food carries no ttl."""
    position: Cell
    kind: str = FOOD_NORMAL
    ttl: Optional[int] = None

    @property
    def is_gold(self) -> bool:
        return self.kind == FOOD_GOLD


@dataclass(frozen=True)
class PortalPair:
    """Two linked cells; entering either one exits from the other."""
    a: Cell
    b: Cell
    ttl: int

    @property
    def cells(self) -> Tuple[Cell, Cell]:
        return (self.a, self.b)

    def exit_for(self, cell: Cell) -> Optional[Cell]:
        """Return the paired exit if ``cell`` is an entry, else None."""
        if cell == self.a:
            return self.b
        if cell == self.b:
            return self.a
        return None


@dataclass(frozen=True)
class GameState:
    """
    Complete snapshot of a game at one tick.

    The snake is stored head first. ``direction`` is the committed heading of
    the last tick; ``pending_direction`` is the buffered intent for the next.
    """
    grid_size: int
    snake: Tuple[Cell, ...]
    direction: str = RIGHT
    pending_direction: str = RIGHT
    food: Optional[Food] = None
    portals: Optional[PortalPair] = None
    score: int = 0
    combo: int = 0
    combo_ticks_left: int = 0
    wrap_ticks_left: int = 0
    is_game_over: bool = False
    is_paused: bool = False

    @property
    def head(self) -> Cell:
        return self.snake[0]

    @property
    def length(self) -> int:
        return len(self.snake)

    @property
    def is_running(self) -> bool:
        """True while step() would advance the game."""
        return not (self.is_game_over or self.is_paused)

    def in_bounds(self, cell: Cell) -> bool:
        return 0 <= cell.x < self.grid_size and 0 <= cell.y < self.grid_size
