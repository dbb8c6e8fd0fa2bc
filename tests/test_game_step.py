"""
Tests for the per-tick game transition.
"""

import pytest
from dataclasses import replace

from daily_snake.snake_core.config_loader import load_config
from daily_snake.snake_core.game import (
    create_initial_state,
    queue_direction,
    restart_game,
    step,
    toggle_pause,
)
from daily_snake.snake_core.rules import get_tick_ms
from daily_snake.snake_core.state import (
    DOWN,
    FOOD_GOLD,
    FOOD_NORMAL,
    LEFT,
    RIGHT,
    UP,
    Cell,
    Food,
    PortalPair,
)


@pytest.fixture
def config():
    return load_config()


def zero():
    return 0.0


def high():
    return 0.9


def make_state(grid_size, snake, config, **overrides):
    """Opening state with the snake (and any other fields) swapped in."""
    base = create_initial_state(grid_size, zero, config)
    return replace(
        base,
        snake=tuple(Cell(x, y) for x, y in snake),
        **overrides
    )


class TestInitialState:
    """Test opening snapshot."""

    def test_snake_centered_facing_right(self, config):
        """Three segments lie horizontally with the head on the centre cell."""
        state = create_initial_state(10, zero, config)

        assert state.snake == (Cell(5, 5), Cell(4, 5), Cell(3, 5))
        assert state.direction == RIGHT
        assert state.pending_direction == RIGHT

    def test_counters_start_at_zero(self, config):
        state = create_initial_state(10, zero, config)

        assert state.score == 0
        assert state.combo == 0
        assert state.combo_ticks_left == 0
        assert state.wrap_ticks_left == 0
        assert state.portals is None
        assert not state.is_game_over
        assert not state.is_paused

    def test_initial_food_spawned_off_snake(self, config):
        state = create_initial_state(10, zero, config)

        assert state.food is not None
        assert state.food.position not in state.snake

    def test_default_grid_size_from_config(self, config):
        state = create_initial_state(rng=zero, config=config)
        assert state.grid_size == config.board.grid_size

    def test_grid_too_small_raises(self, config):
        with pytest.raises(ValueError):
            create_initial_state(3, zero, config)


class TestMovement:
    """Test head movement and direction handling."""

    def test_snake_moves_one_tile(self, config):
        """Moving right from (4,5) lands on (5,5) without growing."""
        state = make_state(10, [(4, 5), (3, 5), (2, 5)], config)

        next_state = step(state, zero, config)

        assert next_state.snake[0] == Cell(5, 5)
        assert len(next_state.snake) == 3
        assert next_state.snake[-1] == Cell(3, 5)

    def test_pending_direction_committed(self, config):
        state = make_state(10, [(4, 5), (3, 5), (2, 5)], config)
        state = queue_direction(state, UP)

        next_state = step(state, zero, config)

        assert next_state.snake[0] == Cell(4, 4)
        assert next_state.direction == UP
        assert next_state.pending_direction == UP

    def test_opposite_pending_direction_keeps_current(self, config):
        """A reversing intent that slipped into the state is not applied."""
        state = make_state(
            10, [(4, 5), (3, 5), (2, 5)], config,
            direction=RIGHT, pending_direction=LEFT
        )

        next_state = step(state, zero, config)

        assert next_state.snake[0] == Cell(5, 5)
        assert next_state.direction == RIGHT
        assert next_state.pending_direction == RIGHT

    def test_reverse_direction_input_is_ignored(self, config):
        state = create_initial_state(10, zero, config)

        next_state = queue_direction(state, LEFT)

        assert next_state is state
        assert next_state.pending_direction == RIGHT

    def test_unknown_direction_input_is_ignored(self, config):
        state = create_initial_state(10, zero, config)
        assert queue_direction(state, "DIAGONAL") is state

    @pytest.mark.parametrize("requested", [["UP"], {"UP": 1}, None, 3])
    def test_non_string_direction_input_is_ignored(self, config, requested):
        state = create_initial_state(10, zero, config)
        assert queue_direction(state, requested) is state

    def test_valid_direction_is_buffered(self, config):
        state = create_initial_state(10, zero, config)

        next_state = queue_direction(state, DOWN)

        assert next_state.pending_direction == DOWN
        assert next_state.direction == RIGHT
        assert state.pending_direction == RIGHT


class TestFood:
    """Test eating, growth and food lifecycle."""

    def test_normal_food_grows_and_scores(self, config):
        state = make_state(
            8, [(4, 4), (3, 4), (2, 4)], config,
            food=Food(Cell(5, 4), FOOD_NORMAL, None)
        )

        next_state = step(state, zero, config)

        assert next_state.score == 1
        assert len(next_state.snake) == 4
        assert next_state.snake[0] == Cell(5, 4)
        assert next_state.combo == 1
        assert next_state.combo_ticks_left == config.combo.window

    def test_gold_food_scores_bonus_and_enables_wrap(self, config):
        state = make_state(
            8, [(4, 4), (3, 4), (2, 4)], config,
            food=Food(Cell(5, 4), FOOD_GOLD, 10)
        )

        next_state = step(state, high, config)

        assert next_state.score == 3
        assert next_state.wrap_ticks_left == 24
        assert next_state.food.kind == FOOD_NORMAL
        assert next_state.portals is None

    def test_respawned_food_avoids_snake(self, config):
        state = make_state(
            8, [(4, 4), (3, 4), (2, 4)], config,
            food=Food(Cell(5, 4))
        )

        next_state = step(state, high, config)

        assert next_state.food is not None
        assert next_state.food.position not in next_state.snake

    def test_gold_ttl_decrements_when_not_eaten(self, config):
        state = make_state(
            8, [(4, 4), (3, 4), (2, 4)], config,
            food=Food(Cell(7, 7), FOOD_GOLD, 5)
        )

        next_state = step(state, high, config)

        assert next_state.food == Food(Cell(7, 7), FOOD_GOLD, 4)

    def test_gold_food_expires_and_respawns(self, config):
        state = make_state(
            8, [(4, 4), (3, 4), (2, 4)], config,
            food=Food(Cell(7, 7), FOOD_GOLD, 1)
        )

        next_state = step(state, high, config)

        assert next_state.food.kind == FOOD_NORMAL
        assert next_state.food.ttl is None

    def test_normal_food_never_expires(self, config):
        state = make_state(
            8, [(4, 4), (3, 4), (2, 4)], config,
            food=Food(Cell(0, 7))
        )

        next_state = step(state, high, config)

        assert next_state.food == state.food

    def test_eat_rolls_portal_pair(self, config):
        """With an all-zero stream the eat spawns gold food and a portal pair."""
        state = make_state(
            8, [(4, 4), (3, 4), (2, 4)], config,
            food=Food(Cell(5, 4))
        )

        next_state = step(state, zero, config)

        assert next_state.food == Food(Cell(0, 0), FOOD_GOLD, config.food.gold_ttl)
        assert next_state.portals == PortalPair(Cell(1, 0), Cell(2, 0), config.portals.ttl)


class TestCombo:
    """Test combo chaining and window timing."""

    def test_consecutive_eats_chain_combo(self, config):
        """NORMAL then NORMAL back to back scores 1 + 2."""
        state = make_state(
            10, [(4, 5), (3, 5), (2, 5)], config,
            food=Food(Cell(5, 5))
        )

        state = step(state, high, config)
        state = replace(state, food=Food(Cell(6, 5)))
        state = step(state, high, config)

        assert state.score == 3
        assert state.combo == 2

    def test_eat_on_last_window_tick_still_chains(self, config):
        state = make_state(
            10, [(4, 5), (3, 5), (2, 5)], config,
            food=Food(Cell(5, 5)), combo=1, combo_ticks_left=1
        )

        next_state = step(state, high, config)

        assert next_state.combo == 2
        assert next_state.score == 2

    def test_eat_after_window_restarts_combo(self, config):
        state = make_state(
            10, [(4, 5), (3, 5), (2, 5)], config,
            food=Food(Cell(5, 5)), combo=3, combo_ticks_left=0
        )

        next_state = step(state, high, config)

        assert next_state.combo == 1
        assert next_state.score == 1

    def test_combo_resets_when_window_runs_out(self, config):
        state = make_state(10, [(4, 5), (3, 5), (2, 5)], config, combo=2, combo_ticks_left=1)

        next_state = step(state, zero, config)

        assert next_state.combo_ticks_left == 0
        assert next_state.combo == 0

    def test_combo_kept_while_window_open(self, config):
        state = make_state(10, [(4, 5), (3, 5), (2, 5)], config, combo=2, combo_ticks_left=2)

        next_state = step(state, zero, config)

        assert next_state.combo_ticks_left == 1
        assert next_state.combo == 2


class TestWalls:
    """Test wall collision and wrap mode."""

    def test_wrap_mode_allows_crossing_boundaries(self, config):
        state = make_state(
            6, [(5, 2)], config,
            wrap_ticks_left=5, food=Food(Cell(0, 0))
        )

        next_state = step(state, zero, config)

        assert not next_state.is_game_over
        assert next_state.snake[0] == Cell(0, 2)
        assert next_state.wrap_ticks_left == 4

    def test_wrap_mode_crosses_top_edge(self, config):
        state = make_state(
            6, [(3, 0)], config,
            direction=UP, pending_direction=UP,
            wrap_ticks_left=1, food=Food(Cell(0, 0))
        )

        next_state = step(state, zero, config)

        assert next_state.snake[0] == Cell(3, 5)
        assert next_state.wrap_ticks_left == 0

    def test_wall_collision_ends_game(self, config):
        state = make_state(
            6, [(5, 2)], config,
            wrap_ticks_left=0, food=Food(Cell(0, 0))
        )

        next_state = step(state, zero, config)

        assert next_state.is_game_over
        assert next_state.snake == state.snake

    def test_wall_collision_commits_direction(self, config):
        state = make_state(
            6, [(2, 0), (1, 0)], config,
            direction=RIGHT, pending_direction=UP, food=Food(Cell(5, 5))
        )

        next_state = step(state, zero, config)

        assert next_state.is_game_over
        assert next_state.direction == UP
        assert next_state.snake == state.snake


class TestSelfCollision:
    """Test collisions with the snake's own body."""

    def test_snake_collides_with_itself(self, config):
        state = make_state(
            8, [(2, 2), (2, 3), (3, 3), (3, 2)], config,
            direction=LEFT, pending_direction=DOWN
        )

        next_state = step(state, zero, config)

        assert next_state.is_game_over
        assert next_state.snake == state.snake

    def test_moving_into_vacating_tail_is_safe(self, config):
        """The tail leaves its cell on a non-eating tick."""
        state = make_state(
            8, [(2, 2), (3, 2), (3, 3), (2, 3)], config,
            direction=LEFT, pending_direction=DOWN, food=Food(Cell(7, 7))
        )

        next_state = step(state, zero, config)

        assert not next_state.is_game_over
        assert next_state.snake == (Cell(2, 3), Cell(2, 2), Cell(3, 2), Cell(3, 3))

    def test_eating_onto_tail_collides(self, config):
        """The tail stays put when growing, so it blocks the head."""
        state = make_state(
            8, [(2, 2), (3, 2), (3, 3), (2, 3)], config,
            direction=LEFT, pending_direction=DOWN, food=Food(Cell(2, 3))
        )

        next_state = step(state, zero, config)

        assert next_state.is_game_over


class TestPortals:
    """Test portal teleport and expiry."""

    def test_portal_entry_teleports_to_exit(self, config):
        state = make_state(
            8, [(1, 1), (0, 1)], config,
            portals=PortalPair(Cell(2, 1), Cell(5, 4), 8),
            food=Food(Cell(7, 7))
        )

        next_state = step(state, zero, config)

        assert next_state.snake[0] == Cell(5, 4)
        assert next_state.portals.ttl == 7

    def test_portal_is_bidirectional(self, config):
        state = make_state(
            8, [(4, 4), (3, 4)], config,
            portals=PortalPair(Cell(1, 1), Cell(5, 4), 8),
            food=Food(Cell(7, 7))
        )

        next_state = step(state, zero, config)

        assert next_state.snake[0] == Cell(1, 1)

    def test_portal_pair_expires_when_ttl_reaches_zero(self, config):
        state = make_state(
            8, [(1, 1), (0, 1)], config,
            portals=PortalPair(Cell(7, 7), Cell(6, 6), 1),
            food=Food(Cell(7, 0))
        )

        next_state = step(state, zero, config)

        assert next_state.portals is None

    def test_spawned_food_does_not_overlap_portals(self, config):
        portals = PortalPair(Cell(0, 0), Cell(1, 0), 10)
        state = make_state(
            8, [(3, 3), (2, 3), (1, 3)], config,
            food=Food(Cell(4, 3)), portals=portals
        )

        next_state = step(state, zero, config)

        assert next_state.food.position not in portals.cells
        assert next_state.portals == replace(portals, ttl=9)


class TestLifecycle:
    """Test pause, game over and restart."""

    def test_paused_step_is_noop(self, config):
        state = toggle_pause(create_initial_state(10, zero, config))
        assert step(state, zero, config) is state

    def test_game_over_step_is_noop(self, config):
        state = replace(create_initial_state(10, zero, config), is_game_over=True)
        assert step(state, zero, config) is state

    def test_toggle_pause_flips(self, config):
        state = create_initial_state(10, zero, config)

        paused = toggle_pause(state)
        resumed = toggle_pause(paused)

        assert paused.is_paused
        assert not resumed.is_paused

    def test_game_over_cannot_be_paused(self, config):
        state = replace(create_initial_state(10, zero, config), is_game_over=True)
        assert toggle_pause(state) is state

    def test_restart_resets_everything(self, config):
        state = replace(
            create_initial_state(10, zero, config),
            score=42, combo=3, combo_ticks_left=5, wrap_ticks_left=7, is_game_over=True
        )

        restarted = restart_game(state, zero, config)

        assert restarted == create_initial_state(10, zero, config)


class TestTickTiming:
    """Test difficulty scaling."""

    def test_tick_speed_increases_with_score(self, config):
        state = create_initial_state(10, zero, config)
        faster = replace(state, score=20)

        assert get_tick_ms(state, config) == 140
        assert get_tick_ms(faster, config) == 80
        assert get_tick_ms(state, config) > get_tick_ms(faster, config)

    def test_tick_speed_floor(self, config):
        state = replace(create_initial_state(10, zero, config), score=999)
        assert get_tick_ms(state, config) == 75

    def test_tick_ms_non_increasing(self, config):
        state = create_initial_state(10, zero, config)
        values = [get_tick_ms(replace(state, score=s), config) for s in range(60)]

        assert all(a >= b for a, b in zip(values, values[1:]))
        assert min(values) == 75
