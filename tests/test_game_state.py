import logging
import random

from termtris.game_state import (
    LINE_CLEAR_POINTS,
    PIECE_SET_POINTS,
    SPAWN_POSITION,
    GameState,
    Phase,
)
from termtris.geometry import HEIGHT, WIDTH, Point
from termtris.input import Action
from termtris.tetromino import BAG, TETROMINOES, TetrominoType


def _state_with(shape: TetrominoType, position: Point = SPAWN_POSITION) -> GameState:
    state = GameState(rng=random.Random(0))
    state.upcoming = TETROMINOES[shape]
    state.spawn_tetromino()
    state.position = position
    return state


def test_spawn_promotes_upcoming_piece():
    state = GameState(rng=random.Random(1))
    state.upcoming = TETROMINOES[TetrominoType.Z]
    active = state.spawn_tetromino()
    assert active is TETROMINOES[TetrominoType.Z]
    assert state.position == Point(5, 0)
    assert state.upcoming in BAG
    assert state.phase is Phase.FALLING


def test_spawn_draws_from_whole_catalog():
    state = GameState(rng=random.Random(7))
    seen = set()
    for _ in range(200):
        seen.add(state.spawn_tetromino().shape)
    assert seen == set(TetrominoType)


def test_moves_are_validated():
    state = _state_with(TetrominoType.I, Point(1, 5))
    assert not state.move(-1)
    assert state.position == Point(1, 5)
    assert state.move(1)
    assert state.position == Point(2, 5)
    state.board[Point(5, 5)] = True
    assert not state.move(1)
    assert state.position == Point(2, 5)


def test_rotation_refused_when_blocked():
    state = _state_with(TetrominoType.I, Point(5, HEIGHT - 1))
    before = state.active
    assert not state.rotate()
    assert state.active is before
    state.position = Point(5, 10)
    assert state.rotate()
    assert state.active.blocks == before.rotated().blocks


def test_gravity_step_switches_to_locking_on_floor():
    state = _state_with(TetrominoType.I, Point(5, HEIGHT - 2))
    assert state.gravity_step()
    assert state.position == Point(5, HEIGHT - 1)
    assert state.phase is Phase.FALLING
    assert not state.gravity_step()
    assert state.phase is Phase.LOCKING


def test_soft_tick_scores_even_without_room():
    state = _state_with(TetrominoType.I, Point(5, HEIGHT - 1))
    assert state.apply(Action.SOFT_TICK) is True
    assert state.score == 1
    assert not state.gravity_step()
    assert state.score == 1


def test_toggle_preview_only_flips_flag():
    state = _state_with(TetrominoType.T)
    upcoming = state.upcoming
    assert state.apply(Action.TOGGLE_PREVIEW) is False
    assert state.show_next
    state.apply(Action.TOGGLE_PREVIEW)
    assert not state.show_next
    assert state.upcoming is upcoming
    assert state.score == 0


def test_erase_help_does_not_touch_state():
    state = _state_with(TetrominoType.T, Point(5, 5))
    assert state.apply(Action.ERASE_HELP) is False
    assert state.position == Point(5, 5)


def test_hard_drop_square_on_empty_board():
    state = _state_with(TetrominoType.O)
    assert state.apply(Action.HARD_DROP) is True
    assert state.position == Point(5, 19)
    assert state.score == 19
    assert state.phase is Phase.LOCKING
    assert state.lock_active()
    assert state.score == 19 + PIECE_SET_POINTS == 39
    occupied = {(int(c), int(r)) for r, c in zip(*state.board.grid.nonzero())}
    assert occupied == {(5, 19), (6, 19), (5, 18), (6, 18)}
    assert state.pieces == 1
    assert state.phase is Phase.LINE_CLEARING


def test_i_piece_completes_bottom_row():
    state = _state_with(TetrominoType.I, Point(1, 0))
    state.board.grid[19, 4:] = True
    state.board.grid[18, 7] = True
    state.hard_drop()
    assert state.position == Point(1, 19)
    state.lock_active()
    points = state.clear_full_lines()
    assert points == LINE_CLEAR_POINTS
    assert state.lines == 1
    assert state.score == 19 + PIECE_SET_POINTS + 100
    # The block above the cleared row moved down into it.
    assert state.board.grid[19].tolist() == [c == 7 for c in range(WIDTH)]
    assert state.board.is_empty(18)
    assert state.phase is Phase.SPAWNING


def test_two_lines_score_with_combo():
    state = GameState()
    state.board.grid[18:] = True
    state.board.grid[17, 0] = True
    assert state.clear_full_lines() == 100 * 1 + 100 * 2
    assert state.lines == 2
    assert state.score == 300
    assert state.board.grid[19, 0]
    assert int(state.board.grid.sum()) == 1


def test_no_full_lines_awards_nothing():
    state = GameState()
    state.board.grid[19, :9] = True
    assert state.clear_full_lines() == 0
    assert state.lines == 0
    assert state.score == 0


def test_scan_stops_at_first_empty_row():
    state = GameState()
    state.board.grid[10] = True
    assert state.clear_full_lines() == 0
    assert state.board.is_full(10)


def test_non_adjacent_full_rows_are_both_cleared():
    state = GameState()
    state.board.grid[19] = True
    state.board.grid[18, 3] = True
    state.board.grid[17] = True
    cleared = []
    assert state.clear_full_lines(on_clear=cleared.append) == 300
    assert cleared == [19, 18]
    assert state.board.grid[19, 3]
    assert int(state.board.grid.sum()) == 1


def test_locking_above_the_board_ends_game_without_writes():
    state = _state_with(TetrominoType.T, Point(5, 0))
    state.score = 57
    state.lines = 2
    assert not state.lock_active()
    assert state.game_over
    assert not state.board.grid.any()
    assert state.score == 57
    assert state.summary() == ["final score: 57", "line count: 2", "level: 0"]


def test_blocked_spawn_leads_to_game_over():
    state = GameState(rng=random.Random(3))
    state.board.grid[1:] = True
    state.board.grid[1:, 0] = False
    state.upcoming = TETROMINOES[TetrominoType.L]
    state.spawn_tetromino()
    assert not state.gravity_step()
    assert state.phase is Phase.LOCKING
    assert not state.lock_active()
    assert state.game_over


def test_reset_game_clears_counters():
    state = GameState()
    state.score = 10
    state.lines = 3
    state.pieces = 4
    state.board.grid[19] = True
    state.phase = Phase.GAME_OVER
    state.reset_game()
    assert (state.score, state.lines, state.level, state.pieces) == (0, 0, 0, 0)
    assert not state.board.grid.any()
    assert state.upcoming in BAG
    assert state.phase is Phase.SPAWNING


def test_full_top_row_is_cleared():
    state = GameState()
    state.board.grid[1:, 0] = True
    state.board.grid[0] = True
    assert state.clear_full_lines() == 100
    assert state.lines == 1
    assert state.board.is_empty(0)
    assert bool(state.board.grid[1:, 0].all())
    assert int(state.board.grid.sum()) == HEIGHT - 1


def test_completely_full_board_clears_every_row():
    state = GameState()
    state.board.grid[:] = True
    assert state.clear_full_lines() == sum(100 * k for k in range(1, HEIGHT + 1))
    assert state.lines == HEIGHT
    assert not state.board.grid.any()


def test_line_clear_and_game_over_are_logged(caplog):
    state = _state_with(TetrominoType.T, Point(5, 0))
    state.board.grid[18:] = True
    with caplog.at_level(logging.INFO, logger="termtris.game_state"):
        state.clear_full_lines()
        state.lock_active()
    messages = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
    assert "Cleared 2 row(s) for 300 points" in messages
    assert any(m.startswith("Game over: score=300 lines=2") for m in messages)
