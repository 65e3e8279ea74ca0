from __future__ import annotations

from tetris_guideline.board import PIECE_VALUES
from tetris_guideline.config import LOCK_DELAY_MS, MAX_LOCK_RESETS
from tetris_guideline.game_state import ROTATE_CW, GameState
from tetris_guideline.randomizer import SevenBag
from tetris_guideline.tetromino import Tetromino, TetrominoType


def _grounded_o_piece() -> GameState:
    state = GameState(bag=SevenBag(deterministic=True))
    state.reset_game()
    state.active = Tetromino(TetrominoType.O, position=(18, 4))
    assert not state.gravity_step()
    assert state.grounded
    return state


def test_lock_timer_locks_after_delay() -> None:
    state = _grounded_o_piece()
    assert state.advance_lock_timer(LOCK_DELAY_MS - 1) is None
    result = state.advance_lock_timer(1)
    assert result is not None
    assert result.shape == TetrominoType.O
    assert state.board.get_cell(19, 4) == PIECE_VALUES[TetrominoType.O]


def test_move_while_grounded_resets_timer() -> None:
    state = _grounded_o_piece()
    state.advance_lock_timer(400)
    assert state.move(1)
    assert state.lock_timer_ms == 0
    assert state.lock_resets == 1
    assert not state.grounded
    # Not grounded: the timer does not run until gravity grounds it again.
    assert state.advance_lock_timer(1000) is None
    assert state.active is not None


def test_rotation_while_grounded_counts_as_reset() -> None:
    state = _grounded_o_piece()
    assert state.rotate(ROTATE_CW)
    assert state.lock_resets == 1


def test_reset_budget_is_exhausted_after_fifteen_moves() -> None:
    state = _grounded_o_piece()
    direction = 1
    for expected in range(1, MAX_LOCK_RESETS + 1):
        assert state.move(direction)
        direction = -direction
        assert state.lock_resets == expected
        assert not state.gravity_step()
        assert state.grounded

    state.advance_lock_timer(200)
    # The sixteenth move still shifts the piece but no longer resets the timer.
    assert state.move(direction)
    assert state.lock_resets == MAX_LOCK_RESETS
    assert state.grounded
    assert state.lock_timer_ms == 200

    assert state.advance_lock_timer(LOCK_DELAY_MS - 201) is None
    result = state.advance_lock_timer(1)
    assert result is not None
    assert state.pieces == 1


def test_spawn_restarts_lock_timing() -> None:
    state = _grounded_o_piece()
    state.move(1)
    state.gravity_step()
    state.advance_lock_timer(LOCK_DELAY_MS)
    assert state.lock_resets == 0
    assert state.lock_timer_ms == 0
    assert not state.grounded
    assert state.drop_accum_ms == 0
