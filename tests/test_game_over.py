from __future__ import annotations

from tetris_guideline.config import EngineConfig
from tetris_guideline.game_state import GameState
from tetris_guideline.randomizer import SevenBag
from tetris_guideline.session import GameSession, Intent
from tetris_guideline.tetromino import Tetromino, TetrominoType


def test_spawn_collision_triggers_game_over():
    state = GameState(config=EngineConfig(spawn_row=0), bag=SevenBag(deterministic=True))
    state.reset_game()
    state.progress.score = 120
    state.progress.lines = 3
    state.board.set_cell(1, 4, 1)
    state.active = None

    assert state.spawn_tetromino() is None

    assert state.game_over
    assert state.active is None
    assert state.progress.score == 120
    assert state.progress.lines == 3


def test_lock_above_board_tops_out():
    state = GameState(bag=SevenBag(deterministic=True))
    state.reset_game()
    state.board.set_cell(0, 3, 1)
    state.board.grid[19] = [1] * 9 + [0]

    result = state.hard_drop()

    assert result is not None and result.top_out
    assert result.lines_cleared == 0
    assert state.game_over
    assert state.progress.lines == 0
    # Hard drop moved the I one row before it came to rest at row -1.
    assert state.progress.score == 2
    # The cells above the board were discarded; nothing reached row 0 but the blocker.
    assert state.board.grid[0].tolist() == [0, 0, 0, 1, 0, 0, 0, 0, 0, 0]


def test_clearing_top_rows_not_game_over():
    state = GameState(bag=SevenBag(deterministic=True))
    state.reset_game()
    for row in range(4):
        state.board.grid[row] = [1] * state.board.width
        state.board.grid[row][0] = 0
    state.active = Tetromino(TetrominoType.I, rotation=1, position=(0, 0))
    result = state.lock_piece()
    assert result.lines_cleared == 4
    assert not state.game_over
    assert state.board.is_clear()


def test_intents_ignored_after_game_over_until_reset():
    session = GameSession(deterministic_bag=True)
    session.state.board.set_cell(0, 3, 1)
    session.press(Intent.HARD_DROP)
    assert session.game_over

    score = session.score
    for intent in (Intent.MOVE_LEFT, Intent.ROTATE_CW, Intent.HOLD, Intent.HARD_DROP):
        assert not session.press(intent)
    assert not session.press(Intent.TOGGLE_PAUSE)
    assert not session.paused
    assert session.tick(5000) is None
    assert session.score == score

    assert session.press(Intent.RESET)
    assert not session.game_over
    assert session.score == 0
    assert session.active is not None
