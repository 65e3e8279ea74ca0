from tetris_guideline.game_state import GameState
from tetris_guideline.randomizer import SevenBag
from tetris_guideline.tetromino import Tetromino, TetrominoType


def _clear_one_line(state: GameState) -> None:
    state.board.grid[19] = [1, 1, 1, 1, 1, 1, 1, 1, 1, 0]
    state.active = Tetromino(TetrominoType.I, rotation=1, position=(16, 9))
    state.lock_piece()
    # Clear the leftover vertical stub so the next clear starts clean.
    state.board.grid[:] = 0


def test_level_advances_every_10_lines():
    state = GameState(bag=SevenBag(deterministic=True))
    state.reset_game()
    for _ in range(9):
        _clear_one_line(state)
    assert state.progress.lines == 9
    assert state.progress.level == 1
    _clear_one_line(state)
    assert state.progress.lines == 10
    assert state.progress.level == 2


def test_reset_resets_counters():
    state = GameState(bag=SevenBag(deterministic=True))
    state.reset_game()
    _clear_one_line(state)
    state.progress.high_score = 1234
    state.reset_game()
    assert state.progress.lines == 0
    assert state.progress.level == 1
    assert state.progress.score == 0
    assert state.progress.high_score == 1234
