from __future__ import annotations

from tetris_guideline.board import Board
from tetris_guideline.game_state import GameState
from tetris_guideline.randomizer import SevenBag
from tetris_guideline.scoring import T_SPIN_SINGLE
from tetris_guideline.tetromino import Tetromino, TetrominoType
from tetris_guideline.tspin import NO_T_SPIN, classify_t_spin


def test_non_t_pieces_never_spin() -> None:
    board = Board()
    board.grid[:] = 1
    piece = Tetromino(TetrominoType.S, position=(5, 5))
    assert classify_t_spin(board, piece) == NO_T_SPIN


def test_two_corners_is_not_a_t_spin() -> None:
    board = Board()
    # Only the floor fills the two bottom corners.
    piece = Tetromino(TetrominoType.T, rotation=0, position=(18, 3))
    assert not classify_t_spin(board, piece).is_t_spin


def test_full_t_spin_with_both_front_corners() -> None:
    board = Board()
    board.set_cell(18, 3, 1)
    piece = Tetromino(TetrominoType.T, rotation=0, position=(18, 3))
    info = classify_t_spin(board, piece)
    assert info.is_t_spin
    assert not info.is_mini
    assert info.is_full


def test_mini_when_a_front_corner_is_open() -> None:
    board = Board()
    board.set_cell(17, 0, 1)
    board.set_cell(17, 2, 1)
    board.set_cell(19, 0, 1)
    piece = Tetromino(TetrominoType.T, rotation=0, position=(17, 0))
    info = classify_t_spin(board, piece)
    assert info.is_t_spin
    assert info.is_mini


def test_wall_counts_as_filled_corner() -> None:
    board = Board()
    board.set_cell(17, 8, 1)
    # Pointing left against the right wall: the right pair is outside the board.
    piece = Tetromino(TetrominoType.T, rotation=3, position=(17, 8))
    info = classify_t_spin(board, piece)
    assert info.is_t_spin
    assert not info.is_mini


def test_spawn_buffer_never_fills_a_corner() -> None:
    board = Board()
    board.set_cell(0, 0, 1)
    piece = Tetromino(TetrominoType.T, rotation=0, position=(-2, 0))
    assert not classify_t_spin(board, piece).is_t_spin


def test_t_spin_single_scores_through_lock() -> None:
    state = GameState(bag=SevenBag(deterministic=True))
    state.reset_game()
    state.board.grid[19] = [1, 1, 1, 0, 0, 0, 1, 1, 1, 1]
    state.board.set_cell(18, 3, 1)
    state.active = Tetromino(TetrominoType.T, rotation=0, position=(18, 3))

    result = state.lock_piece()

    assert result.lines_cleared == 1
    assert result.t_spin.is_full
    assert result.score_delta == T_SPIN_SINGLE
    assert state.progress.last_was_special
    # Row 18 dropped into row 19 after the clear.
    assert state.board.get_cell(19, 3) == 1
    assert state.board.get_cell(19, 4) != 0


def test_own_blocks_fill_corners_when_pointing_up() -> None:
    board = Board()
    # Upside down on the floor: the top pair is the T's own bar.
    piece = Tetromino(TetrominoType.T, rotation=2, position=(18, 3))
    info = classify_t_spin(board, piece)
    assert info.is_t_spin
    assert info.is_full


def test_own_blocks_fill_corners_when_pointing_right() -> None:
    board = Board()
    board.set_cell(17, 5, 1)
    piece = Tetromino(TetrominoType.T, rotation=1, position=(17, 3))
    info = classify_t_spin(board, piece)
    assert info.is_t_spin
    assert info.is_full


def test_upside_down_t_spin_scores_through_lock() -> None:
    state = GameState(bag=SevenBag(deterministic=True))
    state.reset_game()
    state.board.grid[19] = [1, 1, 1, 1, 0, 1, 1, 1, 1, 1]
    state.active = Tetromino(TetrominoType.T, rotation=2, position=(18, 3))

    result = state.lock_piece()

    assert result.lines_cleared == 1
    assert result.t_spin.is_full
    assert result.score_delta == T_SPIN_SINGLE
