"""Utility helpers for the Tetris engine."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .board import Board, PIECE_VALUES
from .config import LEVEL_SPEEDS_MS, SOFT_DROP_MULTIPLIER
from .tetromino import Tetromino


# Grid value used by ``render_grid`` for ghost cells.  Never stored on a board.
GHOST_VALUE = 8


def gravity_interval_ms(
    level: int,
    *,
    soft_drop: bool = False,
    speeds: Sequence[int] = LEVEL_SPEEDS_MS,
    soft_drop_multiplier: float = SOFT_DROP_MULTIPLIER,
) -> float:
    """Return the fall interval in milliseconds for ``level``.

    Level 1 uses the first entry of ``speeds``; levels past the end of the
    table keep the fastest speed.  Holding soft drop divides the interval by
    ``soft_drop_multiplier``.
    """

    index = min(max(level, 1) - 1, len(speeds) - 1)
    interval = float(speeds[index])
    if soft_drop:
        interval /= soft_drop_multiplier
    return interval


def is_valid_position(
    board: Board, tetromino: Tetromino, position: Tuple[int, int], rotation: int
) -> bool:
    """Return ``True`` if ``tetromino`` fits at ``position`` with ``rotation``.

    A cell is rejected when its column leaves the board, its row is at or
    below the floor, or it overlaps a locked cell.  Rows above the board never
    collide.
    """

    for row, col in tetromino.blocks_at(position, rotation):
        if board.is_occupied(row, col):
            return False
    return True


def can_move(board: Board, tetromino: Tetromino, dx: int, dy: int) -> bool:
    """Return ``True`` if ``tetromino`` can move by ``dx`` and ``dy`` on ``board``."""

    row, col = tetromino.position
    return is_valid_position(board, tetromino, (row + dy, col + dx), tetromino.rotation)


def drop_distance(board: Board, tetromino: Tetromino) -> int:
    """Return how many rows ``tetromino`` can fall before it rests."""

    distance = 0
    while can_move(board, tetromino, 0, distance + 1):
        distance += 1
    return distance


def ghost_position(board: Board, tetromino: Tetromino) -> Tuple[int, int]:
    """Return the ``(row, col)`` where a hard drop would leave ``tetromino``."""

    row, col = tetromino.position
    return (row + drop_distance(board, tetromino), col)


def render_grid(
    board: Board, active: Optional[Tetromino] = None, *, ghost: bool = False
) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state (i.e. without locking the
    piece). Cells occupied by the active piece receive the mapped integer
    value for the piece's shape; with ``ghost`` set, the hard-drop landing
    cells that are still empty receive ``GHOST_VALUE``.
    """

    grid = board.to_list()
    if active is None:
        return grid
    if ghost:
        for r, c in active.blocks_at(ghost_position(board, active), active.rotation):
            if 0 <= r < board.height and 0 <= c < board.width and grid[r][c] == 0:
                grid[r][c] = GHOST_VALUE
    for r, c in active.blocks():
        if 0 <= r < board.height and 0 <= c < board.width:
            grid[r][c] = PIECE_VALUES[active.shape]
    return grid
