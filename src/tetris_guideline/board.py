"""Board representation for the Tetris playfield."""

from __future__ import annotations

from typing import List

import numpy as np
from numpy.typing import NDArray

from .tetromino import TetrominoType


# Dimensions of the guideline playfield (visible area only).
COLS = 10
ROWS = 20

Grid = NDArray[np.uint8]

# Mapping from ``TetrominoType`` to the integer stored in the grid.  ``0`` is an
# empty cell; ``1..7`` follow catalog order so the value doubles as a colour
# index for renderers.
PIECE_VALUES = {t: i + 1 for i, t in enumerate(TetrominoType)}
VALUE_PIECES = {v: t for t, v in PIECE_VALUES.items()}


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((ROWS, COLS), dtype=np.uint8)


class Board:
    """Tetris board holding the locked cells.

    Coordinates are ``(row, col)`` with row ``0`` at the top of the visible
    area.  Negative rows form the spawn buffer above the board: they are never
    stored and never block a piece.
    """

    width: int = COLS
    height: int = ROWS

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            self.grid[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def is_occupied(self, row: int, col: int) -> bool:
        """Return ``True`` if ``(row, col)`` blocks a piece.

        Columns outside the board and rows at or below the floor count as
        occupied.  Rows above the board (``row < 0``) are never blocked so
        pieces may spawn partly off-screen.
        """

        if col < 0 or col >= self.width or row >= self.height:
            return True
        if row < 0:
            return False
        return bool(self.grid[row, col] != 0)

    def full_rows(self) -> List[int]:
        """Return the indices of every completely filled row, top to bottom."""

        full = np.all(self.grid != 0, axis=1)
        return [int(r) for r in np.flatnonzero(full)]

    def clear_full_rows(self) -> List[int]:
        """Remove completed rows and return their indices.

        Rows above each cleared row shift down to fill the gap and empty rows
        are inserted at the top, all in one step so no half-cleared state is
        ever observable.
        """

        full_rows = np.all(self.grid != 0, axis=1)
        removed = [int(r) for r in np.flatnonzero(full_rows)]
        if removed:
            remaining = self.grid[~full_rows]
            new_rows = np.zeros((len(removed), self.width), dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, remaining))
        return removed

    def is_clear(self) -> bool:
        """Return ``True`` when no locked cells remain."""

        return not bool(np.any(self.grid))

    def to_list(self) -> List[List[int]]:
        """Return a plain nested-list copy of the grid."""

        return [[int(v) for v in row] for row in self.grid]
