"""Tetromino catalog and the active falling piece.

Each of the seven kinds is defined by a base shape matrix in its spawn
orientation.  The remaining three orientations are produced once at import time
by repeatedly applying a 90 degree clockwise matrix transform, so every lookup
returns the same immutable shape.  Shapes are stored as the tight matrix
rather than a fixed 4x4 box: a piece's ``position`` is the top-left corner of
its current matrix.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

Matrix = Tuple[Tuple[int, ...], ...]
RotationState = List[Tuple[int, int]]


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


# Spawn orientation matrices, row-major with row 0 on top.
_BASE_MATRICES: Dict[TetrominoType, Matrix] = {
    TetrominoType.I: ((1, 1, 1, 1),),
    TetrominoType.O: ((1, 1), (1, 1)),
    TetrominoType.T: ((0, 1, 0), (1, 1, 1)),
    TetrominoType.S: ((0, 1, 1), (1, 1, 0)),
    TetrominoType.Z: ((1, 1, 0), (0, 1, 1)),
    TetrominoType.J: ((1, 0, 0), (1, 1, 1)),
    TetrominoType.L: ((0, 0, 1), (1, 1, 1)),
}

PIECE_COLORS: Dict[TetrominoType, str] = {
    TetrominoType.I: "#00f0f0",
    TetrominoType.O: "#f0f000",
    TetrominoType.T: "#a000f0",
    TetrominoType.S: "#00f000",
    TetrominoType.Z: "#f00000",
    TetrominoType.J: "#0000f0",
    TetrominoType.L: "#f0a000",
}


def rotate_matrix_cw(matrix: Matrix) -> Matrix:
    """Return ``matrix`` rotated 90 degrees clockwise.

    For a matrix with ``rows`` rows the result satisfies
    ``rotated[x][y] == matrix[rows - 1 - y][x]``.
    """

    rows = len(matrix)
    cols = len(matrix[0])
    return tuple(
        tuple(matrix[rows - 1 - y][x] for y in range(rows)) for x in range(cols)
    )


def _generate_rotations(matrix: Matrix) -> Tuple[Matrix, ...]:
    """Generate the four rotation states for a piece starting from ``matrix``."""

    rotations = [matrix]
    for _ in range(3):
        matrix = rotate_matrix_cw(matrix)
        rotations.append(matrix)
    return tuple(rotations)


def _cells(matrix: Matrix) -> Tuple[Tuple[int, int], ...]:
    return tuple(
        (r, c) for r, row in enumerate(matrix) for c, value in enumerate(row) if value
    )


TETROMINO_MATRICES: Dict[TetrominoType, Tuple[Matrix, ...]] = {
    t_type: _generate_rotations(matrix) for t_type, matrix in _BASE_MATRICES.items()
}

# Occupied ``(row, col)`` offsets per kind and rotation, derived from the
# matrices above.
TETROMINO_SHAPES: Dict[TetrominoType, Tuple[Tuple[Tuple[int, int], ...], ...]] = {
    t_type: tuple(_cells(m) for m in states)
    for t_type, states in TETROMINO_MATRICES.items()
}


def shape_matrix(shape: TetrominoType, rotation: int) -> Matrix:
    """Return the shape matrix for ``shape`` at ``rotation`` (wrapped mod 4)."""

    return TETROMINO_MATRICES[shape][rotation % 4]


def shape_blocks(shape: TetrominoType, rotation: int) -> RotationState:
    """Return the block offsets for ``shape`` at ``rotation``.

    Parameters
    ----------
    shape:
        The :class:`TetrominoType` to query.
    rotation:
        Index of the desired rotation state.  Values are wrapped so any integer
        is accepted.
    """

    return list(TETROMINO_SHAPES[shape][rotation % 4])


@dataclass
class Tetromino:
    """Active falling piece in the game."""

    shape: TetrominoType
    rotation: int = 0
    position: Tuple[int, int] = (0, 0)  # (row, col)

    @property
    def row(self) -> int:
        return self.position[0]

    @property
    def col(self) -> int:
        return self.position[1]

    def move(self, dx: int, dy: int) -> None:
        """Move the piece by the given offsets.

        ``dx`` moves horizontally (columns) and ``dy`` moves vertically
        (rows).  The piece's position is stored as ``(row, col)``.
        """

        row, col = self.position
        self.position = (row + dy, col + dx)

    def blocks(self) -> List[Tuple[int, int]]:
        """Return the global block coordinates for this piece."""

        return self.blocks_at(self.position, self.rotation)

    def blocks_at(self, position: Tuple[int, int], rotation: int) -> List[Tuple[int, int]]:
        """Return the block coordinates this piece would occupy elsewhere."""

        row, col = position
        return [(row + dr, col + dc) for dr, dc in TETROMINO_SHAPES[self.shape][rotation % 4]]
