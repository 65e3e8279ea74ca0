"""Three-corner T-Spin detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .board import Board
from .tetromino import Tetromino, TetrominoType


@dataclass(frozen=True)
class TSpinInfo:
    """Outcome of the corner test for one locked piece."""

    is_t_spin: bool = False
    is_mini: bool = False

    @property
    def is_full(self) -> bool:
        return self.is_t_spin and not self.is_mini


NO_T_SPIN = TSpinInfo()

# Indices into ``bounding_corners``: top-left, top-right, bottom-left,
# bottom-right.  The front pair is the side the T's point faces.
FRONT_CORNERS: Tuple[Tuple[int, int], ...] = (
    (2, 3),  # spawn: bottom pair
    (0, 2),  # right turn: left pair
    (0, 1),  # upside down: top pair
    (1, 3),  # left turn: right pair
)


def bounding_corners(piece: Tetromino) -> Tuple[Tuple[int, int], ...]:
    """Return the four ``(row, col)`` corners of the piece's 3x3 box."""

    row, col = piece.position
    return (
        (row, col),
        (row, col + 2),
        (row + 2, col),
        (row + 2, col + 2),
    )


def classify_t_spin(board: Board, piece: Tetromino) -> TSpinInfo:
    """Classify ``piece`` against ``board`` as it stands before the lock.

    Walls, the floor, locked cells and the piece's own blocks fill a corner;
    the spawn buffer above the board never does.  Three or more filled corners make a T-Spin, which is a
    full T-Spin only when both front corners are filled and a Mini otherwise.
    """

    if piece.shape is not TetrominoType.T:
        return NO_T_SPIN

    own = set(piece.blocks())
    corners = bounding_corners(piece)
    filled = [(r, c) in own or board.is_occupied(r, c) for r, c in corners]
    if sum(filled) < 3:
        return NO_T_SPIN

    front = FRONT_CORNERS[piece.rotation % 4]
    front_filled = sum(1 for i in front if filled[i])
    return TSpinInfo(is_t_spin=True, is_mini=front_filled != 2)
