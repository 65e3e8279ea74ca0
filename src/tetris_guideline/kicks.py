"""Super Rotation System wall-kick tables.

Offsets are ``(dx, dy)`` pairs in board coordinates (``dy`` positive moves the
piece down).  Tables are indexed directly as ``table[from_state][to_state]``.
Transitions without an entry, i.e. 180 degree turns and the identity, hold an
empty tuple, so only the unmodified placement is tried for them.
"""

from __future__ import annotations

from typing import Tuple

from .tetromino import TetrominoType

Offset = Tuple[int, int]
KickRow = Tuple[Tuple[Offset, ...], ...]
KickTable = Tuple[KickRow, ...]

_NONE: Tuple[Offset, ...] = ()

# Shared by J, L, S, T, Z (and O, whose rotations never collide differently).
STANDARD_KICKS: KickTable = (
    # from 0
    (_NONE, ((-1, 0), (-1, -1), (0, 2), (-1, 2)), _NONE, ((1, 0), (1, -1), (0, 2), (1, 2))),
    # from 1
    (((1, 0), (1, 1), (0, -2), (1, -2)), _NONE, ((1, 0), (1, 1), (0, -2), (1, -2)), _NONE),
    # from 2
    (_NONE, ((-1, 0), (-1, -1), (0, 2), (-1, 2)), _NONE, ((1, 0), (1, -1), (0, 2), (1, 2))),
    # from 3
    (((-1, 0), (-1, 1), (0, -2), (-1, -2)), _NONE, ((-1, 0), (-1, 1), (0, -2), (-1, -2)), _NONE),
)

I_KICKS: KickTable = (
    # from 0
    (_NONE, ((-2, 0), (1, 0), (-2, 1), (1, -2)), _NONE, ((-1, 0), (2, 0), (-1, -2), (2, 1))),
    # from 1
    (((2, 0), (-1, 0), (2, -1), (-1, 2)), _NONE, ((-1, 0), (2, 0), (-1, -2), (2, 1)), _NONE),
    # from 2
    (_NONE, ((1, 0), (-2, 0), (1, 2), (-2, -1)), _NONE, ((2, 0), (-1, 0), (2, -1), (-1, 2))),
    # from 3
    (((1, 0), (-2, 0), (1, 2), (-2, -1)), _NONE, ((-2, 0), (1, 0), (-2, 1), (1, -2)), _NONE),
)


def kick_offsets(shape: TetrominoType, from_state: int, to_state: int) -> Tuple[Offset, ...]:
    """Return the candidate offsets for a rotation, unmodified placement first."""

    table = I_KICKS if shape is TetrominoType.I else STANDARD_KICKS
    return ((0, 0),) + table[from_state % 4][to_state % 4]
