"""7-bag piece randomizer and the next-piece queue."""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional, Tuple
import random

from .config import NEXT_QUEUE_SIZE
from .tetromino import TetrominoType


class SevenBag:
    """Deal pieces from shuffled bags holding one of each kind.

    Every seven consecutive draws starting from an empty bag are a permutation
    of all seven kinds.  ``deterministic`` skips shuffling so pieces come out
    in catalog order, which keeps tests reproducible without a seed.
    """

    def __init__(self, *, seed: Optional[int] = None, deterministic: bool = False) -> None:
        self._rng = random.Random(seed)
        self._deterministic = deterministic
        self._bag: List[TetrominoType] = []

    def reset(self) -> None:
        """Discard any pieces left in the current bag."""

        self._bag = []

    @property
    def remaining(self) -> int:
        return len(self._bag)

    def _refill(self) -> None:
        self._bag = list(TetrominoType)
        if self._deterministic:
            self._bag.reverse()
            return
        # random.shuffle is a Fisher-Yates pass with an inclusive upper bound.
        self._rng.shuffle(self._bag)

    def next_piece(self) -> TetrominoType:
        """Return the next piece, refilling the bag when it runs dry."""

        if not self._bag:
            self._refill()
        return self._bag.pop()


class PieceQueue:
    """Fixed-length lookahead of upcoming pieces fed by a :class:`SevenBag`."""

    def __init__(self, bag: SevenBag, size: int = NEXT_QUEUE_SIZE) -> None:
        self._bag = bag
        self._size = size
        self._pieces: Deque[TetrominoType] = deque()

    def fill(self) -> None:
        """Top the queue up to its lookahead length."""

        while len(self._pieces) < self._size:
            self._pieces.append(self._bag.next_piece())

    def clear(self) -> None:
        self._pieces.clear()

    def pop(self) -> TetrominoType:
        """Take the front piece and refill the tail with one new piece."""

        if not self._pieces:
            self.fill()
        piece = self._pieces.popleft()
        self._pieces.append(self._bag.next_piece())
        return piece

    def peek(self) -> Tuple[TetrominoType, ...]:
        """Return a read-only view of the upcoming pieces, next first."""

        return tuple(self._pieces)

    def __len__(self) -> int:
        return len(self._pieces)
