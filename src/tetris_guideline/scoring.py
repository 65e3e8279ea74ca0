"""Line-clear scoring: T-Spin values, combos, Back-to-Back and levels."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from .config import LINES_PER_LEVEL
from .tspin import TSpinInfo


LOGGER = logging.getLogger(__name__)

SINGLE = 100
DOUBLE = 300
TRIPLE = 500
TETRIS = 800
T_SPIN_MINI = 100
T_SPIN_MINI_DOUBLE = 200
T_SPIN_SINGLE = 800
T_SPIN_DOUBLE = 1200
T_SPIN_TRIPLE = 1600
B2B_MULTIPLIER = 1.5
COMBO_BONUS = 50

# ``combo`` value meaning no combo is running.
NO_COMBO = -1


@dataclass
class Progress:
    """Score, level and chain counters for one session."""

    score: int = 0
    high_score: int = 0
    level: int = 1
    lines: int = 0
    combo: int = NO_COMBO
    back_to_back: bool = False
    last_was_special: bool = False

    def reset(self) -> None:
        """Reset everything except the high score."""

        self.score = 0
        self.level = 1
        self.lines = 0
        self.combo = NO_COMBO
        self.back_to_back = False
        self.last_was_special = False

    def add_points(self, points: int) -> bool:
        """Add ``points`` and return ``True`` if a new high score was set."""

        self.score += points
        if self.score > self.high_score:
            self.high_score = self.score
            return True
        return False

    def break_combo(self) -> None:
        self.combo = NO_COMBO

    @property
    def combo_active(self) -> bool:
        """Whether a combo worth displaying is running."""

        return self.combo > 0


def level_for_lines(lines: int) -> int:
    """Return the level reached after ``lines`` total cleared lines."""

    return lines // LINES_PER_LEVEL + 1


def base_value(lines_cleared: int, t_spin: TSpinInfo) -> int:
    """Return the unmultiplied value of a clear."""

    if t_spin.is_t_spin:
        if t_spin.is_mini:
            return T_SPIN_MINI if lines_cleared == 1 else T_SPIN_MINI_DOUBLE
        if lines_cleared == 1:
            return T_SPIN_SINGLE
        if lines_cleared == 2:
            return T_SPIN_DOUBLE
        return T_SPIN_TRIPLE
    return {1: SINGLE, 2: DOUBLE, 3: TRIPLE}.get(lines_cleared, TETRIS)


def is_special(lines_cleared: int, t_spin: TSpinInfo) -> bool:
    """A clear is special when it is a full T-Spin or a four-line Tetris."""

    if t_spin.is_t_spin:
        return not t_spin.is_mini
    return lines_cleared == 4


def calculate_score(progress: Progress, lines_cleared: int, t_spin: TSpinInfo) -> int:
    """Score a clear of ``lines_cleared`` rows and return the points awarded.

    Updates the Back-to-Back flags and combo counter on ``progress`` and adds
    ``(base + combo bonus) * level`` to the score.  The level used is the one
    in effect before this clear's lines are counted.

    Raises:
        ValueError: If ``lines_cleared`` is not positive.
    """

    if lines_cleared < 1:
        raise ValueError("calculate_score requires at least one cleared line")

    base = base_value(lines_cleared, t_spin)
    special = is_special(lines_cleared, t_spin)

    if special and progress.last_was_special:
        base = int(base * B2B_MULTIPLIER)
        progress.back_to_back = True
    else:
        progress.back_to_back = False
    progress.last_was_special = special

    progress.combo += 1
    combo_bonus = COMBO_BONUS * progress.combo if progress.combo > 0 else 0

    awarded = (base + combo_bonus) * progress.level
    progress.add_points(awarded)
    LOGGER.debug(
        "Scored %d for %d line(s) (t_spin=%s, mini=%s, b2b=%s, combo=%d)",
        awarded,
        lines_cleared,
        t_spin.is_t_spin,
        t_spin.is_mini,
        progress.back_to_back,
        progress.combo,
    )
    return awarded
