"""Tunable timing and scoring constants for the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


# Auto-shift timings in milliseconds.
DAS_DELAY_MS = 150
ARR_DELAY_MS = 33
# Gravity interval divisor while soft drop is held.
SOFT_DROP_MULTIPLIER = 20

LOCK_DELAY_MS = 500
MAX_LOCK_RESETS = 15

NEXT_QUEUE_SIZE = 5
# Pieces spawn this many rows above the visible board.
SPAWN_ROW = 2

# Renderer-side collapse animation.  The engine clears rows immediately.
LINE_CLEAR_ANIMATION_MS = 150

# Gravity interval per level, level 1 first.  Levels past the end of the table
# reuse the last entry.
LEVEL_SPEEDS_MS: Tuple[int, ...] = (
    1000, 793, 618, 473, 355, 262, 190, 135, 94, 64,
    43, 28, 18, 11, 7, 4, 3, 2, 1, 1,
)

LINES_PER_LEVEL = 10

SOFT_DROP_POINTS = 1
HARD_DROP_POINTS = 2


@dataclass(frozen=True)
class EngineConfig:
    """Per-session overrides for the timing constants above."""

    das_ms: float = DAS_DELAY_MS
    arr_ms: float = ARR_DELAY_MS
    soft_drop_multiplier: float = SOFT_DROP_MULTIPLIER
    lock_delay_ms: float = LOCK_DELAY_MS
    max_lock_resets: int = MAX_LOCK_RESETS
    next_queue_size: int = NEXT_QUEUE_SIZE
    spawn_row: int = SPAWN_ROW
    level_speeds_ms: Tuple[int, ...] = LEVEL_SPEEDS_MS

    def __post_init__(self) -> None:
        if self.das_ms < 0 or self.arr_ms < 0 or self.lock_delay_ms < 0:
            raise ValueError("Timing values must be non-negative")
        if self.soft_drop_multiplier <= 0:
            raise ValueError("soft_drop_multiplier must be positive")
        if self.max_lock_resets < 0:
            raise ValueError("max_lock_resets must be non-negative")
        if self.next_queue_size < 1:
            raise ValueError("next_queue_size must be at least 1")
        if not self.level_speeds_ms:
            raise ValueError("level_speeds_ms must not be empty")


DEFAULT_CONFIG = EngineConfig()
