"""High level game state container.

``GameState`` owns everything that changes during a session: the board, the
active piece, hold slot, next queue, progress counters and the lock-delay
timers.  Its methods implement the piece state machine (spawn, move, rotate,
drop, hold) and the lock pipeline (write cells, detect top-out, classify
T-Spins, clear rows, score, respawn).  Timing and input repeat live in
:mod:`tetris_guideline.session`, which calls into this class.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple
import logging

from .board import Board, PIECE_VALUES
from .config import DEFAULT_CONFIG, HARD_DROP_POINTS, SPAWN_ROW, EngineConfig
from .kicks import kick_offsets
from .randomizer import PieceQueue, SevenBag
from .scoring import Progress, calculate_score, level_for_lines
from .tetromino import Tetromino, TetrominoType
from .tspin import NO_T_SPIN, TSpinInfo, classify_t_spin
from .utils import can_move, ghost_position, is_valid_position


LOGGER = logging.getLogger(__name__)

ROTATE_CCW = -1
ROTATE_CW = 1
ROTATE_180 = 2


@dataclass(frozen=True)
class LockResult:
    """What happened when a piece locked."""

    shape: TetrominoType
    lines_cleared: int = 0
    cleared_rows: Tuple[int, ...] = ()
    t_spin: TSpinInfo = NO_T_SPIN
    score_delta: int = 0
    top_out: bool = False


def spawn_position(board: Board, spawn_row: int = SPAWN_ROW) -> Tuple[int, int]:
    """Return the ``(row, col)`` every new piece starts from."""

    return (-spawn_row, board.width // 2 - 2)


@dataclass
class GameState:
    """Mutable state for a Tetris game session."""

    config: EngineConfig = DEFAULT_CONFIG
    bag: SevenBag = field(default_factory=SevenBag)
    board: Board = field(default_factory=Board)
    active: Optional[Tetromino] = None
    held: Optional[TetrominoType] = None
    can_hold: bool = True
    progress: Progress = field(default_factory=Progress)
    game_over: bool = False
    paused: bool = False
    # Lock timing, cleared on every spawn and hold swap.
    drop_accum_ms: float = 0.0
    lock_timer_ms: float = 0.0
    lock_resets: int = 0
    grounded: bool = False
    pieces: int = 0
    last_lock: Optional[LockResult] = None
    queue: PieceQueue = field(init=False)

    def __post_init__(self) -> None:
        self.queue = PieceQueue(self.bag, self.config.next_queue_size)

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------
    def reset_game(self) -> None:
        """Reset the entire game state for a new game and spawn a piece.

        The high score survives; everything else starts over.
        """

        self.board = Board()
        self.progress.reset()
        self.bag.reset()
        self.queue.clear()
        self.queue.fill()
        self.active = None
        self.held = None
        self.can_hold = True
        self.game_over = False
        self.paused = False
        self.pieces = 0
        self.last_lock = None
        self._reset_lock_timing()
        self.spawn_tetromino()

    @property
    def accepting_input(self) -> bool:
        return not self.game_over and not self.paused and self.active is not None

    def _spawn_position(self) -> Tuple[int, int]:
        return spawn_position(self.board, self.config.spawn_row)

    def _reset_lock_timing(self) -> None:
        self.drop_accum_ms = 0.0
        self.lock_timer_ms = 0.0
        self.lock_resets = 0
        self.grounded = False

    def _end_game(self, reason: str) -> None:
        self.game_over = True
        self.active = None
        LOGGER.info("Game over (%s). Score: %d", reason, self.progress.score)

    # ------------------------------------------------------------------
    # Piece state machine
    # ------------------------------------------------------------------
    def spawn_tetromino(self) -> Optional[Tetromino]:
        """Spawn and return a new active tetromino.

        The front of the next queue becomes active and the queue is topped up
        from the bag.  Hold becomes available again and lock timing restarts.
        If the spawn cells collide with the board the game ends and no piece
        is placed.
        """

        shape = self.queue.pop()
        piece = Tetromino(shape, rotation=0, position=self._spawn_position())
        self.can_hold = True
        self._reset_lock_timing()

        if not is_valid_position(self.board, piece, piece.position, piece.rotation):
            self._end_game("spawn blocked")
            return None

        self.active = piece
        LOGGER.debug("Spawned %s at %s", shape.value, piece.position)
        return piece

    def _lock_reset(self) -> None:
        """Restart the lock delay after a successful move while grounded.

        Resets are limited by ``max_lock_resets``; once the budget is spent the
        piece stays grounded and the timer keeps running.
        """

        if not self.grounded:
            return
        if self.lock_resets < self.config.max_lock_resets:
            self.lock_timer_ms = 0.0
            self.lock_resets += 1
            self.grounded = False

    def move(self, dx: int) -> bool:
        """Shift the active piece one column; return ``True`` if it moved."""

        if dx not in (-1, 1):
            raise ValueError("dx must be -1 or 1")
        if not self.accepting_input:
            return False
        assert self.active is not None
        if not can_move(self.board, self.active, dx, 0):
            return False
        self.active.move(dx, 0)
        self._lock_reset()
        return True

    def rotate(self, direction: int) -> bool:
        """Rotate the active piece using SRS kicks; return ``True`` on success.

        ``direction`` is ``-1`` (counter-clockwise), ``1`` (clockwise) or ``2``
        (180 degrees).  The unmodified placement is tried first, then each kick
        offset for the ``from -> to`` transition.  The first collision-free
        candidate is committed; if none fits the piece is left untouched.
        """

        if direction not in (ROTATE_CCW, ROTATE_CW, ROTATE_180):
            raise ValueError("direction must be -1, 1 or 2")
        if not self.accepting_input:
            return False
        piece = self.active
        assert piece is not None

        from_state = piece.rotation
        to_state = (from_state + direction) % 4
        row, col = piece.position
        for dx, dy in kick_offsets(piece.shape, from_state, to_state):
            candidate = (row + dy, col + dx)
            if is_valid_position(self.board, piece, candidate, to_state):
                piece.position = candidate
                piece.rotation = to_state
                self._lock_reset()
                return True
        return False

    def soft_drop(self) -> bool:
        """Move the active piece down one row if possible.

        Returns ``True`` when the piece moved.  No points are awarded here; the
        caller decides whether the step earns soft-drop score.
        """

        if not self.accepting_input:
            return False
        assert self.active is not None
        if can_move(self.board, self.active, 0, 1):
            self.active.move(0, 1)
            return True
        return False

    def gravity_step(self) -> bool:
        """Apply one gravity row; mark the piece grounded if it cannot fall."""

        if self.soft_drop():
            return True
        if self.accepting_input and not self.grounded:
            self.grounded = True
            self.lock_timer_ms = 0.0
        return False

    def hard_drop(self) -> Optional[LockResult]:
        """Drop the active piece to the floor and lock it immediately."""

        if not self.accepting_input:
            return None
        assert self.active is not None
        distance = 0
        while can_move(self.board, self.active, 0, 1):
            self.active.move(0, 1)
            distance += 1
        self.progress.add_points(distance * HARD_DROP_POINTS)
        self.can_hold = False
        return self.lock_piece()

    def swap_hold(self) -> bool:
        """Swap the active piece with the held one.

        Implements the standard Tetris hold mechanic.  The swap may only happen
        once per spawned piece; additional calls are ignored until another piece
        is spawned.  A piece coming out of hold is placed at the spawn position
        without the spawn collision check; an empty hold slot instead spawns
        the next queued piece, which can end the game.
        """

        if not self.accepting_input or not self.can_hold:
            return False
        assert self.active is not None

        current = self.active.shape
        if self.held is None:
            self.spawn_tetromino()
        else:
            self.active = Tetromino(self.held, rotation=0, position=self._spawn_position())
        self.held = current
        self.can_hold = False
        self._reset_lock_timing()
        LOGGER.debug("Held %s", current.value)
        return True

    def ghost_position(self) -> Optional[Tuple[int, int]]:
        """Return where the active piece would land on a hard drop."""

        if self.active is None:
            return None
        return ghost_position(self.board, self.active)

    # ------------------------------------------------------------------
    # Lock & clear
    # ------------------------------------------------------------------
    def advance_lock_timer(self, elapsed_ms: float) -> Optional[LockResult]:
        """Run the lock delay for a grounded piece, locking once it expires."""

        if not self.grounded or not self.accepting_input:
            return None
        self.lock_timer_ms += elapsed_ms
        if self.lock_timer_ms >= self.config.lock_delay_ms:
            return self.lock_piece()
        return None

    def lock_piece(self) -> LockResult:
        """Write the active piece into the board and resolve the lock.

        Cells still above the board mark a top-out, which ends the game with
        no clear or score.  Otherwise T-Spin status is taken from the board as
        it was before this lock, full rows are collapsed, the clear is scored,
        and the next piece spawns.

        Raises:
            RuntimeError: If there is no active piece to lock.
        """

        piece = self.active
        if piece is None:
            raise RuntimeError("No active piece to lock")

        t_spin = classify_t_spin(self.board, piece)

        value = PIECE_VALUES[piece.shape]
        top_out = False
        for row, col in piece.blocks():
            if row < 0:
                top_out = True
                continue
            self.board.set_cell(row, col, value)
        self.pieces += 1
        self.active = None

        if top_out:
            result = LockResult(shape=piece.shape, top_out=True)
            self.last_lock = result
            self._end_game("top out")
            return result

        cleared_rows = self.board.clear_full_rows()
        lines = len(cleared_rows)
        score_delta = 0
        if lines:
            score_delta = calculate_score(self.progress, lines, t_spin)
            self.progress.lines += lines
            self.progress.level = level_for_lines(self.progress.lines)
            LOGGER.debug("Cleared rows %s, level %d", cleared_rows, self.progress.level)
        else:
            self.progress.break_combo()

        result = LockResult(
            shape=piece.shape,
            lines_cleared=lines,
            cleared_rows=tuple(cleared_rows),
            t_spin=t_spin,
            score_delta=score_delta,
        )
        self.last_lock = result
        LOGGER.debug("Locked %s at %s", piece.shape.value, piece.position)
        self.spawn_tetromino()
        return result
