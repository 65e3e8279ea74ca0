"""Intent, tick and query boundary of the engine.

A host owns one :class:`GameSession`, forwards abstract input intents to
:meth:`GameSession.press` / :meth:`GameSession.release`, calls
:meth:`GameSession.tick` once per frame with the elapsed milliseconds, and
reads state back through the query properties or :meth:`GameSession.view`.

Each tick runs, in order:

1. auto-repeat of held horizontal moves and soft drop,
2. gravity, which grounds the piece when a due row cannot be fallen,
3. the lock delay of a grounded piece.

Nothing advances while the session is paused or over.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple
import copy
import logging

from .board import Board
from .config import DEFAULT_CONFIG, SOFT_DROP_POINTS, EngineConfig
from .game_state import ROTATE_180, ROTATE_CCW, ROTATE_CW, GameState, LockResult
from .highscore import HighScoreStore, MemoryHighScoreStore
from .randomizer import SevenBag
from .tetromino import Tetromino, TetrominoType
from .timing import InputState
from .utils import gravity_interval_ms, render_grid


LOGGER = logging.getLogger(__name__)


class Intent(str, Enum):
    """Abstract player actions delivered by an input collaborator."""

    MOVE_LEFT = "moveLeft"
    MOVE_RIGHT = "moveRight"
    SOFT_DROP = "softDrop"
    ROTATE_CW = "rotateCW"
    ROTATE_CCW = "rotateCCW"
    ROTATE_180 = "rotate180"
    HARD_DROP = "hardDrop"
    HOLD = "hold"
    TOGGLE_PAUSE = "togglePause"
    RESET = "reset"


_ROTATIONS = {
    Intent.ROTATE_CW: ROTATE_CW,
    Intent.ROTATE_CCW: ROTATE_CCW,
    Intent.ROTATE_180: ROTATE_180,
}


@dataclass(frozen=True)
class GameView:
    """Read-only snapshot handed to renderers."""

    board: List[List[int]]
    active: Optional[Tetromino]
    ghost: Optional[Tuple[int, int]]
    held: Optional[TetrominoType]
    can_hold: bool
    next_pieces: Tuple[TetrominoType, ...]
    score: int
    high_score: int
    level: int
    lines: int
    combo: int
    back_to_back: bool
    game_over: bool
    paused: bool


class GameSession:
    """One playable session: game state, held inputs and high-score store."""

    def __init__(
        self,
        *,
        config: EngineConfig = DEFAULT_CONFIG,
        store: Optional[HighScoreStore] = None,
        seed: Optional[int] = None,
        deterministic_bag: bool = False,
    ) -> None:
        self.config = config
        self.store: HighScoreStore = store if store is not None else MemoryHighScoreStore()
        self.state = GameState(
            config=config, bag=SevenBag(seed=seed, deterministic=deterministic_bag)
        )
        self.input = InputState()
        self.state.progress.high_score = self.store.load()
        self._saved_high_score = self.state.progress.high_score
        self.reset()

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Start a new game, keeping only the high score."""

        self.input.clear()
        self._end_saved = False
        self.state.reset_game()
        self._sync_high_score()
        LOGGER.info("New game started")

    def toggle_pause(self) -> bool:
        """Flip the paused flag; ignored once the game is over."""

        if self.state.game_over:
            return False
        self.state.paused = not self.state.paused
        LOGGER.info("Paused" if self.state.paused else "Resumed")
        return True

    def press(self, intent: Intent) -> bool:
        """Apply an intent; return ``True`` if it changed anything.

        Everything except ``RESET`` is ignored once the game is over, and
        everything except ``TOGGLE_PAUSE`` and ``RESET`` is ignored while paused.
        """

        intent = Intent(intent)
        if intent is Intent.RESET:
            self.reset()
            return True
        if intent is Intent.TOGGLE_PAUSE:
            return self.toggle_pause()
        if self.state.game_over or self.state.paused:
            return False

        changed = self._apply(intent)
        self._sync_high_score()
        return changed

    def release(self, intent: Intent) -> None:
        """Stop repeating a held intent.  Releases are always accepted."""

        intent = Intent(intent)
        if intent is Intent.MOVE_LEFT:
            self.input.left.release()
        elif intent is Intent.MOVE_RIGHT:
            self.input.right.release()
        elif intent is Intent.SOFT_DROP:
            self.input.down.release()

    def _apply(self, intent: Intent) -> bool:
        state = self.state
        if intent is Intent.MOVE_LEFT:
            if self.input.left.held:
                return False
            self.input.left.press()
            return state.move(-1)
        if intent is Intent.MOVE_RIGHT:
            if self.input.right.held:
                return False
            self.input.right.press()
            return state.move(1)
        if intent is Intent.SOFT_DROP:
            if self.input.down.held:
                return False
            self.input.down.press(self.config.arr_ms)
            return True
        if intent in _ROTATIONS:
            return state.rotate(_ROTATIONS[intent])
        if intent is Intent.HARD_DROP:
            return state.hard_drop() is not None
        if intent is Intent.HOLD:
            return state.swap_hold()
        return False

    # ------------------------------------------------------------------
    # Timing
    # ------------------------------------------------------------------
    def tick(self, elapsed_ms: float) -> Optional[LockResult]:
        """Advance the session by ``elapsed_ms`` milliseconds.

        Returns the lock result if a piece locked because its lock delay ran
        out during this tick.

        Raises:
            ValueError: If ``elapsed_ms`` is negative.
        """

        if elapsed_ms < 0:
            raise ValueError("elapsed_ms must be non-negative")
        state = self.state
        if state.game_over or state.paused:
            return None

        self._update_input(elapsed_ms)
        lock_elapsed = self._update_gravity(elapsed_ms)
        result = state.advance_lock_timer(lock_elapsed)
        self._sync_high_score()
        return result

    def _update_input(self, elapsed_ms: float) -> None:
        state = self.state
        cfg = self.config
        limit = state.board.width
        for repeat, dx in ((self.input.left, -1), (self.input.right, 1)):
            for _ in range(repeat.update(elapsed_ms, cfg.das_ms, cfg.arr_ms, limit)):
                if not state.move(dx):
                    break

        steps = self.input.down.update(elapsed_ms, cfg.arr_ms, state.board.height + 2)
        for _ in range(steps):
            if not state.soft_drop():
                break
            state.progress.add_points(SOFT_DROP_POINTS)

    def _update_gravity(self, elapsed_ms: float) -> float:
        """Apply due gravity rows; return the time the lock timer should see.

        A piece that becomes grounded partway through a long tick only spends
        the remainder of that tick on its lock delay.
        """

        state = self.state
        if not state.accepting_input:
            return 0.0
        interval = gravity_interval_ms(
            state.progress.level,
            soft_drop=self.input.down.held,
            speeds=self.config.level_speeds_ms,
            soft_drop_multiplier=self.config.soft_drop_multiplier,
        )
        state.drop_accum_ms += elapsed_ms
        lock_elapsed = elapsed_ms
        while state.drop_accum_ms >= interval:
            state.drop_accum_ms -= interval
            was_grounded = state.grounded
            if not state.gravity_step():
                if not was_grounded:
                    lock_elapsed = min(elapsed_ms, state.drop_accum_ms)
                state.drop_accum_ms = 0.0
                break
        return lock_elapsed

    def _sync_high_score(self) -> None:
        """Persist a new high score, and the final one when the game ends."""

        progress = self.state.progress
        ended = self.state.game_over and not self._end_saved
        if progress.high_score > self._saved_high_score or ended:
            self.store.save(progress.high_score)
            self._saved_high_score = progress.high_score
        if ended:
            self._end_saved = True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def active(self) -> Optional[Tetromino]:
        return self.state.active

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    @property
    def paused(self) -> bool:
        return self.state.paused

    @property
    def score(self) -> int:
        return self.state.progress.score

    @property
    def high_score(self) -> int:
        return self.state.progress.high_score

    @property
    def level(self) -> int:
        return self.state.progress.level

    @property
    def lines(self) -> int:
        return self.state.progress.lines

    @property
    def next_pieces(self) -> Tuple[TetrominoType, ...]:
        return self.state.queue.peek()

    def ghost_position(self) -> Optional[Tuple[int, int]]:
        return self.state.ghost_position()

    def render_grid(self, *, ghost: bool = True) -> List[List[int]]:
        return render_grid(self.state.board, self.state.active, ghost=ghost)

    def view(self) -> GameView:
        """Return a detached snapshot of everything a renderer draws."""

        state = self.state
        progress = state.progress
        return GameView(
            board=state.board.to_list(),
            active=copy.copy(state.active),
            ghost=state.ghost_position(),
            held=state.held,
            can_hold=state.can_hold,
            next_pieces=state.queue.peek(),
            score=progress.score,
            high_score=progress.high_score,
            level=progress.level,
            lines=progress.lines,
            combo=progress.combo,
            back_to_back=progress.back_to_back,
            game_over=state.game_over,
            paused=state.paused,
        )
