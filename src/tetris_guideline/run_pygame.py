"""Simple pygame front-end for the Tetris engine.

This module provides a playable desktop host for :class:`GameSession`.  It
only translates keyboard events into intents, feeds frame times into
``tick`` and draws what the session reports; every rule lives in the engine.
"""

from __future__ import annotations

from typing import Dict, Optional
import argparse
import asyncio
import logging

import pygame

from .board import Board, VALUE_PIECES
from .config import LINE_CLEAR_ANIMATION_MS
from .highscore import JsonHighScoreStore
from .session import GameSession, GameView, Intent
from .tetromino import PIECE_COLORS, TetrominoType, shape_matrix
from .utils import GHOST_VALUE


LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Width of the hold / next side panel in cells
PANEL_CELLS = 6
# Frames per second to run the game loop at
FPS = 60

BACKGROUND = (0, 0, 0)
GRID_LINE = (50, 50, 50)
GHOST_COLOR = (90, 90, 90)
FLASH_COLOR = (255, 255, 255)

KEY_BINDINGS: Dict[int, Intent] = {
    pygame.K_LEFT: Intent.MOVE_LEFT,
    pygame.K_RIGHT: Intent.MOVE_RIGHT,
    pygame.K_DOWN: Intent.SOFT_DROP,
    pygame.K_x: Intent.ROTATE_CW,
    pygame.K_UP: Intent.ROTATE_CW,
    pygame.K_z: Intent.ROTATE_CCW,
    pygame.K_a: Intent.ROTATE_180,
    pygame.K_SPACE: Intent.HARD_DROP,
    pygame.K_c: Intent.HOLD,
    pygame.K_p: Intent.TOGGLE_PAUSE,
    pygame.K_r: Intent.RESET,
}

# Colours for each tetromino type
SHAPE_COLORS = {shape: pygame.Color(hex_color) for shape, hex_color in PIECE_COLORS.items()}


def intent_for_key(key: int) -> Optional[Intent]:
    """Return the intent bound to ``key``, if any."""

    return KEY_BINDINGS.get(key)


def cell_color(value: int) -> pygame.Color:
    """Map a rendered grid value to a colour."""

    if value == GHOST_VALUE:
        return pygame.Color(*GHOST_COLOR)
    shape = VALUE_PIECES.get(value)
    if shape is None:
        return pygame.Color(*BACKGROUND)
    return SHAPE_COLORS[shape]


def draw_board(screen: pygame.Surface, grid: list[list[int]], flash_rows=()) -> None:
    """Render the board grid with active piece and ghost overlaid."""

    for r, row in enumerate(grid):
        for c, value in enumerate(row):
            rect = pygame.Rect(c * CELL_SIZE, r * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            color = FLASH_COLOR if r in flash_rows else cell_color(value)
            pygame.draw.rect(screen, color, rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_mini(screen: pygame.Surface, shape: TetrominoType, left: int, top: int, dim: bool = False) -> None:
    """Render a small preview of ``shape`` in spawn orientation."""

    size = CELL_SIZE // 2
    color = pygame.Color(*GHOST_COLOR) if dim else SHAPE_COLORS[shape]
    for r, row in enumerate(shape_matrix(shape, 0)):
        for c, filled in enumerate(row):
            if filled:
                rect = pygame.Rect(left + c * size, top + r * size, size, size)
                pygame.draw.rect(screen, color, rect)


def draw_panel(screen: pygame.Surface, view: GameView) -> None:
    left = Board.width * CELL_SIZE + CELL_SIZE // 2
    if view.held is not None:
        draw_mini(screen, view.held, left, CELL_SIZE, dim=not view.can_hold)
    for i, shape in enumerate(view.next_pieces[:5]):
        draw_mini(screen, shape, left, CELL_SIZE * (4 + 2 * i))


class GameRunner:
    """Drive a :class:`GameSession` from pygame events and frame times."""

    def __init__(self, session: Optional[GameSession] = None) -> None:
        self.session = session or GameSession()
        self._running = False
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._flash_ms = 0.0
        self._flash_rows: tuple[int, ...] = ()

    @property
    def running(self) -> bool:
        return self._running

    def handle_event(self, event: pygame.event.Event) -> None:
        """Forward a pygame event to the session."""

        if event.type == pygame.QUIT:
            self._running = False
            return
        if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
            return
        intent = intent_for_key(event.key)
        if intent is None:
            return
        if event.type == pygame.KEYDOWN:
            before = self.session.state.last_lock
            self.session.press(intent)
            self._note_lock(before)
        else:
            self.session.release(intent)

    def _note_lock(self, before) -> None:
        lock = self.session.state.last_lock
        if lock is not None and lock is not before and lock.cleared_rows:
            self._flash_rows = lock.cleared_rows
            self._flash_ms = LINE_CLEAR_ANIMATION_MS

    def step(self, dt: float) -> None:
        """Advance the session and the cosmetic line-clear flash."""

        before = self.session.state.last_lock
        self.session.tick(dt)
        self._note_lock(before)
        if self._flash_ms > 0:
            self._flash_ms = max(0.0, self._flash_ms - dt)
            if self._flash_ms == 0:
                self._flash_rows = ()

    def _draw(self) -> None:
        if self._screen is None:
            return
        view = self.session.view()
        self._screen.fill(BACKGROUND)
        draw_board(self._screen, self.session.render_grid(), self._flash_rows)
        draw_panel(self._screen, view)
        status = "Game Over - " if view.game_over else "Paused - " if view.paused else ""
        pygame.display.set_caption(
            f"Tetris - {status}Score: {view.score}  Hi: {view.high_score}  "
            f"Level: {view.level}  Lines: {view.lines}"
        )
        pygame.display.flip()

    async def run(self) -> None:
        pygame.init()
        width = (Board.width + PANEL_CELLS) * CELL_SIZE
        height = Board.height * CELL_SIZE
        self._screen = pygame.display.set_mode((width, height))
        self._clock = pygame.time.Clock()
        self._running = True
        LOGGER.info("Game started")

        while self._running:
            dt = self._clock.tick(FPS)
            for event in pygame.event.get():
                self.handle_event(event)
            self.step(dt)
            self._draw()
            # Yield to the host event loop to keep the UI responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped")


def main() -> None:
    parser = argparse.ArgumentParser(description="Play guideline Tetris with pygame.")
    parser.add_argument("--high-score-file", default=None, help="JSON file for the high score.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece randomizer.")
    parser.add_argument("--log-level", default="INFO", help="Logging level (e.g. DEBUG, INFO).")
    args = parser.parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    store = JsonHighScoreStore(args.high_score_file) if args.high_score_file else None
    runner = GameRunner(GameSession(store=store, seed=args.seed))
    asyncio.run(runner.run())


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
