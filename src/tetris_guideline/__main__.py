"""Simple ASCII demo for the Tetris engine.

Run with: `python -m tetris_guideline`

This module hard-drops a handful of pieces from a seeded session and prints the
resulting frame, active piece and ghost included, as a minimal smoke test that
renderers see more than a blank grid.
"""

from __future__ import annotations

import logging

from . import GameSession, Intent
from .utils import GHOST_VALUE

_GLYPHS = {0: ".", GHOST_VALUE: "+"}


def _print_grid(grid: list[list[int]]) -> None:
    for row in grid:
        print("".join(_GLYPHS.get(cell, "#") for cell in row))


def main(drops: int = 5) -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    session = GameSession(seed=0)
    for _ in range(drops):
        session.press(Intent.HARD_DROP)
    session.tick(0)
    _print_grid(session.render_grid())
    print(f"Score: {session.score}  Next: {' '.join(p.value for p in session.next_pieces)}")


if __name__ == "__main__":
    main()
