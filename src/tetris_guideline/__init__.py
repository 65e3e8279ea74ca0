"""Guideline Tetris rule engine: 7-bag, SRS kicks, hold, lock delay, T-Spins."""

from .board import Board, COLS, ROWS
from .config import EngineConfig
from .game_state import GameState, LockResult
from .highscore import JsonHighScoreStore, MemoryHighScoreStore
from .randomizer import PieceQueue, SevenBag
from .scoring import Progress, calculate_score
from .session import GameSession, GameView, Intent
from .tetromino import Tetromino, TetrominoType, shape_blocks, shape_matrix
from .tspin import TSpinInfo, classify_t_spin
from .utils import can_move, ghost_position, gravity_interval_ms, render_grid

__all__ = [
    "Board",
    "COLS",
    "ROWS",
    "EngineConfig",
    "GameState",
    "LockResult",
    "GameSession",
    "GameView",
    "Intent",
    "JsonHighScoreStore",
    "MemoryHighScoreStore",
    "PieceQueue",
    "SevenBag",
    "Progress",
    "calculate_score",
    "Tetromino",
    "TetrominoType",
    "TSpinInfo",
    "classify_t_spin",
    "can_move",
    "ghost_position",
    "gravity_interval_ms",
    "render_grid",
    "shape_blocks",
    "shape_matrix",
]
