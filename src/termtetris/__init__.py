"""Terminal Tetris engine."""

from .board import Board
from .tetromino import (
    Block,
    Color,
    Piece,
    RandomGenerator,
    TetrominoType,
    rotate_clockwise,
    rotate_counter_clockwise,
    spawn,
    translate,
)
from .scoring import LEVEL_TABLE, LevelEntry, Score, Scoring, fall_interval
from .game_state import Game, GameState
from .interfaces import Key, PollResult
from .scheduler import LoopScheduler
from .scores import ScoreEntry, ScoreStore
from .utils import (
    can_fall,
    collides_with_board,
    fully_in_bounds,
    in_bounds_bottom,
    in_bounds_columns,
)

__all__ = [
    "Board",
    "Block",
    "Color",
    "Piece",
    "RandomGenerator",
    "TetrominoType",
    "rotate_clockwise",
    "rotate_counter_clockwise",
    "spawn",
    "translate",
    "LEVEL_TABLE",
    "LevelEntry",
    "Score",
    "Scoring",
    "fall_interval",
    "Game",
    "GameState",
    "Key",
    "PollResult",
    "LoopScheduler",
    "ScoreEntry",
    "ScoreStore",
    "can_fall",
    "collides_with_board",
    "fully_in_bounds",
    "in_bounds_bottom",
    "in_bounds_columns",
]
