"""Capability interfaces for the engine's external collaborators.

The engine never depends on a concrete terminal or file; it talks to these
small protocols instead.  Test doubles only need to provide the same methods.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Protocol

from .scoring import Score
from .tetromino import Block, Piece


class Key(str, Enum):
    """Decoded player input."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    OTHER = "other"


class PollResult(str, Enum):
    READY = "ready"
    TIMEOUT = "timeout"


class Display(Protocol):
    def init(self) -> None: ...

    def close(self) -> None: ...

    def flush(self) -> None: ...

    def print_block(self, block: Block) -> None: ...

    def print_piece(self, piece: Piece) -> None: ...

    def print_next_piece(self, piece: Piece) -> None: ...

    def print_score(self, score: Score) -> None: ...


class InputSource(Protocol):
    def poll(self, timeout_ms: int) -> PollResult: ...

    def read(self) -> Key: ...


class PieceGenerator(Protocol):
    def next(self) -> Piece: ...


class ScoreKeeper(Protocol):
    def store(self, timestamp: datetime, score: int) -> None: ...
