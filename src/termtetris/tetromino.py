"""Tetromino definitions and the pure transforms applied to them.

Pieces are immutable values.  Every transform (rotation or translation)
returns a brand new :class:`Piece`; nothing in here mutates a block in place.

Rotation is table driven.  For every piece type and every orientation there is
a tuple of four ``(drow, dcol)`` offsets, one per block, that moves the piece
from that orientation to the next one clockwise.  The tables are generated
once at import time from the spawn templates, much like the rotation states of
a shape are derived from its base shape, and are read-only afterwards.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, List, Optional, Tuple

Offset = Tuple[int, int]
RotationOffsets = Tuple[Offset, Offset, Offset, Offset]

ORIENTATIONS = 4


class Color(IntEnum):
    """The eight ANSI terminal colors.  ``BLACK`` is the background."""

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7


EMPTY = Color.BLACK


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    J = "J"
    L = "L"
    O = "O"
    S = "S"
    T = "T"
    Z = "Z"


@dataclass(frozen=True)
class Block:
    """A single colored cell at board coordinates ``(row, column)``.

    Rows and columns are 1-based.  A block belonging to a freshly spawned
    piece may sit at row ``0`` or ``-1``, above the visible board.
    """

    row: int
    column: int
    color: Color

    def translated(self, drow: int, dcol: int) -> "Block":
        return Block(self.row + drow, self.column + dcol, self.color)

    def recolored(self, color: Color) -> "Block":
        return Block(self.row, self.column, color)


@dataclass(frozen=True)
class Piece:
    """Active falling piece: its type, orientation index and four blocks."""

    type: TetrominoType
    orientation: int
    blocks: Tuple[Block, ...]

    def recolored(self, color: Color) -> "Piece":
        """Return the same piece drawn in ``color`` (used for erasing)."""

        return Piece(self.type, self.orientation, tuple(b.recolored(color) for b in self.blocks))


# Spawn layout for each type in orientation 0.  Block order matters: the
# rotation tables below address blocks by their index in this tuple.
_SPAWN_CELLS: Dict[TetrominoType, Tuple[Offset, ...]] = {
    TetrominoType.I: ((0, 4), (0, 5), (0, 6), (0, 7)),
    TetrominoType.J: ((-1, 4), (0, 4), (0, 5), (0, 6)),
    TetrominoType.L: ((-1, 6), (0, 4), (0, 5), (0, 6)),
    TetrominoType.O: ((-1, 5), (-1, 6), (0, 5), (0, 6)),
    TetrominoType.S: ((-1, 5), (-1, 6), (0, 4), (0, 5)),
    TetrominoType.T: ((-1, 5), (0, 4), (0, 5), (0, 6)),
    TetrominoType.Z: ((-1, 4), (-1, 5), (0, 5), (0, 6)),
}

SPAWN_COLORS: Dict[TetrominoType, Color] = {
    TetrominoType.I: Color.CYAN,
    TetrominoType.J: Color.BLUE,
    TetrominoType.L: Color.WHITE,
    TetrominoType.O: Color.YELLOW,
    TetrominoType.S: Color.GREEN,
    TetrominoType.T: Color.MAGENTA,
    TetrominoType.Z: Color.RED,
}

# Rotation pivots in doubled coordinates so that the I piece can turn about the
# centre of a cell corner.  ``None`` means the shape never moves when rotated.
_PIVOTS: Dict[TetrominoType, Optional[Offset]] = {
    TetrominoType.I: (1, 11),
    TetrominoType.J: (0, 10),
    TetrominoType.L: (0, 10),
    TetrominoType.O: None,
    TetrominoType.S: (0, 10),
    TetrominoType.T: (0, 10),
    TetrominoType.Z: (0, 10),
}


def _rotate_cells(cells: Tuple[Offset, ...], pivot: Offset) -> Tuple[Offset, ...]:
    """Return ``cells`` turned 90 degrees clockwise about ``pivot``.

    ``pivot`` is given in doubled coordinates.  Rows grow downwards, so a cell
    to the right of the pivot ends up below it.
    """

    prow, pcol = pivot
    rotated = []
    for row, col in cells:
        new_row2 = prow + (2 * col - pcol)
        new_col2 = pcol - (2 * row - prow)
        rotated.append((new_row2 // 2, new_col2 // 2))
    return tuple(rotated)


def _generate_offsets(t_type: TetrominoType) -> Tuple[RotationOffsets, ...]:
    """Build the clockwise offset table for every orientation of ``t_type``."""

    pivot = _PIVOTS[t_type]
    if pivot is None:
        zero: RotationOffsets = ((0, 0), (0, 0), (0, 0), (0, 0))
        return (zero,) * ORIENTATIONS

    states = [_SPAWN_CELLS[t_type]]
    for _ in range(ORIENTATIONS - 1):
        states.append(_rotate_cells(states[-1], pivot))
    states.append(states[0])

    table = []
    for current, following in zip(states, states[1:]):
        table.append(tuple((nr - r, nc - c) for (r, c), (nr, nc) in zip(current, following)))
    return tuple(table)


ROTATION_OFFSETS: Dict[TetrominoType, Tuple[RotationOffsets, ...]] = {
    t_type: _generate_offsets(t_type) for t_type in TetrominoType
}


def spawn(t_type: TetrominoType) -> Piece:
    """Return a new piece of ``t_type`` at its spawn position, orientation 0."""

    color = SPAWN_COLORS[t_type]
    blocks = tuple(Block(row, col, color) for row, col in _SPAWN_CELLS[t_type])
    return Piece(t_type, 0, blocks)


def _apply_offsets(piece: Piece, orientation: int, offsets: RotationOffsets, sign: int) -> Piece:
    blocks = tuple(
        block.translated(sign * drow, sign * dcol) for block, (drow, dcol) in zip(piece.blocks, offsets)
    )
    return Piece(piece.type, orientation, blocks)


def rotate_clockwise(piece: Piece) -> Piece:
    """Rotate ``piece`` clockwise using the table of its current orientation.

    The O piece has an all-zero table: its orientation index still advances
    but no block moves.
    """

    offsets = ROTATION_OFFSETS[piece.type][piece.orientation]
    return _apply_offsets(piece, (piece.orientation + 1) % ORIENTATIONS, offsets, 1)


def rotate_counter_clockwise(piece: Piece) -> Piece:
    """Rotate ``piece`` counter-clockwise.

    The offsets of the *new* orientation are applied negated, which makes this
    the exact inverse of :func:`rotate_clockwise`.
    """

    orientation = (piece.orientation + ORIENTATIONS - 1) % ORIENTATIONS
    offsets = ROTATION_OFFSETS[piece.type][orientation]
    return _apply_offsets(piece, orientation, offsets, -1)


def translate(piece: Piece, drow: int, dcol: int) -> Piece:
    """Return ``piece`` moved by ``drow`` rows and ``dcol`` columns."""

    return Piece(piece.type, piece.orientation, tuple(b.translated(drow, dcol) for b in piece.blocks))


class RandomGenerator:
    """Piece generator drawing uniformly from the seven types."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()
        self._types: List[TetrominoType] = list(TetrominoType)

    def next(self) -> Piece:
        return spawn(self._rng.choice(self._types))
