"""Collision and bounds predicates for the Tetris engine.

All functions here are pure: they only inspect a :class:`Piece` and, where
relevant, a :class:`Board`.
"""

from __future__ import annotations

from .board import HEIGHT, WIDTH, Board
from .tetromino import Piece, translate


def collides_with_board(board: Board, piece: Piece) -> bool:
    """Return ``True`` if any block of ``piece`` sits on a settled block."""

    return any(board.has_block(b.row, b.column) for b in piece.blocks)


def in_bounds_bottom(piece: Piece) -> bool:
    """Return ``True`` if no block is below the last row.

    Blocks above row 1 are allowed; a new piece starts partly above the
    visible board.
    """

    return all(b.row <= HEIGHT for b in piece.blocks)


def in_bounds_columns(piece: Piece) -> bool:
    """Return ``True`` if every block lies within the board's columns."""

    return all(1 <= b.column <= WIDTH for b in piece.blocks)


def fully_in_bounds(piece: Piece) -> bool:
    """Return ``True`` if every block is on a visible board cell."""

    return all(1 <= b.row <= HEIGHT and 1 <= b.column <= WIDTH for b in piece.blocks)


def can_fall(board: Board, piece: Piece) -> bool:
    """Return ``True`` if ``piece`` can move down one row on ``board``."""

    moved = translate(piece, 1, 0)
    return in_bounds_bottom(moved) and not collides_with_board(board, moved)


def can_place(board: Board, piece: Piece) -> bool:
    """Return ``True`` if ``piece`` is a legal player-driven position.

    It is intended for validating rotation and sideways movement before the
    result replaces the active piece.
    """

    return in_bounds_columns(piece) and in_bounds_bottom(piece) and not collides_with_board(board, piece)
