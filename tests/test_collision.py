from termtetris.board import Board
from termtetris.tetromino import Block, Color, TetrominoType, spawn, translate
from termtetris.utils import (
    can_fall,
    can_place,
    collides_with_board,
    fully_in_bounds,
    in_bounds_bottom,
    in_bounds_columns,
)


def test_spawned_piece_above_board_is_bottom_bounded():
    piece = spawn(TetrominoType.T)
    assert in_bounds_bottom(piece)
    assert in_bounds_columns(piece)
    assert not fully_in_bounds(piece)


def test_piece_at_floor_cannot_fall():
    board = Board()
    piece = translate(spawn(TetrominoType.I), 20, 0)
    assert fully_in_bounds(piece)
    assert not can_fall(board, piece)
    assert can_fall(board, translate(piece, -1, 0))


def test_column_bounds():
    piece = spawn(TetrominoType.I)
    assert in_bounds_columns(translate(piece, 0, 3))
    assert not in_bounds_columns(translate(piece, 0, 4))
    assert not in_bounds_columns(translate(piece, 0, -4))


def test_collision_with_settled_block():
    board = Board()
    board.set(Block(5, 5, Color.RED))
    piece = translate(spawn(TetrominoType.I), 4, 0)
    assert not collides_with_board(board, piece)
    assert not can_fall(board, piece)
    assert collides_with_board(board, translate(piece, 1, 0))
    assert not can_place(board, translate(piece, 1, 0))


def test_can_place_rejects_below_floor():
    piece = translate(spawn(TetrominoType.I), 21, 0)
    assert not can_place(Board(), piece)
