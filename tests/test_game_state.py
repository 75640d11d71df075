from datetime import datetime
from typing import List

from termtetris.board import WIDTH
from termtetris.game_state import GAME_OVER_DELAY_MS, LOCK_DELAY_MS, Game, GameState
from termtetris.interfaces import Key
from termtetris.tetromino import Block, Color, TetrominoType, spawn, translate


class FakeDisplay:
    def __init__(self) -> None:
        self.calls: List[tuple] = []

    def init(self) -> None:
        self.calls.append(("init",))

    def close(self) -> None:
        self.calls.append(("close",))

    def flush(self) -> None:
        self.calls.append(("flush",))

    def print_block(self, block) -> None:
        self.calls.append(("block", block))

    def print_piece(self, piece) -> None:
        self.calls.append(("piece", piece))

    def print_next_piece(self, piece) -> None:
        self.calls.append(("next", piece))

    def print_score(self, score) -> None:
        self.calls.append(("score", score))


class FakeGenerator:
    def __init__(self, *types: TetrominoType) -> None:
        self.types = list(types)
        self.index = 0

    def next(self):
        t_type = self.types[self.index % len(self.types)]
        self.index += 1
        return spawn(t_type)


class FakeKeeper:
    def __init__(self) -> None:
        self.stored: List[tuple] = []

    def store(self, timestamp, score) -> None:
        self.stored.append((timestamp, score))


NOW = datetime(2024, 5, 1, 12, 0, 0)


def make_game(*types: TetrominoType):
    display = FakeDisplay()
    keeper = FakeKeeper()
    game = Game(display, FakeGenerator(*(types or (TetrominoType.I,))), keeper, clock=lambda: NOW)
    return game, display, keeper


def test_start_draws_and_returns_fall_interval():
    game, display, _ = make_game(TetrominoType.I, TetrominoType.O)
    assert game.start() == 1000
    assert ("next", spawn(TetrominoType.O)) in display.calls
    assert display.calls[-1] == ("flush",)
    assert game.state is GameState.FALLING


def test_fall_step_moves_piece_down_and_erases_first():
    game, display, _ = make_game(TetrominoType.I)
    before = game.piece
    assert game.step() == 1000
    assert game.piece == translate(before, 1, 0)
    kinds = [call[0] for call in display.calls]
    assert kinds == ["piece", "piece", "flush"]
    erased, drawn = display.calls[0][1], display.calls[1][1]
    assert all(b.color == Color.BLACK for b in erased.blocks)
    assert drawn == game.piece


def test_lock_without_clear_pulls_next_piece():
    game, _, _ = make_game(TetrominoType.I, TetrominoType.O, TetrominoType.T)
    game.piece = translate(game.piece, 20, 0)
    assert game.step() == LOCK_DELAY_MS
    assert game.state is GameState.FALLING
    assert all(game.board.has_block(20, col) for col in range(4, 8))
    assert game.piece == spawn(TetrominoType.O)
    assert game.next_piece == spawn(TetrominoType.T)
    assert game.score.score == 0


def test_lock_completing_row_clears_it_on_next_step():
    game, display, _ = make_game(TetrominoType.I, TetrominoType.O)
    for col in (1, 2, 3, 8, 9, 10):
        game.board.set(Block(20, col, Color.RED))
    game.board.set(Block(19, 1, Color.GREEN))
    game.piece = translate(game.piece, 20, 0)

    assert game.step() == LOCK_DELAY_MS
    assert game.state is GameState.CLEARING_ROWS
    assert game.score.score == 10
    erased_row = [c[1] for c in display.calls if c[0] == "block" and c[1].row == 20]
    assert len(erased_row) == WIDTH
    assert all(b.color == Color.BLACK for b in erased_row)

    assert game.step() == LOCK_DELAY_MS
    assert game.state is GameState.FALLING
    assert game.board.get(20, 1) == Block(20, 1, Color.GREEN)
    assert game.board.completed_row_count() == 0
    assert sum(1 for _ in game.board.blocks()) == 1


def test_blocked_spawn_ends_game_and_stores_score_once():
    game, _, keeper = make_game(TetrominoType.I)
    game.board.set(Block(1, 5, Color.RED))

    assert game.step() == GAME_OVER_DELAY_MS
    assert game.state is GameState.GAME_OVER
    assert keeper.stored == []

    assert game.step() is None
    assert keeper.stored == [(NOW, 0)]
    assert game.handle_input(Key.UP) is True
    assert game.handle_input(Key.OTHER) is True
    assert keeper.stored == [(NOW, 0)]


def test_unknown_key_quits_and_stores_score():
    game, _, keeper = make_game(TetrominoType.T)
    assert game.handle_input(Key.OTHER) is False
    assert game.handle_input(Key.OTHER) is False
    assert keeper.stored == [(NOW, 0)]


def test_move_into_wall_is_rejected_without_redraw():
    game, display, _ = make_game(TetrominoType.I)
    game.piece = translate(game.piece, 5, -3)
    before = game.piece
    assert game.handle_input(Key.LEFT) is True
    assert game.piece == before
    assert display.calls == []

    assert game.handle_input(Key.RIGHT) is True
    assert game.piece == translate(before, 0, 1)


def test_move_into_settled_block_is_rejected():
    game, _, _ = make_game(TetrominoType.O)
    game.piece = translate(game.piece, 10, 0)
    game.board.set(Block(10, 7, Color.RED))
    before = game.piece
    game.handle_input(Key.RIGHT)
    assert game.piece == before


def test_rotation_near_floor_is_rejected():
    game, _, _ = make_game(TetrominoType.I)
    game.piece = translate(game.piece, 19, 0)
    before = game.piece
    game.handle_input(Key.UP)
    assert game.piece == before


def test_rotation_applies_clockwise():
    game, _, _ = make_game(TetrominoType.T)
    game.piece = translate(game.piece, 5, 0)
    game.handle_input(Key.UP)
    assert game.piece.orientation == 1


def test_quick_drop_lands_on_stack_with_single_redraw():
    game, display, _ = make_game(TetrominoType.I)
    game.board.set(Block(15, 6, Color.RED))
    game.handle_input(Key.DOWN)
    assert {b.row for b in game.piece.blocks} == {14}
    assert [c[0] for c in display.calls] == ["piece", "piece", "flush"]


def test_moving_off_a_settled_block_redraws_it():
    game, display, _ = make_game(TetrominoType.O)
    game.piece = translate(game.piece, 10, 0)
    # A block shifted down by row compaction can end up under the active piece.
    shifted = Block(10, 5, Color.RED)
    game.board.set(shifted)

    game.handle_input(Key.RIGHT)

    kinds = [call[0] for call in display.calls]
    assert kinds == ["piece", "block", "piece", "flush"]
    assert display.calls[1] == ("block", shifted)
