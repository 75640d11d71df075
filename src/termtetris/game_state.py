"""Game state machine driving a single Tetris session."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from .board import Board
from .interfaces import Display, Key, PieceGenerator, ScoreKeeper
from .scoring import Score, Scoring
from .tetromino import EMPTY, Block, Piece, rotate_clockwise, translate
from .utils import can_fall, can_place, fully_in_bounds


LOGGER = logging.getLogger(__name__)

# Milliseconds to wait after a lock and after compacting cleared rows.
LOCK_DELAY_MS = 1000
# Milliseconds the final position stays on screen once the game is lost.
GAME_OVER_DELAY_MS = 500


class GameState(str, Enum):
    """The phase the game is currently in."""

    FALLING = "falling"
    CLEARING_ROWS = "clearing_rows"
    GAME_OVER = "game_over"


def erase_block(display: Display, block: Block) -> None:
    display.print_block(block.recolored(EMPTY))


def erase_piece(display: Display, piece: Piece) -> None:
    display.print_piece(piece.recolored(EMPTY))


def erase_next_piece(display: Display, piece: Piece) -> None:
    display.print_next_piece(piece.recolored(EMPTY))


class Game:
    """Owns the board, the active and upcoming pieces and the score.

    The scheduler drives the game through two entry points: :meth:`step`
    when a timeout elapses and :meth:`handle_input` when a key arrives.
    ``step`` returns the delay until the next step in milliseconds, or
    ``None`` once the game has ended.  ``handle_input`` returns ``False`` when
    the player asked to quit.
    """

    def __init__(
        self,
        display: Display,
        generator: PieceGenerator,
        score_keeper: ScoreKeeper,
        *,
        board: Optional[Board] = None,
        scoring: Optional[Scoring] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.display = display
        self.generator = generator
        self.score_keeper = score_keeper
        self.board = board or Board()
        self.scoring = scoring or Scoring()
        self.clock = clock
        self.state = GameState.FALLING
        self.piece: Piece = generator.next()
        self.next_piece: Piece = generator.next()
        self.finished = False

    @property
    def score(self) -> Score:
        return self.scoring.score

    def start(self) -> int:
        """Draw the initial frame and return the delay until the first step."""

        self.display.print_next_piece(self.next_piece)
        self.display.print_score(self.score)
        self.display.print_piece(self.piece)
        self.display.flush()
        LOGGER.info("Game started with %s, next %s", self.piece.type.value, self.next_piece.type.value)
        return self.scoring.fall_interval()

    # Steps -------------------------------------------------------------
    def step(self) -> Optional[int]:
        if self.state is GameState.FALLING:
            return self._step_falling()
        if self.state is GameState.CLEARING_ROWS:
            return self._step_clearing()
        self._finish()
        return None

    def _step_falling(self) -> int:
        if can_fall(self.board, self.piece):
            self._replace_piece(translate(self.piece, 1, 0))
            return self.scoring.fall_interval()

        if not fully_in_bounds(self.piece):
            LOGGER.info("Game over at score %d", self.score.score)
            self.state = GameState.GAME_OVER
            return GAME_OVER_DELAY_MS

        self._lock_piece()
        rows = self.board.completed_rows()
        if rows:
            for row in rows:
                for col in range(1, self.board.width + 1):
                    self.display.print_block(Block(row, col, EMPTY))
            self.state = GameState.CLEARING_ROWS
        self.display.print_score(self.scoring.update(len(rows)))
        self.display.flush()
        return LOCK_DELAY_MS

    def _step_clearing(self) -> int:
        for block in self.board.blocks():
            erase_block(self.display, block)
        cleared = self.board.clear_completed_rows()
        LOGGER.debug("Compacted %d row(s)", cleared)
        for block in self.board.blocks():
            self.display.print_block(block)
        self.display.print_piece(self.piece)
        self.display.flush()
        self.state = GameState.FALLING
        return LOCK_DELAY_MS

    def _lock_piece(self) -> None:
        for block in self.piece.blocks:
            self.board.set(block)
        LOGGER.debug("Locked %s at %s", self.piece.type.value, [(b.row, b.column) for b in self.piece.blocks])

        erase_next_piece(self.display, self.next_piece)
        self.piece = self.next_piece
        self.next_piece = self.generator.next()
        self.display.print_next_piece(self.next_piece)
        self.display.print_piece(self.piece)

    # Input -------------------------------------------------------------
    def handle_input(self, key: Key) -> bool:
        """React to ``key``.  Returns ``False`` if the game should stop."""

        if self.state is GameState.GAME_OVER:
            return True
        if key is Key.OTHER:
            LOGGER.info("Quit requested at score %d", self.score.score)
            self._finish()
            return False

        candidate = self._moved(key)
        if candidate != self.piece and can_place(self.board, candidate):
            self._replace_piece(candidate)
        return True

    def _moved(self, key: Key) -> Piece:
        if key is Key.UP:
            return rotate_clockwise(self.piece)
        if key is Key.DOWN:
            dropped = self.piece
            while can_fall(self.board, dropped):
                dropped = translate(dropped, 1, 0)
            return dropped
        if key is Key.RIGHT:
            return translate(self.piece, 0, 1)
        if key is Key.LEFT:
            return translate(self.piece, 0, -1)
        raise ValueError(f"Unexpected key: {key!r}")

    def _replace_piece(self, piece: Piece) -> None:
        erase_piece(self.display, self.piece)
        # Compaction may have shifted settled blocks under the old piece.
        for block in self.piece.blocks:
            settled = self.board.get(block.row, block.column)
            if settled is not None:
                self.display.print_block(settled)
        self.piece = piece
        self.display.print_piece(piece)
        self.display.flush()

    def _finish(self) -> None:
        """Hand the final score to the score keeper, exactly once."""

        if self.finished:
            return
        self.finished = True
        self.score_keeper.store(self.clock(), self.score.score)
        LOGGER.info("Final score %d stored", self.score.score)
