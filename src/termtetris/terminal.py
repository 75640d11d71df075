"""ANSI terminal front-end: raw mode, key input and rendering.

Nothing in here knows about game rules; it only implements the
:class:`~termtetris.interfaces.Display` and
:class:`~termtetris.interfaces.InputSource` capabilities for a real terminal.
"""

from __future__ import annotations

import os
import select
import sys
import termios
import tty
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

from .board import HEIGHT, WIDTH
from .interfaces import Key, PollResult
from .scoring import Score
from .tetromino import Block, Color, Piece

ESC = "\x1b"
CSI = ESC + "["

BORDER_COLOR = Color.WHITE

# Screen position of board cell (1, 1) is one border cell down and right.
BOARD_TOP = 1
BOARD_LEFT = 1

# Arrow keys arrive as ``ESC [ <letter>``.
ARROW_SEQUENCE_LENGTH = 3
_ARROWS = {
    ord("A"): Key.UP,
    ord("B"): Key.DOWN,
    ord("C"): Key.RIGHT,
    ord("D"): Key.LEFT,
}


@contextmanager
def raw_mode(fd: int) -> Iterator[None]:
    """Switch the terminal behind ``fd`` to raw mode for the block's duration."""

    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSAFLUSH, saved)


def decode_key(data: bytes) -> Key:
    """Map the bytes of a single key press to a :class:`Key`.

    Anything that is not a complete arrow-key sequence is ``Key.OTHER``.
    """

    if len(data) < ARROW_SEQUENCE_LENGTH or data[0] != 0x1B or data[1] != ord("["):
        return Key.OTHER
    return _ARROWS.get(data[2], Key.OTHER)


class TerminalInput:
    """Read key presses from a terminal file descriptor."""

    def __init__(self, fd: Optional[int] = None) -> None:
        self.fd = sys.stdin.fileno() if fd is None else fd

    def poll(self, timeout_ms: int) -> PollResult:
        ready, _, _ = select.select([self.fd], [], [], max(timeout_ms, 0) / 1000.0)
        return PollResult.READY if ready else PollResult.TIMEOUT

    def read(self) -> Key:
        return decode_key(os.read(self.fd, ARROW_SEQUENCE_LENGTH))


class TerminalDisplay:
    """Render the board, next piece and score with ANSI escape sequences.

    ``scale`` is the number of characters used for one cell horizontally.
    """

    def __init__(self, stream: Optional[TextIO] = None, scale: int = 1) -> None:
        self.stream = stream or sys.stdout
        self.scale = scale
        self.side_left = BOARD_LEFT + (WIDTH + 2) * scale + 2

    # Low level helpers ------------------------------------------------
    def _write(self, text: str) -> None:
        self.stream.write(text)

    def _move(self, row: int, col: int) -> None:
        self._write(f"{CSI}{row};{col}H")

    def _cell(self, row: int, col: int, color: Color) -> None:
        self._move(row, col)
        self._write(f"{CSI}{40 + int(color)}m" + " " * self.scale + f"{CSI}0m")

    def _text(self, row: int, col: int, text: str) -> None:
        self._move(row, col)
        self._write(f"{CSI}0m{text}")

    def _screen_col(self, column: int) -> int:
        return BOARD_LEFT + column * self.scale

    # Display interface ------------------------------------------------
    def init(self) -> None:
        self._write(f"{CSI}?25l{CSI}2J")
        for row in range(BOARD_TOP, BOARD_TOP + HEIGHT + 2):
            self._cell(row, BOARD_LEFT, BORDER_COLOR)
            self._cell(row, self._screen_col(WIDTH + 1), BORDER_COLOR)
        for column in range(1, WIDTH + 1):
            self._cell(BOARD_TOP, self._screen_col(column), BORDER_COLOR)
            self._cell(BOARD_TOP + HEIGHT + 1, self._screen_col(column), BORDER_COLOR)
        self._text(BOARD_TOP + 1, self.side_left, "Next")
        self.flush()

    def close(self) -> None:
        self._write(f"{CSI}0m{CSI}?25h")
        self._move(BOARD_TOP + HEIGHT + 3, 1)
        self.flush()

    def flush(self) -> None:
        self.stream.flush()

    def print_block(self, block: Block) -> None:
        if block.row < 1 or block.column < 1:
            return
        self._cell(BOARD_TOP + block.row, self._screen_col(block.column), block.color)

    def print_piece(self, piece: Piece) -> None:
        for block in piece.blocks:
            self.print_block(block)

    def print_next_piece(self, piece: Piece) -> None:
        # Spawn rows -1..0 and columns 4..7 land inside the preview box.
        for block in piece.blocks:
            row = BOARD_TOP + 3 + block.row
            col = self.side_left + (block.column - 4) * self.scale
            self._cell(row, col, block.color)

    def print_score(self, score: Score) -> None:
        top = BOARD_TOP + 6
        self._text(top, self.side_left, f"Level: {score.level:<6}")
        self._text(top + 1, self.side_left, f"Score: {score.score:<8}")
        self._text(top + 2, self.side_left, f"Bonus: x{score.bonus:<5}")
