"""Board representation for the Tetris playfield.

The board is addressed with 1-based coordinates: rows ``1..HEIGHT`` from top
to bottom and columns ``1..WIDTH`` from left to right.  Internally the cells
live in a flat-indexable numpy array holding the :class:`Color` of each
settled block, ``0`` marking an empty cell.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

import numpy as np
from numpy.typing import NDArray

from .tetromino import EMPTY, Block, Color


# Dimensions of the standard Tetris board.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


def in_range(row: int, col: int) -> bool:
    """Return ``True`` if ``(row, col)`` addresses a cell of the board."""

    return 1 <= row <= HEIGHT and 1 <= col <= WIDTH


class Board:
    """Tetris board holding the settled blocks."""

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()

    def has_block(self, row: int, col: int) -> bool:
        """Return ``True`` if ``(row, col)`` is occupied.

        Coordinates outside the board are simply reported as empty.
        """

        if in_range(row, col):
            return bool(self.grid[row - 1, col - 1] != EMPTY)
        return False

    def get(self, row: int, col: int) -> Optional[Block]:
        """Return the block stored at ``(row, col)``, or ``None``."""

        if not self.has_block(row, col):
            return None
        return Block(row, col, Color(int(self.grid[row - 1, col - 1])))

    def set(self, block: Block) -> None:
        """Store ``block`` at its own coordinates.

        Raises:
            IndexError: If the block lies outside the board.
            ValueError: If the block carries the empty color.
        """

        if not in_range(block.row, block.column):
            raise IndexError(f"Block out of bounds: ({block.row}, {block.column})")
        if block.color == EMPTY:
            raise ValueError("Cannot store a block with the empty color")
        self.grid[block.row - 1, block.column - 1] = np.uint8(block.color)

    def remove(self, row: int, col: int) -> None:
        """Clear the cell at ``(row, col)``; clearing an empty cell is a no-op.

        Raises:
            IndexError: If the coordinates are outside the board.
        """

        if not in_range(row, col):
            raise IndexError(f"Cell out of bounds: ({row}, {col})")
        self.grid[row - 1, col - 1] = EMPTY

    def blocks(self) -> Iterator[Block]:
        """Yield every settled block, top row first."""

        rows, cols = np.nonzero(self.grid)
        for r, c in zip(rows.tolist(), cols.tolist()):
            yield Block(r + 1, c + 1, Color(int(self.grid[r, c])))

    # Line clearing ----------------------------------------------------
    def is_row_complete(self, row: int) -> bool:
        """Return ``True`` if every column of ``row`` is occupied.

        Rows outside the board are never complete.
        """

        if not 1 <= row <= self.height:
            return False
        return bool(np.all(self.grid[row - 1] != EMPTY))

    def completed_rows(self) -> List[int]:
        """Return the numbers of all complete rows, top to bottom."""

        full = np.all(self.grid != EMPTY, axis=1)
        return [int(r) + 1 for r in np.flatnonzero(full)]

    def completed_row_count(self) -> int:
        """Return how many rows are currently complete."""

        return int(np.count_nonzero(np.all(self.grid != EMPTY, axis=1)))

    def compact_row(self, row: int) -> None:
        """Remove ``row`` by dropping every row above it down by one.

        Row 1 ends up empty.  Rows below ``row`` are untouched.
        """

        idx = row - 1
        if idx > 0:
            self.grid[1 : idx + 1] = self.grid[0:idx].copy()
        self.grid[0] = EMPTY

    def clear_completed_rows(self) -> int:
        """Clear all complete rows in a single bottom-up pass.

        After a row is compacted the rows above have shifted into its slot, so
        the same row number is examined again before moving up.  Returns the
        number of rows removed.
        """

        cleared = 0
        row = self.height
        while row >= 1:
            if self.is_row_complete(row):
                self.compact_row(row)
                cleared += 1
            else:
                row -= 1
        return cleared
