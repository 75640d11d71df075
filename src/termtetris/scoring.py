"""Score, bonus and level progression."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class LevelEntry:
    """Parameters of a single level."""

    fall_interval_ms: int
    base_line_score: int
    pieces_per_level_up: int
    bonus_increment: int


LEVEL_TABLE: Tuple[LevelEntry, ...] = (
    LevelEntry(1000, 0, 3, 1),
    LevelEntry(850, 5, 4, 1),
    LevelEntry(700, 10, 5, 1),
    LevelEntry(600, 15, 5, 2),
    LevelEntry(500, 20, 6, 2),
    LevelEntry(400, 30, 6, 2),
    LevelEntry(320, 40, 7, 3),
    LevelEntry(250, 50, 7, 3),
    LevelEntry(190, 65, 8, 3),
    LevelEntry(140, 80, 8, 4),
)

# Number of locks without a line clear before the bonus drops by one.
BONUS_DECAY_RESET = 3


@dataclass(frozen=True)
class Score:
    """Snapshot of the player's progress."""

    level: int = 1
    bonus: int = 1
    score: int = 0


def level_entry(level: int, table: Tuple[LevelEntry, ...] = LEVEL_TABLE) -> LevelEntry:
    """Return the table entry for ``level``, capped at the last entry."""

    return table[min(max(level, 1), len(table)) - 1]


def fall_interval(score: Score, table: Tuple[LevelEntry, ...] = LEVEL_TABLE) -> int:
    """Return the delay in milliseconds before the next forced fall."""

    return level_entry(score.level, table).fall_interval_ms


class Scoring:
    """Scoring engine tracking a :class:`Score` and its hidden counters.

    ``update`` is called once per lock with the number of rows the lock
    completed.  Clearing rows earns points, grows the bonus multiplier and
    counts towards the next level; locks without a clear slowly decay the
    bonus back to 1.
    """

    def __init__(
        self,
        score: Optional[Score] = None,
        *,
        table: Tuple[LevelEntry, ...] = LEVEL_TABLE,
        decay_reset: int = BONUS_DECAY_RESET,
    ) -> None:
        self.score = score or Score()
        self.table = table
        self.decay_reset = decay_reset
        self.level_pieces = 0
        self.decay_counter = decay_reset

    def fall_interval(self) -> int:
        return fall_interval(self.score, self.table)

    def update(self, rows_cleared: int) -> Score:
        """Apply the result of one lock and return the new score snapshot."""

        current = self.score
        if rows_cleared > 0:
            entry = level_entry(current.level, self.table)
            points = (10 * 2 ** (rows_cleared - 1) + entry.base_line_score) * current.bonus

            level = current.level
            increment = 0
            self.level_pieces += 1
            if self.level_pieces > entry.pieces_per_level_up:
                level = min(level + 1, len(self.table))
                self.level_pieces = 0
                increment = entry.bonus_increment
                LOGGER.info("Level up: %d -> %d", current.level, level)

            if current.bonus == 1:
                bonus = 2 * rows_cleared
            else:
                bonus = current.bonus + 2 * rows_cleared
            bonus += increment
            self.decay_counter = self.decay_reset

            self.score = replace(current, level=level, bonus=bonus, score=current.score + points)
            LOGGER.debug("Cleared %d row(s) for %d points, bonus now %d", rows_cleared, points, bonus)
        elif current.bonus > 1:
            self.decay_counter -= 1
            if self.decay_counter <= 0:
                self.score = replace(current, bonus=current.bonus - 1)
                self.decay_counter = self.decay_reset
        return self.score
