"""Single-threaded loop interleaving player input with timed game steps."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .game_state import Game
from .interfaces import InputSource, PollResult


LOGGER = logging.getLogger(__name__)


class LoopScheduler:
    """Cooperative loop feeding a :class:`Game` from an :class:`InputSource`.

    Each iteration either handles one key or runs one step, never both.  The
    time spent waiting for input is charged against the budget of the pending
    step so that continuous key presses cannot starve the fall.
    """

    def __init__(
        self,
        game: Game,
        input_source: InputSource,
        *,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.game = game
        self.input_source = input_source
        self._clock = clock or time.monotonic
        self.remaining_ms = 0.0
        self.steps = 0
        self.inputs = 0

    def _elapsed_ms(self, start: float) -> float:
        # Kept fractional: sub-millisecond waits still drain the budget.
        return (self._clock() - start) * 1000.0

    def _timeout_ms(self) -> int:
        return max(1, round(self.remaining_ms))

    def run(self) -> None:
        """Run until the game ends or the player quits."""

        self.remaining_ms = self.game.start()
        while True:
            if self.remaining_ms > 0:
                start = self._clock()
                result = self.input_source.poll(self._timeout_ms())
                if result is PollResult.READY:
                    self.remaining_ms -= self._elapsed_ms(start)
                    key = self.input_source.read()
                    self.inputs += 1
                    if not self.game.handle_input(key):
                        break
                    continue

            delay = self.game.step()
            self.steps += 1
            if delay is None:
                break
            self.remaining_ms = delay
        LOGGER.info("Loop finished after %d steps and %d inputs", self.steps, self.inputs)
