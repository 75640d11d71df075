"""Play Tetris in the terminal.

Run with: `python -m termtetris`

Use the arrow keys: Up rotates, Left/Right move, Down drops the piece.  Any
other key quits.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .game_state import Game
from .scheduler import LoopScheduler
from .scores import ScoreStore, format_scores
from .terminal import TerminalDisplay, TerminalInput, raw_mode
from .tetromino import RandomGenerator


LOGGER = logging.getLogger(__name__)

SIZES = {"normal": 1, "large": 2}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="termtetris", description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--scores", action="store_true", help="Show high and recent scores, then exit.")
    parser.add_argument(
        "--size",
        choices=sorted(SIZES),
        default="normal",
        help="Width of a board cell: 'normal' is one character, 'large' two.",
    )
    parser.add_argument("--score-file", default=None, help="Path of the score file.")
    parser.add_argument("--log-file", default=None, help="Write diagnostics to this file.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def configure_logging(log_file: Optional[str], level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    if log_file:
        logging.basicConfig(filename=log_file, level=level, format="%(asctime)s %(name)s %(message)s")
    else:
        # Anything written to the terminal would corrupt the game screen.
        logging.basicConfig(level=level, handlers=[logging.NullHandler()])


def play(store: ScoreStore, scale: int) -> int:
    """Run one game on the controlling terminal and return the final score."""

    display = TerminalDisplay(scale=scale)
    input_source = TerminalInput()
    with raw_mode(input_source.fd):
        display.init()
        try:
            game = Game(display, RandomGenerator(), store)
            LoopScheduler(game, input_source).run()
        finally:
            display.close()
    return game.score.score


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_file, args.log_level)
    store = ScoreStore(args.score_file)

    if args.scores:
        high, recent = store.load()
        sys.stdout.write(format_scores(high, recent))
        return 0

    if not sys.stdin.isatty():
        LOGGER.error("Standard input is not a terminal")
        sys.stderr.write("termtetris must be run from an interactive terminal\n")
        return 1

    final = play(store, SIZES[args.size])
    sys.stdout.write(f"Final score: {final}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
