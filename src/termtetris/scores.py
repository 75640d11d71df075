"""Persistent high-score and recent-score lists."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Tuple, Union

LOGGER = logging.getLogger(__name__)

DEFAULT_PATH = Path.home() / ".termtetris_scores.json"
MAX_ENTRIES = 5


@dataclass(frozen=True)
class ScoreEntry:
    timestamp: str
    score: int


class ScoreStore:
    """Keep the five best and the five most recent scores in a JSON file.

    Both lists are ordered with the best (or newest) entry first.  A missing
    or unreadable file behaves like an empty store.
    """

    def __init__(self, path: Union[str, Path, None] = None) -> None:
        self.path = Path(path) if path is not None else DEFAULT_PATH

    def load(self) -> Tuple[List[ScoreEntry], List[ScoreEntry]]:
        """Return ``(high, recent)``; both empty if nothing usable is stored."""

        if not self.path.exists():
            return [], []
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
            high = [ScoreEntry(str(e["timestamp"]), int(e["score"])) for e in data.get("high", [])]
            recent = [ScoreEntry(str(e["timestamp"]), int(e["score"])) for e in data.get("recent", [])]
        except (OSError, ValueError, TypeError, KeyError, AttributeError) as exc:
            LOGGER.warning("Ignoring unreadable score file %s: %s", self.path, exc)
            return [], []
        return high[:MAX_ENTRIES], recent[:MAX_ENTRIES]

    def store(self, timestamp: datetime, score: int) -> None:
        """Record ``score``; zero scores are not kept."""

        if score <= 0:
            LOGGER.debug("Not storing a zero score")
            return
        high, recent = self.load()
        entry = ScoreEntry(timestamp.isoformat(timespec="seconds"), score)
        high = sorted(high + [entry], key=lambda e: e.score, reverse=True)[:MAX_ENTRIES]
        recent = ([entry] + recent)[:MAX_ENTRIES]
        payload = {
            "high": [asdict(e) for e in high],
            "recent": [asdict(e) for e in recent],
        }
        # The real file is only ever replaced whole, never rewritten in place.
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=self.path.name + ".", suffix=".tmp", dir=self.path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            LOGGER.warning("Could not write score file %s: %s", self.path, exc)
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            return
        LOGGER.info("Stored score %d in %s", score, self.path)


def format_scores(high: List[ScoreEntry], recent: List[ScoreEntry]) -> str:
    """Return a printable two-section table of ``high`` and ``recent``."""

    lines: List[str] = []
    for title, entries in (("High scores", high), ("Recent scores", recent)):
        lines.append(title)
        lines.append("-" * len(title))
        if not entries:
            lines.append("  (none)")
        for idx, entry in enumerate(entries, start=1):
            lines.append(f"{idx:>3}. {entry.score:>8}  {entry.timestamp}")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"
