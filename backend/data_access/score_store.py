"""
File-backed leaderboard of the best scores.

One record per line: ``<score> <timestamp>``, sorted by score descending and
capped at MAX_SCORE_ENTRIES. Leaderboard persistence is best-effort: an
unreadable file reads as an empty history and a failed write is logged and
otherwise ignored.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from domain.constants import MAX_SCORE_ENTRIES

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


@dataclass
class ScoreEntry:
    score: int
    timestamp: str


class ScoreStore:
    """
    Top-N score list persisted to a text file.

    The file is read once at construction; ``load()`` re-reads it.
    """

    def __init__(self, path: Union[str, Path], capacity: int = MAX_SCORE_ENTRIES):
        self.path = Path(path)
        self.capacity = capacity
        self._entries: List[ScoreEntry] = []
        self.load()

    @property
    def entries(self) -> List[ScoreEntry]:
        return list(self._entries)

    def load(self) -> List[ScoreEntry]:
        """Re-read the score file; a missing or unreadable file is an empty history."""
        entries: List[ScoreEntry] = []
        try:
            with self.path.open("r", encoding="utf-8") as f:
                for line_no, line in enumerate(f, start=1):
                    entry = self._parse_line(line)
                    if entry is None:
                        if line.strip():
                            logger.warning(f"Skipping malformed line {line_no} in {self.path}: {line!r}")
                        continue
                    entries.append(entry)
        except FileNotFoundError:
            logger.debug(f"No score file at {self.path} yet")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(f"Could not read score file {self.path}: {exc}")
            entries = []

        entries.sort(key=lambda e: e.score, reverse=True)
        self._entries = entries[:self.capacity]
        return self.entries

    @staticmethod
    def _parse_line(line: str) -> Optional[ScoreEntry]:
        parts = line.strip().split(" ", 1)
        if not parts or not parts[0]:
            return None
        try:
            score = int(parts[0])
        except ValueError:
            return None
        timestamp = parts[1].strip() if len(parts) > 1 else ""
        return ScoreEntry(score=score, timestamp=timestamp)

    def record(self, score: int, when: Optional[datetime] = None) -> None:
        """Add a score, keep the best ``capacity`` entries and persist them."""
        when = when or datetime.now()
        self._entries.append(ScoreEntry(score=score, timestamp=when.strftime(TIMESTAMP_FORMAT)))
        # Stable sort: ties keep the earlier entry first
        self._entries.sort(key=lambda e: e.score, reverse=True)
        del self._entries[self.capacity:]
        self._write()
        logger.info(f"Recorded score {score} (best is now {self.best()})")

    def _write(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                for entry in self._entries:
                    f.write(f"{entry.score} {entry.timestamp}\n")
        except OSError as exc:
            logger.warning(f"Could not write score file {self.path}: {exc}")

    def best(self) -> int:
        if not self._entries:
            return 0
        return self._entries[0].score

    def __repr__(self):
        return f"<ScoreStore path={self.path} entries={len(self._entries)} best={self.best()}>"
