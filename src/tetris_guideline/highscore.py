"""High-score persistence.

The engine only ever stores one integer under a well-known key.  Stores never
raise: unreadable or malformed data counts as no high score, and failed writes
are logged and dropped.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Union
import json
import logging


LOGGER = logging.getLogger(__name__)

HIGH_SCORE_KEY = "tetrisHighScore"


class HighScoreStore(Protocol):
    def load(self) -> int:
        ...

    def save(self, score: int) -> None:
        ...


class MemoryHighScoreStore:
    """Keeps the high score for the lifetime of the process only."""

    def __init__(self, initial: int = 0) -> None:
        self.value = max(0, int(initial))
        self.saves = 0

    def load(self) -> int:
        return self.value

    def save(self, score: int) -> None:
        self.value = score
        self.saves += 1


class JsonHighScoreStore:
    """Stores the high score in a small JSON document on disk."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def _read(self) -> dict:
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("High-score file is not a JSON object")
        return data

    def load(self) -> int:
        if not self.path.exists():
            return 0
        try:
            value = int(self._read().get(HIGH_SCORE_KEY, 0))
        except (OSError, ValueError, TypeError, OverflowError) as exc:
            LOGGER.warning("Ignoring unreadable high score in %s: %s", self.path, exc)
            return 0
        return max(0, value)

    def save(self, score: int) -> None:
        try:
            data = self._read() if self.path.exists() else {}
        except (OSError, ValueError):
            data = {}
        data[HIGH_SCORE_KEY] = int(score)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data), encoding="utf-8")
        except OSError as exc:
            LOGGER.warning("Could not save high score to %s: %s", self.path, exc)
