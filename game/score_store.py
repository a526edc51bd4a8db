# game/score_store.py
import logging
import os

from config import HIGH_SCORE_PATH

logger = logging.getLogger(__name__)


class ScoreStoreUnavailable(OSError):
    pass


class ScoreStore:
    """Single-integer high score file: one line, decimal."""

    def __init__(self, path: str = HIGH_SCORE_PATH):
        self.path = path

    def read(self) -> int:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                first = f.readline()
        except OSError as e:
            raise ScoreStoreUnavailable(f"cannot read {self.path}: {e}") from e
        try:
            return int(first.strip())
        except ValueError as e:
            raise ScoreStoreUnavailable(f"corrupt high score in {self.path}: {first!r}") from e

    def load(self) -> int:
        try:
            return self.read()
        except ScoreStoreUnavailable as e:
            logger.warning(f"{e}; using high score 0")
            return 0

    def save(self, score: int) -> bool:
        try:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(f"{int(score)}\n")
        except OSError as e:
            logger.warning(f"could not write high score to {self.path}: {e}")
            return False
        return True

    def record(self, score: int, previous_best: int) -> bool:
        """Writes ``score`` only when it beats ``previous_best``."""
        if score <= previous_best:
            return False
        if self.save(score):
            logger.info(f"new high score {score} saved to {self.path}")
            return True
        return False
