# game/rules.py
import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from config import GRID_PX, INITIAL_CADENCE, INITIAL_MAX_SPAWNS, KILL_SCORE
from game.grid import GridModel
from gesture.types import NormalizedHandPosition

logger = logging.getLogger(__name__)


class CollisionResolver:
    """Shoots the lowest invader in the column under the hand."""

    def __init__(self, region_px: float = GRID_PX, kill_score: int = KILL_SCORE):
        self.region_px = float(region_px)
        self.kill_score = kill_score

    def locate_cell(self, hand: NormalizedHandPosition, grid: GridModel) -> Optional[Tuple[int, int]]:
        """Half-open [lower, upper) bucket test; None when the hand is off the grid."""
        col = self._bucket(hand.x, grid.cols)
        row = self._bucket(hand.y, grid.rows)
        if col is None or row is None:
            return None
        return row, col

    def _bucket(self, v: float, n: int) -> Optional[int]:
        edges = np.arange(n + 1) * (self.region_px / n)
        if not np.isfinite(v):
            return None
        i = int(np.searchsorted(edges, v, side="right")) - 1
        if 0 <= i < n:
            return i
        return None

    def resolve(self, hand: NormalizedHandPosition, fired: bool, grid: GridModel) -> int:
        if not fired:
            return 0
        cell = self.locate_cell(hand, grid)
        if cell is None:
            return 0

        _, col = cell
        row = grid.lowest_invader_row(col)
        if row is None:
            return 0
        grid.clear_cell(row, col)
        logger.debug(f"hit invader at row={row} col={col}")
        return self.kill_score


@dataclass(frozen=True)
class Band:
    """Open interval (lower, upper) on score. None fields leave the value alone."""

    lower: Optional[int]
    upper: Optional[int]
    cadence: Optional[int] = None
    max_spawns: Optional[int] = None

    def contains(self, score: int) -> bool:
        return (self.lower is None or score > self.lower) and (self.upper is None or score < self.upper)


# Exact boundary scores (70, 140, ...) match no band and leave difficulty as is.
DIFFICULTY_BANDS = (
    Band(None, 70, cadence=60),
    Band(70, 140, cadence=50, max_spawns=3),
    Band(140, 210, cadence=50, max_spawns=3),
    Band(210, 280, cadence=40),
    Band(280, 350, cadence=40),
    Band(350, 420, cadence=40, max_spawns=4),
    Band(420, 490, cadence=30),
    Band(490, 1000, cadence=30),
    Band(1000, None, max_spawns=5),
)


class DifficultyController:
    def __init__(self, cadence: int = INITIAL_CADENCE, max_spawns: int = INITIAL_MAX_SPAWNS,
                 bands: Sequence[Band] = DIFFICULTY_BANDS):
        self.initial_cadence = cadence
        self.initial_max_spawns = max_spawns
        self.bands = tuple(bands)
        self.reset()

    def reset(self):
        self.cadence = self.initial_cadence
        self.max_spawns = self.initial_max_spawns

    def evaluate(self, score: int) -> Tuple[int, int]:
        for band in self.bands:
            if band.contains(score):
                if band.cadence is not None:
                    self.cadence = band.cadence
                if band.max_spawns is not None:
                    self.max_spawns = band.max_spawns
                break
        return self.cadence, self.max_spawns
