# game/grid.py
from enum import IntEnum
from typing import List, Optional, Tuple

import numpy as np

from config import GRID_ROWS, GRID_COLS


class Cell(IntEnum):
    EMPTY = 0
    INVADER = 1
    INVADER_AT_BOTTOM = 2


ASSET_KEYS = {
    Cell.EMPTY: "background",
    Cell.INVADER: "enemy",
    Cell.INVADER_AT_BOTTOM: "breach",
}


class GridModel:
    """rows x cols occupancy grid. Row 0 is the top, where invaders spawn."""

    def __init__(self, rows: int = GRID_ROWS, cols: int = GRID_COLS):
        if rows < 1 or cols < 1:
            raise ValueError(f"grid must be at least 1x1, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.cells = np.zeros((rows, cols), dtype=np.int8)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get(self, row: int, col: int) -> Optional[Cell]:
        if not self.in_bounds(row, col):
            return None
        return Cell(int(self.cells[row, col]))

    def set(self, row: int, col: int, cell: Cell):
        if self.in_bounds(row, col):
            self.cells[row, col] = Cell(cell)

    def clear_cell(self, row: int, col: int):
        self.set(row, col, Cell.EMPTY)

    def clear(self):
        self.cells[:] = Cell.EMPTY

    def spawn(self, count: int, rng: np.random.Generator) -> List[int]:
        # columns drawn independently, so duplicates just overwrite
        cols = [int(rng.integers(0, self.cols)) for _ in range(max(0, count))]
        for c in cols:
            self.cells[0, c] = Cell.INVADER
        return cols

    def shift_down(self):
        # bottom-up so every source row is read before it is overwritten
        for r in range(self.rows - 2, -1, -1):
            self.cells[r + 1, :] = self.cells[r, :]
            self.cells[r, :] = Cell.EMPTY

        last = self.cells[self.rows - 1]
        last[last == Cell.INVADER] = Cell.INVADER_AT_BOTTOM

    def has_invader_at_bottom(self) -> bool:
        return bool(np.any(self.cells[self.rows - 1] == Cell.INVADER_AT_BOTTOM))

    def lowest_invader_row(self, col: int) -> Optional[int]:
        if not 0 <= col < self.cols:
            return None
        for r in range(self.rows - 1, -1, -1):
            if self.cells[r, col] == Cell.INVADER:
                return r
        return None

    def count(self, cell: Cell) -> int:
        return int(np.count_nonzero(self.cells == cell))

    def asset_keys(self) -> Tuple[Tuple[str, ...], ...]:
        return tuple(
            tuple(ASSET_KEYS[Cell(int(v))] for v in row)
            for row in self.cells
        )
