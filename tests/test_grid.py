import numpy as np
import pytest

from game.grid import Cell, GridModel


def test_spawn_seeded_places_invaders_in_top_row():
    grid = GridModel(7, 7)
    cols = grid.spawn(3, np.random.default_rng(42))

    expected_rng = np.random.default_rng(42)
    assert cols == [int(expected_rng.integers(0, 7)) for _ in range(3)]
    assert len(cols) == 3
    # duplicates collapse onto one cell
    assert grid.count(Cell.INVADER) == len(set(cols))
    for c in range(7):
        assert grid.get(0, c) == (Cell.INVADER if c in cols else Cell.EMPTY)
    assert not grid.cells[1:].any()

    grid.shift_down()
    assert not grid.cells[0].any()
    for c in set(cols):
        assert grid.get(1, c) == Cell.INVADER


def test_shift_down_moves_single_invader():
    grid = GridModel(7, 7)
    grid.set(2, 4, Cell.INVADER)
    grid.shift_down()
    assert grid.get(2, 4) == Cell.EMPTY
    assert grid.get(3, 4) == Cell.INVADER
    assert grid.count(Cell.INVADER) == 1


def test_top_row_invader_reaches_bottom_after_rows_minus_one_shifts():
    grid = GridModel(7, 7)
    grid.set(0, 5, Cell.INVADER)
    for _ in range(6):
        assert not grid.has_invader_at_bottom()
        grid.shift_down()
    assert grid.get(6, 5) == Cell.INVADER_AT_BOTTOM
    assert grid.has_invader_at_bottom()


def test_shift_down_preserves_row_pattern():
    grid = GridModel(4, 3)
    grid.set(0, 0, Cell.INVADER)
    grid.set(1, 1, Cell.INVADER)
    grid.set(1, 2, Cell.INVADER)
    grid.shift_down()
    assert grid.get(1, 0) == Cell.INVADER
    assert grid.get(2, 1) == Cell.INVADER
    assert grid.get(2, 2) == Cell.INVADER
    assert grid.count(Cell.INVADER) == 3


def test_non_square_grid():
    grid = GridModel(3, 10)
    grid.set(1, 9, Cell.INVADER)
    grid.shift_down()
    assert grid.get(2, 9) == Cell.INVADER_AT_BOTTOM


@pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (7, 0), (0, 7)])
def test_out_of_range_access_is_noop(row, col):
    grid = GridModel(7, 7)
    assert grid.get(row, col) is None
    grid.set(row, col, Cell.INVADER)
    grid.clear_cell(row, col)
    assert grid.count(Cell.INVADER) == 0


def test_lowest_invader_row():
    grid = GridModel(7, 7)
    grid.set(1, 3, Cell.INVADER)
    grid.set(4, 3, Cell.INVADER)
    assert grid.lowest_invader_row(3) == 4
    assert grid.lowest_invader_row(2) is None


def test_clear_and_asset_keys():
    grid = GridModel(2, 2)
    grid.set(0, 0, Cell.INVADER)
    grid.set(1, 1, Cell.INVADER_AT_BOTTOM)
    assert grid.asset_keys() == (("enemy", "background"), ("background", "breach"))
    grid.clear()
    assert grid.asset_keys() == (("background", "background"), ("background", "background"))


def test_rejects_empty_grid():
    with pytest.raises(ValueError):
        GridModel(0, 7)
