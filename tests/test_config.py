import pytest

from config import GameConfig, GRID_COLS, GRID_ROWS, INITIAL_CADENCE


def test_defaults_are_valid():
    config = GameConfig()
    assert (config.rows, config.cols) == (GRID_ROWS, GRID_COLS)
    assert config.initial_cadence == INITIAL_CADENCE
    assert config.use_left_hand
    assert config.seed is None


def test_zero_cadence_is_allowed():
    assert GameConfig(initial_cadence=0).initial_cadence == 0


@pytest.mark.parametrize("kwargs,message", [
    ({"rows": 0}, "grid"),
    ({"cols": 0}, "grid"),
    ({"initial_cadence": -1}, "cadence"),
    ({"initial_max_spawns": 0}, "spawns"),
    ({"game_over_hold": 0}, "hold"),
])
def test_rejects_bad_values(kwargs, message):
    with pytest.raises(ValueError, match=message):
        GameConfig(**kwargs)
