import pytest

from puyo_chain_rl.game import FIVE_COLOR_PALETTE, Color, ConfigError, GameConfig, PuyoGame


def test_defaults():
    config = GameConfig()
    assert (config.rows, config.cols) == (12, 6)
    assert config.min_group_size == 4
    assert config.palette == (Color.RED, Color.BLUE, Color.GREEN, Color.YELLOW)
    assert config.drop_interval_ms == 900
    assert config.wall_kick and config.pausable


@pytest.mark.parametrize("options", [
    {"rows": 0},
    {"rows": 1},
    {"cols": 0},
    {"cols": -3},
    {"min_group_size": 1},
    {"palette": ()},
    {"palette": ("red", "orange")},
    {"palette": (9,)},
    {"drop_interval_ms": 0},
    {"erase_delay_ms": -1},
    {"points_per_cell": 0},
])
def test_malformed_config_fails_fast(options):
    with pytest.raises(ConfigError):
        GameConfig(**options)


def test_config_error_is_value_error():
    with pytest.raises(ValueError):
        PuyoGame(GameConfig(min_group_size=0))


def test_from_options_accepts_names_and_rejects_unknown_keys():
    config = GameConfig.from_options({
        "rows": 14,
        "cols": 8,
        "min_group_size": 3,
        "palette": ["red", "Blue", Color.PURPLE, 3],
        "drop_interval_ms": 500,
    })
    assert (config.rows, config.cols, config.min_group_size) == (14, 8, 3)
    assert config.palette == (Color.RED, Color.BLUE, Color.PURPLE, Color.GREEN)
    with pytest.raises(ConfigError):
        GameConfig.from_options({"rows": 12, "speed": 3})


def test_config_shapes_the_session():
    game = PuyoGame(GameConfig(rows=8, cols=5, palette=FIVE_COLOR_PALETTE, points_per_cell=7, random_seed=3))
    assert game.field.cells.shape == (8, 5)
    assert game.pair.parent == (0, 2)
    assert game.rules.points_per_cell == 7
    assert set(game.pair.colors) <= set(FIVE_COLOR_PALETTE)
