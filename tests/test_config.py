from pathlib import Path

import pytest

from dailypuzzles.core.config import (
    Config, GameConfig, PackingGameConfig, SessionConfig, SlidingGameConfig,
    create_default_config, load_config, validate_config,
)
from dailypuzzles.core.seeding import PACKING_EPOCH, SLIDING_EPOCH
from dailypuzzles.evaluation.ranking import DAILY_15_RANKINGS, get_ranking

CONFIG_DIR = Path(__file__).resolve().parent.parent / "configs"


def test_daily_defaults():
    game = GameConfig.from_dict({"type": "daily_15"})
    assert isinstance(game, SlidingGameConfig)
    assert game.grid_size == 4
    assert game.shuffle_moves == 250
    assert game.persist is True
    assert game.epoch == SLIDING_EPOCH
    assert [t.title for t in game.ranking_tiers()][0] == "Grandmaster"


def test_blitz_defaults():
    game = GameConfig.from_dict({"type": "quick_blitz"})
    assert game.grid_size == 3
    assert game.shuffle_moves == 50
    assert game.persist is False


def test_blitz_cannot_persist():
    with pytest.raises(ValueError):
        GameConfig.from_dict({"type": "quick_blitz", "persist": True})


def test_packing_defaults():
    game = GameConfig.from_dict({"type": "block_logic"})
    assert isinstance(game, PackingGameConfig)
    assert game.grid_size == 6
    assert game.num_blockers == 6
    assert game.epoch == PACKING_EPOCH


@pytest.mark.parametrize("data", [
    {"type": "sudoku"},
    {"type": "daily_15", "grid_size": 1},
    {"type": "daily_15", "shuffle_moves": -1},
    {"type": "block_logic", "num_blockers": 36},
    {"type": "daily_15", "rankings": [{"title": "A", "max_moves": 90}, {"title": "B", "max_moves": 60}]},
    {"type": "daily_15", "render_width": 0},
])
def test_invalid_game_config(data):
    with pytest.raises(ValueError):
        GameConfig.from_dict(data)


def test_custom_rankings():
    game = GameConfig.from_dict({
        "type": "daily_15",
        "rankings": [{"title": "Quick", "max_moves": 100}, {"title": "Slow", "max_moves": "inf"}],
    })
    assert [t.title for t in game.ranking_tiers()] == ["Quick", "Slow"]


def test_default_config_round_trip(tmp_path):
    path = tmp_path / "config.yaml"
    created = create_default_config(str(path), "block_logic")
    loaded = load_config(str(path))
    assert loaded.to_dict() == created.to_dict()
    assert loaded.game.epoch == PACKING_EPOCH


def test_bundled_configs_load():
    for name, cls in (("daily_15", SlidingGameConfig), ("quick_blitz", SlidingGameConfig),
                      ("block_logic", PackingGameConfig)):
        config = load_config(str(CONFIG_DIR / f"{name}.yaml"))
        assert config.game.type == name
        assert isinstance(config.game, cls)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))


def test_load_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_load_invalid_values(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("game:\n  type: quick_blitz\n  persist: true\n")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_validate_warns_when_board_cannot_be_filled(tmp_path):
    session = SessionConfig(state_dir=str(tmp_path / "state"))
    issues = validate_config(Config(game=GameConfig.from_dict({"type": "block_logic"}), session=session))
    assert any("can never be completely filled" in issue for issue in issues)

    issues = validate_config(Config(game=GameConfig.from_dict({"type": "block_logic", "num_blockers": 7}),
                                    session=session))
    assert issues == []


def test_validate_flags_bad_results_path(tmp_path):
    session = SessionConfig(state_dir=str(tmp_path / "state"), results_path="results.xlsx")
    issues = validate_config(Config(game=GameConfig.from_dict({"type": "daily_15"}), session=session))
    assert any(issue.startswith("ERROR") for issue in issues)


def test_validate_warns_on_unshuffled_board(tmp_path):
    session = SessionConfig(state_dir=str(tmp_path / "state"))
    issues = validate_config(Config(game=GameConfig.from_dict({"type": "daily_15", "shuffle_moves": 0}),
                                    session=session))
    assert issues == ["WARNING: shuffle_moves is 0, the puzzle starts solved"]


def test_bundled_daily_config_has_ranking_descriptions():
    config = load_config(str(CONFIG_DIR / "daily_15.yaml"))
    tiers = config.game.ranking_tiers()
    assert get_ranking(45, tiers).description == "A flawless display of logic."
    assert [t.to_dict() for t in tiers] == [t.to_dict() for t in DAILY_15_RANKINGS]


def test_tiers_without_description_inherit_default_text():
    game = GameConfig.from_dict({
        "type": "daily_15",
        "rankings": [
            {"title": "Grandmaster", "max_moves": 40},
            {"title": "Plodder", "max_moves": "inf"},
        ],
    })
    tiers = game.ranking_tiers()
    assert tiers[0].description == "A flawless display of logic."
    assert tiers[0].max_moves == 40
    assert tiers[1].description == ""
