"""Tests for configuration loading."""

from pathlib import Path

import pytest

from dleague.config_loader import (
    ConfigError,
    default_config,
    load_and_validate_config,
    load_config,
    validate_config,
)

SAMPLE_CONFIG = Path(__file__).parent.parent / "config" / "sample_config.yaml"


def test_sample_config_loads():
    cfg = load_and_validate_config(str(SAMPLE_CONFIG))

    assert cfg["season_length_matches"] == 30
    assert cfg["max_games_per_side"] == 5
    assert cfg["scoring"] == {"points_per_game": 1, "win_bonus": 1}
    assert cfg["allow_tied_results"] is False


def test_defaults():
    assert default_config() == {
        "season_length_matches": 30,
        "max_games_per_side": 5,
        "scoring": {"points_per_game": 1, "win_bonus": 1},
        "allow_tied_results": False,
    }


def test_missing_file():
    with pytest.raises(ConfigError, match="not found"):
        load_config("does/not/exist.yaml")


def test_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ConfigError, match="empty"):
        load_config(str(path))


def test_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("season_length_matches: [10\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(str(path))


def test_not_a_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 10\n- 20\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(str(path))


@pytest.mark.parametrize("length", [7, 0, -10, "30", True])
def test_bad_season_length(length):
    with pytest.raises(ConfigError, match="season_length_matches"):
        validate_config({"season_length_matches": length})


def test_bad_max_games():
    with pytest.raises(ConfigError, match="max_games_per_side"):
        validate_config({"max_games_per_side": 0})


def test_scoring_overrides(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text(
        "season_length_matches: 10\nscoring:\n  points_per_game: 0\n  win_bonus: 3\n",
        encoding="utf-8",
    )

    cfg = load_and_validate_config(str(path))

    assert cfg["season_length_matches"] == 10
    assert cfg["scoring"] == {"points_per_game": 0, "win_bonus": 3}


def test_bad_scoring():
    with pytest.raises(ConfigError, match="scoring must be a dictionary"):
        validate_config({"scoring": [1, 2]})
    with pytest.raises(ConfigError, match="scoring.win_bonus"):
        validate_config({"scoring": {"win_bonus": -1}})


def test_bad_allow_ties():
    with pytest.raises(ConfigError, match="allow_tied_results"):
        validate_config({"allow_tied_results": "yes"})
