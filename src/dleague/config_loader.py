"""Configuration loader and validator."""

from pathlib import Path
from typing import Any

import yaml

DEFAULT_SEASON_LENGTH = 30
DEFAULT_MAX_GAMES = 5


class ConfigError(Exception):
    """Configuration validation error."""

    pass


def load_config(path: str) -> dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML config file

    Returns:
        Dictionary with configuration values

    Raises:
        ConfigError: If file not found or invalid YAML
    """
    config_file = Path(path)

    if not config_file.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}")

    if config is None:
        raise ConfigError("Config file is empty")

    if not isinstance(config, dict):
        raise ConfigError("Config file must contain a mapping")

    return config


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config(config: dict[str, Any]) -> dict[str, Any]:
    """Validate configuration values.

    Args:
        config: Configuration dictionary

    Returns:
        Validated and normalized configuration

    Raises:
        ConfigError: If validation fails
    """
    validated = {}

    # Season length (optional, default 30 = each pair together 6 times)
    season_length = config.get("season_length_matches", DEFAULT_SEASON_LENGTH)
    if not _is_int(season_length) or season_length <= 0 or season_length % 5 != 0:
        raise ConfigError(
            f"season_length_matches must be a positive multiple of 5, got {season_length!r}"
        )
    validated["season_length_matches"] = season_length

    # Max games per side (optional, default 5)
    max_games = config.get("max_games_per_side", DEFAULT_MAX_GAMES)
    if not _is_int(max_games) or max_games < 1:
        raise ConfigError("max_games_per_side must be a positive integer")
    validated["max_games_per_side"] = max_games

    # Scoring (optional)
    scoring = config.get("scoring", {}) or {}
    if not isinstance(scoring, dict):
        raise ConfigError("scoring must be a dictionary")

    validated["scoring"] = {}
    for field, default in (("points_per_game", 1), ("win_bonus", 1)):
        value = scoring.get(field, default)
        if not _is_int(value) or value < 0:
            raise ConfigError(f"scoring.{field} must be a non-negative integer")
        validated["scoring"][field] = value

    # Tied results (optional, default false)
    allow_ties = config.get("allow_tied_results", False)
    if not isinstance(allow_ties, bool):
        raise ConfigError("allow_tied_results must be true or false")
    validated["allow_tied_results"] = allow_ties

    return validated


def default_config() -> dict[str, Any]:
    """Validated configuration with every default applied."""
    return validate_config({})


def load_and_validate_config(path: str) -> dict[str, Any]:
    """Load and validate configuration in one step.

    Args:
        path: Path to YAML config file

    Returns:
        Validated configuration dictionary

    Raises:
        ConfigError: If loading or validation fails
    """
    config = load_config(path)
    return validate_config(config)
