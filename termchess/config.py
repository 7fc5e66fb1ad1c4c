"""Configuration loading: YAML files merged over built-in defaults."""

from __future__ import annotations

import copy
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "search": {
        "depth": 3,
        "time_limit": None,
    },
    "players": {
        "white": {"type": "human"},
        "black": {"type": "alphabeta"},
    },
    "game": {
        "max_moves": 200,
    },
}


def _merge(base: dict, override: dict) -> dict:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(path: Optional[str] = None) -> dict:
    """Load a YAML config, filling missing keys from DEFAULT_CONFIG."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path is None:
        return config
    with open(path) as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return _merge(config, loaded)


def player_config(config: dict, color: str) -> dict:
    """Player settings for 'white' or 'black', with search defaults applied."""
    player = dict(config["search"])
    player.update(config["players"].get(color) or {})
    return player
