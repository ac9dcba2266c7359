# Area: Shared
"""
king_of_hearts.config — Game configuration
==========================================

All tunable values in one place. Point ladders and their player-count
thresholds live here as data; everything else reads them through
``load_config()``.

Configuration is merged in this order (later wins):
    1. DEFAULT_CONFIG below
    2. JSON config file (``--config path.json``)
    3. Environment variables (a ``.env`` file is loaded first)
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv

logger = logging.getLogger("king_of_hearts.config")

# Every question set carries one question per tier
DIFFICULTY_TIERS: Tuple[int, ...] = (100, 200, 300, 400)

# Rounds 1 and 2 are played on the board; the final round is the wager
BOARD_ROUNDS: Tuple[int, ...] = (1, 2)
FINAL_ROUND = 3

# Point ladders per round: (min_players, point_values).
# The row with the highest threshold the player count meets wins.
ROUND_LADDERS: Dict[int, List[Tuple[int, Tuple[int, ...]]]] = {
    1: [
        (5, (200, 300)),
        (0, (100, 200, 300)),
    ],
    2: [
        (7, (500,)),
        (0, (250, 500)),
    ],
}

MIN_PLAYERS = 2

DEFAULT_CONFIG: Dict[str, Any] = {
    "model": "claude-sonnet-4-20250514",
    "max_tokens": 2000,
    "name_max_tokens": 50,
    "llm_timeout_seconds": 30.0,
    "batch_size": 2,
    "batch_delay_seconds": 0.5,
    "log_file": "king_of_hearts.log",
    "log_level": "INFO",
    "mock_mode": False,
    "round_ladders": ROUND_LADDERS,
}

# Environment variable → config key
ENV_MAPPINGS: Dict[str, str] = {
    "KOH_MODEL": "model",
    "KOH_MAX_TOKENS": "max_tokens",
    "KOH_LLM_TIMEOUT_SECONDS": "llm_timeout_seconds",
    "KOH_BATCH_SIZE": "batch_size",
    "KOH_BATCH_DELAY_SECONDS": "batch_delay_seconds",
    "KOH_LOG_FILE": "log_file",
    "KOH_LOG_LEVEL": "log_level",
    "KOH_MOCK_MODE": "mock_mode",
}

_INT_KEYS = {"max_tokens", "name_max_tokens", "batch_size"}
_FLOAT_KEYS = {"llm_timeout_seconds", "batch_delay_seconds"}
_BOOL_KEYS = {"mock_mode"}


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load config from defaults, an optional JSON file and the environment."""
    load_dotenv()
    config: Dict[str, Any] = dict(DEFAULT_CONFIG)

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                config.update(json.load(f))
        else:
            logger.warning(f"Config file not found: {config_path}")

    for env_key, config_key in ENV_MAPPINGS.items():
        if env_key in os.environ:
            config[config_key] = os.environ[env_key]

    config = _coerce_types(config)
    config["round_ladders"] = normalize_ladders(config["round_ladders"])
    validate_config(config)
    return config


def _coerce_types(config: Dict[str, Any]) -> Dict[str, Any]:
    for key in _INT_KEYS:
        config[key] = int(config[key])
    for key in _FLOAT_KEYS:
        config[key] = float(config[key])
    for key in _BOOL_KEYS:
        value = config[key]
        if isinstance(value, str):
            value = value.lower() in ("true", "1", "yes")
        config[key] = bool(value)
    return config


def normalize_ladders(raw: Dict[Any, Any]) -> Dict[int, List[Tuple[int, Tuple[int, ...]]]]:
    """Convert ladder data loaded from JSON (string keys, lists) to canonical form."""
    ladders: Dict[int, List[Tuple[int, Tuple[int, ...]]]] = {}
    for round_number, rows in raw.items():
        ladders[int(round_number)] = [
            (int(min_players), tuple(int(v) for v in values))
            for min_players, values in rows
        ]
    return ladders


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration values.

    Args:
        config: Configuration dict

    Raises:
        ValueError: If a value is out of range or a ladder is malformed
    """
    if config["batch_size"] < 1:
        raise ValueError(f"batch_size must be >= 1, got {config['batch_size']}")
    if config["batch_delay_seconds"] < 0:
        raise ValueError("batch_delay_seconds must not be negative")
    if config["llm_timeout_seconds"] <= 0:
        raise ValueError("llm_timeout_seconds must be positive")

    ladders = config["round_ladders"]
    missing = [r for r in BOARD_ROUNDS if r not in ladders]
    if missing:
        raise ValueError(f"Missing point ladders for rounds: {missing}")
    for round_number, rows in ladders.items():
        if not rows:
            raise ValueError(f"Round {round_number} has no ladder rows")
        if not any(min_players <= MIN_PLAYERS for min_players, _ in rows):
            raise ValueError(
                f"Round {round_number} ladder has no row for {MIN_PLAYERS} players"
            )
        for _, values in rows:
            if not values or len(values) > len(DIFFICULTY_TIERS):
                raise ValueError(
                    f"Round {round_number} ladder must have 1-{len(DIFFICULTY_TIERS)} values"
                )
            if list(values) != sorted(set(values)) or values[0] <= 0:
                raise ValueError(
                    f"Round {round_number} ladder values must be positive and ascending"
                )
