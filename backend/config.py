"""
Runtime configuration, read from the environment (and a .env file if present).
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from domain.constants import SpeedTier

DEFAULT_SCORE_FILE = "scores.txt"
DEFAULT_SAVE_FILE = "snake_save.txt"
DEFAULT_LOG_FILE = "snake.log"
DEFAULT_LOG_LEVEL = "WARNING"

TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class GameConfig:
    score_file: str = DEFAULT_SCORE_FILE
    save_file: str = DEFAULT_SAVE_FILE
    easy_mode: bool = False
    wrap_mode: bool = False
    speed_tier: SpeedTier = SpeedTier.NORMAL
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: str = DEFAULT_LOG_FILE
    seed: Optional[int] = None


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in TRUE_VALUES


def parse_speed_tier(value: str) -> SpeedTier:
    """Map 'slow' / 'normal' / 'fast' (any case) to a SpeedTier."""
    try:
        return SpeedTier[value.strip().upper()]
    except KeyError:
        valid = ", ".join(t.name.lower() for t in SpeedTier)
        raise ValueError(f"Unknown speed '{value}'. Expected one of: {valid}") from None


def load_config() -> GameConfig:
    """
    Build the session configuration from SNAKE_* environment variables.

    Raises:
        ValueError: if SNAKE_SPEED, SNAKE_SEED or SNAKE_LOG_LEVEL is not valid
    """
    load_dotenv()

    seed_value = os.getenv("SNAKE_SEED", "").strip()
    try:
        seed = int(seed_value) if seed_value else None
    except ValueError:
        raise ValueError(f"SNAKE_SEED must be an integer, got '{seed_value}'") from None

    log_level = os.getenv("SNAKE_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"Unknown SNAKE_LOG_LEVEL '{log_level}'")

    return GameConfig(
        score_file=os.getenv("SNAKE_SCORE_FILE", DEFAULT_SCORE_FILE).strip() or DEFAULT_SCORE_FILE,
        save_file=os.getenv("SNAKE_SAVE_FILE", DEFAULT_SAVE_FILE).strip() or DEFAULT_SAVE_FILE,
        easy_mode=_env_flag("SNAKE_EASY_MODE"),
        wrap_mode=_env_flag("SNAKE_WRAP_MODE"),
        speed_tier=parse_speed_tier(os.getenv("SNAKE_SPEED", "normal")),
        log_level=log_level,
        log_file=os.getenv("SNAKE_LOG_FILE", DEFAULT_LOG_FILE).strip() or DEFAULT_LOG_FILE,
        seed=seed,
    )
