from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .cards import SUPPORTED_PAIR_COUNTS


def _env_flag(name: str, default: str = '0') -> bool:
    return os.getenv(name, default).lower() in ('1', 'true', 'yes', 'on')


@dataclass(frozen=True)
class Settings:
    """Runtime knobs read from the environment."""
    default_pairs: int
    debug: bool
    max_games: int


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def load_settings() -> Settings:
    pairs = _env_int('MEMORY_PAIRS', 4)
    if pairs not in SUPPORTED_PAIR_COUNTS:
        pairs = 4
    return Settings(
        default_pairs=pairs,
        debug=_env_flag('MEMORY_DEBUG'),
        max_games=max(1, _env_int('MEMORY_MAX_GAMES', 256)),
    )


def configure_logging(settings: Settings) -> None:
    """Sets up root logging for the entrypoints (CLI and web app)."""
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
