"""Module loggers for latopt, levelled from ``LATOPT_LOG_LEVEL``."""

from __future__ import annotations

import logging
import os
from typing import Final

LOG_LEVEL_ENV: Final[str] = "LATOPT_LOG_LEVEL"
DEFAULT_LEVEL: Final[int] = logging.INFO


def resolve_level(value: str | None) -> int:
    """Turn a level name (``"debug"``) or number (``"10"``) into a logging level.

    Empty or unrecognised values give :data:`DEFAULT_LEVEL`.
    """
    if not value:
        return DEFAULT_LEVEL
    value = value.strip()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else DEFAULT_LEVEL


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` at the level named by the environment.

    The variable is read on every call so a planner can change verbosity
    before importing a module. Handlers belong to the application.
    """
    logger = logging.getLogger(name)
    logger.setLevel(resolve_level(os.getenv(LOG_LEVEL_ENV)))
    return logger
