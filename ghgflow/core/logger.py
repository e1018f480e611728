"""Application logging for GHGFlow.

Every module logs through ``logging.getLogger(__name__)``; records from the
``ghgflow`` package are routed here to a rotating ``app.log`` under the
GHGFlow home directory and echoed to stderr, which keeps stdout free for the
CLI's JSON output.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "ghgflow"
HOME_ENV_VAR = "GHGFLOW_HOME"

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def home_dir() -> Path:
    """``$GHGFLOW_HOME`` or ``~/GHGFlow``."""

    env = os.getenv(HOME_ENV_VAR)
    if env:
        return Path(env)
    return Path.home() / "GHGFlow"


def get_logger() -> logging.Logger:
    """Return the ``ghgflow`` logger, attaching its handlers on first use."""

    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    log_dir = home_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)
    file_handler = RotatingFileHandler(
        log_dir / "app.log", maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(fmt)
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(fmt)

    logger.addHandler(file_handler)
    logger.addHandler(console)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


def set_level(name: str) -> int:
    """Apply a level name such as ``"debug"`` to the ``ghgflow`` logger.

    Raises:
        ValueError: If ``name`` is not a standard logging level.
    """

    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    get_logger().setLevel(level)
    return level


__all__ = ["LOGGER_NAME", "get_logger", "home_dir", "set_level"]
