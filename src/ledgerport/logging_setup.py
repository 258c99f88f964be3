"""Logging configuration for the ``ledgerport`` package.

Library modules only call ``get_logger(__name__)`` (or accept an injected
logger) and never attach handlers themselves. The CLI calls
``configure_logging`` once at startup; until then the package logger carries a
``NullHandler`` and stays silent.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "ledgerport"
_ENV_LEVEL = "LEDGERPORT_LOG_LEVEL"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_handler: logging.Handler | None = None


def parse_level(level: int | str | None, default: int = logging.WARNING) -> int:
    """Resolve a level given as int, level name or numeric string.

    ``None`` falls back to the ``LEDGERPORT_LOG_LEVEL`` environment variable,
    then to ``default``.
    """
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = logging.getLevelName(level)
        if isinstance(numeric, int):
            return numeric
        raise ValueError(f"Unknown log level '{level}'")
    env_val = os.getenv(_ENV_LEVEL)
    if env_val:
        return parse_level(env_val, default=default)
    return default


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling it again replaces the previous handler instead of stacking a
    second one, so repeated CLI invocations in one process (tests) stay sane.
    """
    global _handler

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler) or h is _handler:
            logger.removeHandler(h)

    resolved = parse_level(level)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False
    _handler = handler
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger, keeping the package root silent until configured."""
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
