"""
Logging setup for ratcalc.

Library modules only create loggers with ``get_logger(__name__)`` and log at
DEBUG. Handlers are attached by front ends through ``setup_logging``; on
import the package logger only gets a NullHandler.

Usage:
    from ratcalc.logging_config import get_logger

    logger = get_logger(__name__)
    logger.debug("Repeating decimal %s -> %s", text, value)

Author: xwest
"""

import logging
import os
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "ratcalc"
LOG_LEVEL_ENV = "RATCALC_LOG_LEVEL"
DEFAULT_LOG_LEVEL = logging.WARNING


class RatcalcLogFormatter(logging.Formatter):
    """Structured ``[time] [LEVEL] [component] message`` lines."""

    def __init__(self) -> None:
        fmt = "[%(asctime)s] [%(levelname)-8s] [%(name)s] %(message)s"
        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")


def get_logger(name: str) -> logging.Logger:
    """Logger for a ratcalc component."""
    if not name.startswith(PACKAGE_LOGGER):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def resolve_level(level: Union[str, int, None]) -> int:
    """
    Turn a level name or number into a logging level.

    ``None`` falls back to the RATCALC_LOG_LEVEL environment variable, then
    to WARNING.

    Raises:
        ValueError: For an unknown level name
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level '{level}'")
    return resolved


def setup_logging(
    level: Union[str, int, None] = None,
    use_rich: bool = False,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Attach a single handler to the package logger.

    Args:
        level: Level name or number; see ``resolve_level``
        use_rich: Render records with rich (interactive sessions)
        console: Console for the rich handler, defaults to stderr

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(resolve_level(level))

    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    if use_rich:
        handler: logging.Handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("[%(name)s] %(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(RatcalcLogFormatter())

    logger.addHandler(handler)
    return logger


logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())
