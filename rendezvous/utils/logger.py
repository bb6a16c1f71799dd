"""Pipe-formatted logging for the rendezvous package."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from rendezvous.utils.config import get_settings


PACKAGE_LOGGER_NAME = "rendezvous"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_HANDLER: Optional[logging.Handler] = None


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach the stdout handler to the package logger and set its level.

    The handler is attached once; later calls only change the level, so an
    embedding service can raise or lower verbosity at runtime. The root
    logger is left alone.
    """

    global _HANDLER
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if _HANDLER is None:
        _HANDLER = logging.StreamHandler(sys.stdout)
        _HANDLER.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(_HANDLER)
        package_logger.propagate = False
        package_logger.setLevel((level or get_settings().log_level).upper())
    elif level is not None:
        package_logger.setLevel(level.upper())
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the package hierarchy."""
    configure_logging()
    if name != PACKAGE_LOGGER_NAME and not name.startswith(PACKAGE_LOGGER_NAME + "."):
        name = f"{PACKAGE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
