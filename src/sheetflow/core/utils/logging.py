"""Logging helpers (no env reads).

Every module logs through ``logging.getLogger(__name__)``, so records land
under the ``sheetflow`` package logger configured here.
"""
import logging
from typing import IO, Optional

LOGGER_NAME = "sheetflow"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str = LOGGER_NAME, level: int | None = None, stream: Optional[IO[str]] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger


def set_verbosity(verbose: bool) -> logging.Logger:
    """Surface extraction stats and skipped fragments on stderr when ``verbose``."""
    if verbose:
        return get_logger(LOGGER_NAME, level=logging.DEBUG)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.NOTSET)
    return logger
