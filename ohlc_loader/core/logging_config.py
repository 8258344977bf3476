"""Logging configuration for the loader and its CLI."""

import logging
import sys
from typing import Optional

from ohlc_loader.core.config import settings

CONSOLE_FORMAT = "%(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Per-request chatter from the feed client
QUIET_LOGGERS = ("httpx", "httpcore")


def _console_handler(level: int) -> logging.Handler:
    # stderr, so CLI summaries on stdout stay clean
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _file_handler(level: int) -> Optional[logging.Handler]:
    log_file = settings.log_file_obj
    if log_file is None:
        return None
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging() -> None:
    """
    Configure the root logger from settings.

    Replaces existing root handlers with a console handler and, when
    ``settings.log_file`` is set, a file handler with timestamps.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    root_logger.addHandler(_console_handler(level))
    file_handler = _file_handler(level)
    if file_handler is not None:
        root_logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
