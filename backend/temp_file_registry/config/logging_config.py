"""
Logging Configuration

Maps the 0/1/2 verbosity flag onto standard logging levels.
"""

import logging
import sys

from temp_file_registry.config.settings import (
    LOG_LEVEL_DEBUG,
    LOG_LEVEL_INFO,
    LOG_LEVEL_PANIC,
)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_LEVELS = {
    LOG_LEVEL_PANIC: logging.CRITICAL,
    LOG_LEVEL_INFO: logging.INFO,
    LOG_LEVEL_DEBUG: logging.DEBUG,
}


def to_logging_level(verbosity: int) -> int:
    """Translate a verbosity flag into a logging level (unknown values mean DEBUG)."""
    return _LEVELS.get(verbosity, logging.DEBUG)


def configure_logging(verbosity: int) -> logging.Logger:
    """
    Configure root logging to stdout.

    Args:
        verbosity: 0 (panic), 1 (info) or 2 (debug)

    Returns:
        The package logger
    """
    level = to_logging_level(verbosity)
    logging.basicConfig(stream=sys.stdout, level=level, format=LOG_FORMAT, force=True)

    package_logger = logging.getLogger("temp_file_registry")
    package_logger.setLevel(level)
    return package_logger
