"""Logging helpers for anifranchise.

All messages go to the ``anifranchise`` logger on stderr so franchise listings
on stdout stay pipeable. Debug messages (build rounds, rate limit waits, page
requests) are dropped unless debugging is on, either through the
ANIFRANCHISE_DEBUG environment variable or ``--verbose`` on the CLI.
"""

import logging
import os
import sys
from typing import Optional

LOGGER_NAME = "anifranchise"

_debug_on = os.getenv("ANIFRANCHISE_DEBUG", "0") == "1"
_logger: Optional[logging.Logger] = None


def setup_logger() -> logging.Logger:
    """Return the package logger, attaching the stderr handler on first use."""
    global _logger
    if _logger is not None:
        return _logger
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(asctime)s %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if _debug_on else logging.INFO)
    _logger = logger
    return logger


def set_debug(enabled: bool) -> None:
    """Turn debug messages on or off for the rest of the process."""
    global _debug_on
    _debug_on = enabled
    setup_logger().setLevel(logging.DEBUG if enabled else logging.INFO)


def debug(msg: str) -> None:
    """Log a debug message if debugging is enabled."""
    if _debug_on:
        setup_logger().debug(msg)


def info(msg: str) -> None:
    setup_logger().info(msg)


def warn(msg: str) -> None:
    setup_logger().warning(msg)


def error(msg: str) -> None:
    setup_logger().error(msg)
