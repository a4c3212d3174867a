"""Logging configuration for syncbus."""
from __future__ import annotations

import logging
from typing import Optional

PACKAGE_LOGGER = "syncbus"

# Library stays silent unless the application configures logging
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def set_level(level: Optional[str]) -> None:
    """Apply a level to the package logger; None leaves it untouched.

    Args:
        level: Level name such as "DEBUG" or "warning"
    """
    if level:
        logging.getLogger(PACKAGE_LOGGER).setLevel(level.upper())


def log_delivery(logger: logging.Logger, delivered: int, live_readers: int) -> None:
    """Log a broadcast in a structured format.

    Args:
        logger: Logger instance
        delivered: Number of queues the value was appended to
        live_readers: Number of registered readers at the time of the broadcast
    """
    logger.debug(
        "Value broadcast",
        extra={
            "delivered": delivered,
            "live_readers": live_readers,
        },
    )
