"""Process-wide logging configuration and logger access."""

from __future__ import annotations

import logging
import sys

LOG_ROOT_NAME = "hellosite"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def log_configure(level: str = "INFO") -> logging.Logger:
    """Attach a single stdout handler to the service root logger.

    Args:
        level: Logging level name applied to the service root logger.

    Returns:
        logging.Logger: Configured service root logger.

    Raises:
        ValueError: Raised when the level name is unknown.
    """

    logger = logging.getLogger(LOG_ROOT_NAME)
    logger.setLevel(level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)

    return logger


def log_get_logger(name: str) -> logging.Logger:
    """Return a child logger of the service root logger."""

    if name == LOG_ROOT_NAME or name.startswith(f"{LOG_ROOT_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOG_ROOT_NAME}.{name}")
