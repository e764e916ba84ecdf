"""Console logging setup for the demonstration and example scripts."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(component_name: str = "resumable_digest", log_level: str = "INFO") -> logging.Logger:
    """
    Attach a stdout handler to the ``component_name`` logger.

    Args:
        component_name: Logger name; child loggers (``resumable_digest.worker``
            and friends) inherit the handler.
        log_level: DEBUG, INFO, WARNING or ERROR. Unknown names fall back to INFO.

    Returns:
        Configured logger instance
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(component_name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    logger.addHandler(handler)
    logger.propagate = False

    return logger
