"""Minimal logging utilities for scanmark.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from scanmark.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Scanning %d characters", 42)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "scanmark." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'scanmark.mymodule'
    """
    if not (name == "scanmark" or name.startswith("scanmark.")):
        name = f"scanmark.{name}"
    return logging.getLogger(name)
