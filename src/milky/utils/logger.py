"""Minimal logging utilities for Milky.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from milky.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.warning("highlight failed")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "milky." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'milky.mymodule'
    """
    if not (name == "milky" or name.startswith("milky.")):
        name = f"milky.{name}"
    return logging.getLogger(name)
