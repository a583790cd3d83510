"""Minimal logging utilities for mathflow.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from mathflow.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Math block closed")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "mathflow." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'mathflow.mymodule'
    """
    if not (name == "mathflow" or name.startswith("mathflow.")):
        name = f"mathflow.{name}"
    return logging.getLogger(name)
