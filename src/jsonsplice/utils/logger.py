"""Minimal logging utilities for jsonsplice.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from jsonsplice.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Applying patch")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "jsonsplice." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("engine")
        >>> logger.name
        'jsonsplice.engine'
    """
    if not (name == "jsonsplice" or name.startswith("jsonsplice.")):
        name = f"jsonsplice.{name}"
    return logging.getLogger(name)
