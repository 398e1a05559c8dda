"""Minimal logging utilities for Chirp.

Provides a simple get_logger function that wraps the standard library logging.
The package root logger carries a NullHandler, so nothing is printed
unless the application configures logging.

Example:
    >>> from chirp.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("dropped overlapping hashtag")
"""

from __future__ import annotations

import logging

logging.getLogger("chirp").addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "chirp." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'chirp.mymodule'
    """
    if not (name == "chirp" or name.startswith("chirp.")):
        name = f"chirp.{name}"
    return logging.getLogger(name)
