"""Minimal logging utilities for spanned.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from spanned.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Tracking input")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "spanned." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("counting")
        >>> logger.name
        'spanned.counting'
    """
    if not (name == "spanned" or name.startswith("spanned.")):
        name = f"spanned.{name}"
    return logging.getLogger(name)
