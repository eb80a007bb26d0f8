"""Utility modules for spanned.

Provides:
- logger: get_logger for logging
"""

from spanned.utils.logger import get_logger

__all__ = [
    "get_logger",
]
