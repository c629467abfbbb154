"""Utility modules for jsonsplice.

Provides:
- logger: get_logger for logging
"""

from jsonsplice.utils.logger import get_logger

__all__ = [
    "get_logger",
]
