"""Utility modules for zhlint.

Provides:
- logger: get_logger for logging
"""

from zhlint.utils.logger import get_logger

__all__ = [
    "get_logger",
]
