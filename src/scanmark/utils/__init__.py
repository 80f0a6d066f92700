"""Utility modules for scanmark.

Provides:
- logger: get_logger for logging
"""

from scanmark.utils.logger import get_logger

__all__ = [
    "get_logger",
]
