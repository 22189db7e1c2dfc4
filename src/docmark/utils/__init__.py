"""Utility modules for docmark.

Provides:
- logger: get_logger for namespaced logging
"""

from docmark.utils.logger import get_logger

__all__ = [
    "get_logger",
]
