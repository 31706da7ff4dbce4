"""Utility modules for smartpatch.

Provides:
- logger: get_logger for logging
- text: line/column helpers for offsets
"""

from smartpatch.utils.logger import get_logger
from smartpatch.utils.text import line_col_at, split_lines

__all__ = [
    "get_logger",
    "line_col_at",
    "split_lines",
]
