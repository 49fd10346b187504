"""Utility modules for equelle_mode.

Provides:
- logger: get_logger for logging
- text: line splitting and indentation helpers for tab-expanded columns
"""

from equelle_mode.utils.logger import get_logger
from equelle_mode.utils.text import count_column, leading_indent, split_lines

__all__ = [
    "count_column",
    "get_logger",
    "leading_indent",
    "split_lines",
]
