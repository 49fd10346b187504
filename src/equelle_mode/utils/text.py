"""Column and indentation helpers for equelle_mode.

Columns are visual: tabs advance to the next multiple of the tab size.

Example:
    >>> from equelle_mode.utils.text import leading_indent
    >>> leading_indent("\\t  x = 1", tab_size=4)
    6
"""

from __future__ import annotations

import re


def count_column(text: str, end: int | None = None, tab_size: int = 4) -> int:
    """Visual column of position ``end`` in ``text``.

    Args:
        text: Line content
        end: Character offset (defaults to len(text))
        tab_size: Tab stop width

    Returns:
        0-indexed visual column
    """
    if end is None:
        end = len(text)
    col = 0
    for char in text[:end]:
        if char == "\t":
            col += tab_size - (col % tab_size)
        else:
            col += 1
    return col


def leading_indent(text: str, tab_size: int = 4) -> int:
    """Visual width of the leading whitespace of ``text``.

    Spaces count as 1, tabs expand to the next multiple of ``tab_size``.
    """
    indent = 0
    for char in text:
        if char == " ":
            indent += 1
        elif char == "\t":
            indent += tab_size - (indent % tab_size)
        else:
            break
    return indent


_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(source: str) -> list[str]:
    """Split ``source`` into physical lines without their line breaks.

    Accepts ``\\n``, ``\\r\\n`` and ``\\r``. A trailing line break yields a
    trailing empty line, and the empty string is one empty line.

    Example:
        >>> split_lines("a\\r\\nb\\n")
        ['a', 'b', '']
    """
    return _LINE_BREAK.split(source)
