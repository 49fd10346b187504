"""Line cursor for the tokenizer.

A LineCursor is a position into a single physical line. The tokenizer
attempts non-consuming matches at the cursor, then commits the winning
match; the host creates one cursor per line.

Columns and indentation are visual (tabs expanded to ``tab_size``).

Thread Safety:
    Cursors are single-use. Create one per line.

"""

from __future__ import annotations

import re

from equelle_mode.utils.text import count_column, leading_indent


class LineCursor:
    """Position into the current line.

    The tokenizer itself only needs ``eol``, ``skip``, ``begin_token``,
    ``column`` and ``indentation``. ``sol``, ``peek``, ``match`` and
    ``current`` complete the StringStream-style surface for hosts that
    drive ``Mode.token`` themselves and want to inspect the line around
    the token just produced.

    Usage:
        >>> cursor = LineCursor("  foo() {", lineno=3)
        >>> cursor.indentation()
        2
        >>> cursor.match(re.compile(r"\\s+")) is not None
        True
        >>> cursor.pos
        2

    """

    __slots__ = ("line", "lineno", "pos", "start", "tab_size", "_indent")

    def __init__(self, line: str, lineno: int = 0, *, tab_size: int = 4) -> None:
        """Initialize cursor at the start of ``line``.

        Args:
            line: Line content without its trailing newline
            lineno: Line number recorded on produced tokens
            tab_size: Tab stop width for columns
        """
        self.line = line
        self.lineno = lineno
        self.pos = 0
        self.start = 0
        self.tab_size = tab_size
        self._indent: int | None = None

    def eol(self) -> bool:
        """True when the cursor has reached the end of the line."""
        return self.pos >= len(self.line)

    def sol(self) -> bool:
        """True when the cursor is at the start of the line."""
        return self.pos == 0

    def peek(self) -> str:
        """Current character, or empty string at end of line."""
        if self.pos >= len(self.line):
            return ""
        return self.line[self.pos]

    def match(self, pattern: re.Pattern[str], consume: bool = True) -> re.Match[str] | None:
        """Match ``pattern`` as a prefix of the remaining input.

        Args:
            pattern: Compiled pattern, anchored at the cursor position
            consume: Advance past the match when True

        Returns:
            The match object, or None
        """
        m = pattern.match(self.line, self.pos)
        if m is not None and consume:
            self.pos = m.end()
        return m

    def skip(self, count: int = 1) -> str:
        """Advance past ``count`` characters and return them."""
        end = min(self.pos + count, len(self.line))
        skipped = self.line[self.pos : end]
        self.pos = end
        return skipped

    def begin_token(self) -> None:
        """Mark the current position as the start of the next token."""
        self.start = self.pos

    def current(self) -> str:
        """Text between the token start and the cursor."""
        return self.line[self.start : self.pos]

    def column(self) -> int:
        """Visual column of the current token start."""
        return count_column(self.line, self.start, self.tab_size)

    def indentation(self) -> int:
        """Visual width of the line's leading whitespace."""
        if self._indent is None:
            self._indent = leading_indent(self.line, self.tab_size)
        return self._indent

    def __repr__(self) -> str:
        return f"LineCursor({self.line!r}, lineno={self.lineno}, pos={self.pos})"
