"""Error types for equelle_mode.

Nothing in the tokenizer or the indentation tracker is fatal to the host:

- LexError is a result value returned by the tokenizer when no rule
  matches. The caller recovers by skipping one character.
- StructuralUnderflow is a warning category for a block close with no
  open block. The tracker clamps it to a no-op.

Exceptions are raised only for invalid configuration (rule tables,
config values), at construction time.
"""

from __future__ import annotations

from dataclasses import dataclass


class EquelleModeError(Exception):
    """Base exception for all equelle_mode errors.

    Subclass this for specific error categories.
    """

    pass


class RuleTableError(EquelleModeError):
    """Invalid tokenizer rule table.

    Raised when a rule has an uncompilable pattern or a non-callable
    action, or when a rule table is built from invalid input.
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        """Initialize rule table error.

        Args:
            message: Error description
            index: Registration index of the offending rule (optional)
        """
        self.index = index
        location = f" (rule {index})" if index is not None else ""
        super().__init__(f"Rule table{location}: {message}")


class ConfigError(EquelleModeError):
    """Invalid mode configuration value."""

    pass


class StructuralUnderflow(EquelleModeError, UserWarning):
    """A block-close marker arrived with no open block.

    Issued as a warning only when ``ModeConfig.strict_blocks`` is set;
    the tracker always clamps the close to a no-op.
    """

    def __init__(self, lineno: int, col: int) -> None:
        self.lineno = lineno
        self.col = col
        super().__init__(f"{lineno}:{col} block close without matching block open")


@dataclass(frozen=True, slots=True)
class LexError:
    """No tokenizer rule matched at a position.

    Returned (not raised) by ``next_token``. The cursor is left at the
    failure point.

    Attributes:
        position: Character offset into the line
        lineno: Line number
        col: Visual column of the failure point

    """

    position: int
    lineno: int
    col: int

    def __str__(self) -> str:
        return f"{self.lineno}:{self.col} no rule matches"


class EditRangeError(EquelleModeError):
    """An edit refers to lines outside the document."""

    def __init__(self, first_line: int, last_line: int, line_count: int) -> None:
        self.first_line = first_line
        self.last_line = last_line
        self.line_count = line_count
        super().__init__(
            f"Edit range {first_line}..{last_line} outside document of {line_count} lines"
        )
