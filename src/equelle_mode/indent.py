"""Indentation tracker.

Consumes tokens one at a time, threading block structure through a
DocumentState, and answers indentation queries against that state.

Transitions for each token, in order:

1. After an end-of-line token, a new line begins: clear the per-line flags.
2. A block open marks the line as having opened a block.
3. A continuation marker marks the logical line as continued.
4. A Function token sets the alignment anchor for continuation lines.
5. At the end of a logical line, or at a continuation marker, adopt the
   line's actual indentation for the current level (the author's manual
   re-indent sticks), unless the line opened a block.
6. End of line resets the per-logical-line fields.
7. A block open pushes a level indented one unit past the line.
8. A block close pops a level; at level 0 it is a no-op.

"""

from __future__ import annotations

import warnings

from equelle_mode.config import ModeConfig, get_mode_config
from equelle_mode.errors import StructuralUnderflow
from equelle_mode.state import DocumentState
from equelle_mode.tokens import Token, TokenKind
from equelle_mode.utils.logger import get_logger

logger = get_logger(__name__)


def advance(
    state: DocumentState,
    token: Token,
    indent_unit: int | None = None,
    *,
    config: ModeConfig | None = None,
) -> None:
    """Update ``state`` in place for one token.

    Args:
        state: The buffer's state
        token: Next token, with ``col`` and ``line_indent`` set
        indent_unit: Columns per block level (defaults to config.indent_unit)
        config: Mode configuration (defaults to the current context's)
    """
    if config is None:
        config = get_mode_config()
    if indent_unit is None:
        indent_unit = config.indent_unit

    if state.at_eol:
        state.at_eol = False
        state.line_contained_block_start = False

    kind = token.kind
    match kind:
        case TokenKind.BLOCK_OPEN:
            state.line_contained_block_start = True
        case TokenKind.LINE_CONTINUATION:
            state.continued_line = True
        case TokenKind.FUNCTION:
            state.function_token_column = (
                token.col - token.line_indent + config.function_anchor_offset
            )
        case TokenKind.GENERIC | TokenKind.BLOCK_CLOSE | TokenKind.EOL | TokenKind.ERROR:
            pass

    ends_logical_line = kind is TokenKind.EOL and not state.continued_line
    if (
        ends_logical_line or kind is TokenKind.LINE_CONTINUATION
    ) and not state.line_contained_block_start:
        state.block_indent[state.block_level] = token.line_indent

    match kind:
        case TokenKind.EOL:
            state.at_eol = True
            state.continued_line = False
            state.function_token_column = 0
        case TokenKind.BLOCK_OPEN:
            state.block_indent.append(token.line_indent + indent_unit)
            state.block_level += 1
        case TokenKind.BLOCK_CLOSE:
            if state.block_level == 0:
                _underflow(token, config)
            else:
                state.block_indent.pop()
                state.block_level -= 1
        case (
            TokenKind.GENERIC
            | TokenKind.FUNCTION
            | TokenKind.LINE_CONTINUATION
            | TokenKind.ERROR
        ):
            pass


def _underflow(token: Token, config: ModeConfig) -> None:
    """Block close with nothing open: clamped, reported only."""
    logger.debug("Unbalanced block close at %d:%d ignored", token.lineno, token.col)
    if config.strict_blocks:
        warnings.warn(StructuralUnderflow(token.lineno, token.col), stacklevel=3)


def query_indent(
    state: DocumentState,
    next_line_text: str,
    *,
    config: ModeConfig | None = None,
) -> int:
    """Indentation for a line with content ``next_line_text``.

    Pure: reads ``state`` without modifying it.

    Args:
        state: The buffer's state after the preceding lines
        next_line_text: Text of the line being indented; leading
            whitespace is ignored
        config: Mode configuration (defaults to the current context's)

    Returns:
        Column the line should be indented to
    """
    if config is None:
        config = get_mode_config()

    if next_line_text.lstrip(" \t").startswith(config.block_close_marker):
        # Block close aligns with the enclosing level
        if state.block_level == 0:
            return state.block_indent[0]
        return state.block_indent[state.block_level - 1]
    if state.continued_line:
        return state.block_indent[state.block_level] + state.function_token_column
    return state.block_indent[state.block_level]
