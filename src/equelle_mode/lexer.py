"""Longest-match tokenizer over an ordered rule table.

Every rule is tried as a non-consuming prefix match at the cursor. The
strictly longest match wins; on a tie the earliest-registered rule wins.
The winner's text is consumed and its action builds the token.

No exceptions in the hot path: when nothing matches, a LexError value is
returned and the cursor is left in place. Recovery (skip one character,
classify it as an error) belongs to the caller, see ``Mode``.

Thread Safety:
    ``next_token`` mutates only the cursor it is given.

"""

from __future__ import annotations

from equelle_mode.config import ModeConfig, get_mode_config
from equelle_mode.cursor import LineCursor
from equelle_mode.errors import LexError
from equelle_mode.rules import RuleTable
from equelle_mode.tokens import LINECONT_NAME, Token, TokenKind


def next_token(
    cursor: LineCursor,
    rules: RuleTable,
    *,
    config: ModeConfig | None = None,
) -> Token | LexError:
    """Produce the next token at the cursor and advance past it.

    Args:
        cursor: Position in the current line
        rules: Ordered rule table
        config: Mode configuration (defaults to the current context's)

    Returns:
        The token, stamped with its start column and the line indentation,
        or a LexError if no rule matches.

    Complexity: O(len(rules)) prefix matches per call
    """
    if config is None:
        config = get_mode_config()

    cursor.begin_token()
    line = cursor.line
    pos = cursor.pos

    best = None
    best_len = -1
    for rule in rules:
        m = rule.pattern.match(line, pos)
        if m is not None:
            length = m.end() - pos
            # Strict comparison: earlier rules keep ties
            if length > best_len:
                best_len = length
                best = rule

    if best is None:
        return LexError(position=pos, lineno=cursor.lineno, col=cursor.column())

    text = cursor.skip(best_len)
    token = best.action(text, cursor.lineno)
    if text.startswith(config.continuation_marker):
        token = token.as_kind(TokenKind.LINE_CONTINUATION, LINECONT_NAME)
    return token.positioned(cursor.column(), cursor.indentation())
