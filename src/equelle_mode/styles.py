"""Token-to-display-class lookup.

Total mapping: names missing from the style table fall back to the
token's own name.
"""

from __future__ import annotations

from collections.abc import Mapping

from equelle_mode.grammar import default_styles
from equelle_mode.tokens import Token, TokenKind


def classify(token: Token | None, styles: Mapping[str, str] | None = None) -> str | None:
    """Display class for ``token``.

    Args:
        token: Token to classify; None yields None
        styles: Token name to class table (defaults to the Equelle table)

    Example:
        >>> classify(Token.create("COMMENT", "# hi"))
        'comment'
        >>> classify(Token.create("UNKNOWN_THING", "x"))
        'UNKNOWN_THING'
    """
    if token is None:
        return None
    if token.kind is TokenKind.ERROR:
        return "error"
    if styles is None:
        styles = default_styles()
    return styles.get(token.name, token.name)
