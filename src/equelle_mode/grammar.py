"""Default Equelle rule table and style table.

These are the tables an external grammar-to-table step feeds the core.
They are built in code, in priority order: keywords come before the
generic BUILTIN rule so that ``Collection`` (an equal-length match for
both) is a keyword while ``Collections`` (longer as BUILTIN) is not.

Example:
    >>> rules = create_default_rules()
    >>> styles = default_styles()
    >>> styles["COMMENT"]
    'comment'
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType

from equelle_mode.rules import RuleTable, RuleTableBuilder, token_action
from equelle_mode.tokens import (
    EOL_NAME,
    ERROR_NAME,
    LINECONT_NAME,
    Token,
)

# Reserved words, by grammar token name
KEYWORDS = (
    ("COLLECTION", "Collection"),
    ("SEQUENCE", "Sequence"),
    ("ARRAY", "Array"),
    ("OF", "Of"),
    ("ON", "On"),
    ("EXTEND", "Extend"),
    ("SUBSET", "Subset"),
    ("MUTABLE", "Mutable"),
    ("FUNCTION", "Function"),
    ("FOR", "For"),
    ("IN", "In"),
    ("AND", "And"),
    ("OR", "Or"),
    ("NOT", "Not"),
    ("XOR", "Xor"),
)

TYPE_NAMES = (
    ("SCALAR", "Scalar"),
    ("VECTOR", "Vector"),
    ("BOOL", "Bool"),
    ("CELL", "Cell"),
    ("FACE", "Face"),
    ("EDGE", "Edge"),
    ("VERTEX", "Vertex"),
    ("STRING", "String"),
    ("STENCIL", "Stencil"),
)

ATOMS = (
    ("TRUE", "True"),
    ("FALSE", "False"),
)

# Multi-character operators; longest match picks them over single characters
OPERATORS = (
    ("RET", "->"),
    ("LEQ", "<="),
    ("GEQ", ">="),
    ("EQ", "=="),
    ("NEQ", "!="),
)

BRACKETS = frozenset("()[]{}")


def literal_action(text: str, lineno: int) -> Token:
    """Action naming the token after its own text (single-character tokens)."""
    return Token.create(text, text, lineno)


def _build_default_rules() -> RuleTable:
    """Build the default Equelle rule table (internal, not cached)."""
    builder = RuleTableBuilder()

    for name, word in (*KEYWORDS, *TYPE_NAMES, *ATOMS):
        builder.add_token(re.escape(word) + r"\b", name)

    builder.add_token(r"[A-Z][0-9a-zA-Z_]*", "BUILTIN")
    builder.add_token(r"[a-z_][0-9a-zA-Z_]*", "ID")
    builder.add_token(r"[0-9]+\.[0-9]+(?:[eE][+-]?[0-9]+)?|[0-9]+[eE][+-]?[0-9]+", "FLOAT")
    builder.add_token(r"[0-9]+", "INT")
    builder.add_token(r'"(?:\\.|[^"\\])*"', "STRING_LITERAL")
    builder.add_token(r"#.*", "COMMENT")
    builder.add_token(r"\.\.\.[ \t]*(?:#.*)?", LINECONT_NAME)
    builder.add_token(r"[ \t]+", "WHITESPACE")

    for name, op in OPERATORS:
        builder.add_token(re.escape(op), name)
    builder.add(r"[-+*/^<>=?:,()\[\]{}|@.]", literal_action)

    return builder.build()


# Cached singleton — safe since RuleTable is immutable
_DEFAULT_RULES: RuleTable | None = None


def create_default_rules() -> RuleTable:
    """Get the default Equelle rule table (cached singleton)."""
    global _DEFAULT_RULES
    if _DEFAULT_RULES is None:
        _DEFAULT_RULES = _build_default_rules()
    return _DEFAULT_RULES


def create_rules_with_defaults() -> RuleTableBuilder:
    """Create a builder pre-populated with the default Equelle rules.

    Rules added afterwards lose ties against the defaults.

        >>> rules = create_rules_with_defaults().add_token(r"<<<.*", "HEREDOC").build()
    """
    builder = RuleTableBuilder()
    for rule in create_default_rules():
        builder.add(rule.pattern, rule.action)
    return builder


def _build_default_styles() -> dict[str, str]:
    styles: dict[str, str] = {}
    for name, _ in KEYWORDS:
        styles[name] = "keyword"
    for name, _ in TYPE_NAMES:
        styles[name] = "type"
    for name, _ in ATOMS:
        styles[name] = "atom"
    for name, _ in OPERATORS:
        styles[name] = "operator"
    for char in "-+*/^<>=?:,|@.":
        styles[char] = "operator"
    for char in BRACKETS:
        styles[char] = "bracket"
    styles.update(
        {
            "BUILTIN": "builtin",
            "ID": "variable",
            "FLOAT": "number",
            "INT": "number",
            "STRING_LITERAL": "string",
            "COMMENT": "comment",
            LINECONT_NAME: "meta",
            "WHITESPACE": "whitespace",
            EOL_NAME: "eol",
            ERROR_NAME: "error",
        }
    )
    return styles


_DEFAULT_STYLES: Mapping[str, str] = MappingProxyType(_build_default_styles())


def default_styles() -> Mapping[str, str]:
    """Read-only mapping of Equelle token names to display classes."""
    return _DEFAULT_STYLES
