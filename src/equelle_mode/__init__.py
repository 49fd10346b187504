"""equelle_mode — syntax highlighting and indentation for the Equelle DSL.

A longest-match tokenizer over an ordered rule table, and an indentation
tracker threading block structure through a per-buffer DocumentState.
Any brace-structured language can plug in its own rule and style tables.

Quick Start:
    >>> from equelle_mode import highlight, reindent
    >>> highlight("u : Collection Of Scalar On AllCells()")[0][:3]
    [('u', 'variable'), (' ', 'whitespace'), (':', 'operator')]
    >>> print(reindent("f(x) = {\\nreturn x\\n}"))
    f(x) = {
      return x
    }

Core operations (host protocol):
    >>> state = create_initial_state()
    >>> cursor = LineCursor("foo() {", lineno=1)
    >>> token = next_token(cursor, create_default_rules())
    >>> advance(state, token, indent_unit=2)
    >>> classify(token)
    'variable'
    >>> query_indent(state, "bar()")
    0
"""

from equelle_mode.config import (
    ModeConfig,
    get_mode_config,
    mode_config_context,
    reset_mode_config,
    set_mode_config,
)
from equelle_mode.cursor import LineCursor
from equelle_mode.errors import (
    ConfigError,
    EditRangeError,
    EquelleModeError,
    LexError,
    RuleTableError,
    StructuralUnderflow,
)
from equelle_mode.grammar import (
    create_default_rules,
    create_rules_with_defaults,
    default_styles,
)
from equelle_mode.incremental import IncrementalDocument
from equelle_mode.indent import advance, query_indent
from equelle_mode.lexer import next_token
from equelle_mode.mode import Mode, get_default_mode, highlight, reindent
from equelle_mode.rules import Rule, RuleTable, RuleTableBuilder, token_action
from equelle_mode.state import DocumentState, create_initial_state
from equelle_mode.styles import classify
from equelle_mode.tokens import Token, TokenKind

__version__ = "0.1.0"

__all__ = [
    # Core operations
    "advance",
    "classify",
    "create_initial_state",
    "next_token",
    "query_indent",
    # Types
    "DocumentState",
    "LineCursor",
    "Rule",
    "RuleTable",
    "RuleTableBuilder",
    "Token",
    "TokenKind",
    "token_action",
    # Grammar tables
    "create_default_rules",
    "create_rules_with_defaults",
    "default_styles",
    # Host facade
    "IncrementalDocument",
    "Mode",
    "get_default_mode",
    "highlight",
    "reindent",
    # Configuration
    "ModeConfig",
    "get_mode_config",
    "mode_config_context",
    "reset_mode_config",
    "set_mode_config",
    # Errors
    "ConfigError",
    "EditRangeError",
    "EquelleModeError",
    "LexError",
    "RuleTableError",
    "StructuralUnderflow",
    "__version__",
]
