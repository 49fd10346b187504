"""Host-facing editor mode.

Mode wires the tokenizer, the indentation tracker and the style resolver
into the request path a host editor drives:

    cursor → next_token → advance(state) → classify → style

It owns the two caller-side policies of the tokenizer:

- Error recovery: when no rule matches, one character is skipped and
  reported as an ERROR token; scanning continues.
- End-of-line synthesis: every line ends in exactly one EOL token as seen
  by the tracker, unless it ends in a continuation marker.

Usage:
    >>> mode = Mode()
    >>> state = mode.start_state()
    >>> tokens = mode.tokenize_line("f : Function(x : Scalar) -> Scalar = {", state, 1)
    >>> mode.indent(state, "return x")
    2

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from equelle_mode.config import ModeConfig, get_mode_config
from equelle_mode.cursor import LineCursor
from equelle_mode.errors import LexError
from equelle_mode.grammar import create_default_rules, default_styles
from equelle_mode.indent import advance, query_indent
from equelle_mode.lexer import next_token
from equelle_mode.rules import RuleTable
from equelle_mode.state import DocumentState, create_initial_state
from equelle_mode.styles import classify
from equelle_mode.tokens import EOL_NAME, ERROR_NAME, Token, TokenKind
from equelle_mode.utils.logger import get_logger
from equelle_mode.utils.text import split_lines

logger = get_logger(__name__)

# Kinds that end a physical line as seen by the tracker
_LINE_ENDERS = (TokenKind.EOL, TokenKind.LINE_CONTINUATION)

Span = tuple[str, str | None]


class Mode:
    """Syntax-highlighting and indentation mode for one language.

    A Mode holds only immutable tables and configuration; all mutable
    state lives in the DocumentState each buffer owns.

    Thread Safety:
        Safe to share across buffers and threads. States are not.
    """

    __slots__ = ("_rules", "_styles", "_config")

    def __init__(
        self,
        rules: RuleTable | None = None,
        styles: Mapping[str, str] | None = None,
        config: ModeConfig | None = None,
    ) -> None:
        """Initialize mode.

        Args:
            rules: Ordered rule table (defaults to the Equelle grammar)
            styles: Token name to display class table
            config: Mode configuration; when None, the current context's
                config is read on every call
        """
        self._rules = rules if rules is not None else create_default_rules()
        self._styles = styles if styles is not None else default_styles()
        self._config = config

    @property
    def rules(self) -> RuleTable:
        return self._rules

    @property
    def styles(self) -> Mapping[str, str]:
        return self._styles

    @property
    def config(self) -> ModeConfig:
        """Effective configuration."""
        return self._config if self._config is not None else get_mode_config()

    def start_state(self) -> DocumentState:
        """Fresh state for a new buffer."""
        return create_initial_state()

    def make_cursor(self, line: str, lineno: int = 0) -> LineCursor:
        """Cursor over ``line`` using this mode's tab size."""
        return LineCursor(line, lineno, tab_size=self.config.tab_size)

    # =========================================================================
    # Token-at-a-time host protocol
    # =========================================================================

    def token(self, cursor: LineCursor, state: DocumentState) -> str | None:
        """Scan one token, feed the tracker, and return its display class.

        Advances the cursor by at least one character on a non-empty
        remainder. When the cursor reaches the end of the line, the
        tracker also receives the line's EOL token.
        """
        token = self._scan(cursor, state)
        return classify(token, self._styles)

    def _scan(self, cursor: LineCursor, state: DocumentState) -> Token:
        config = self.config
        if cursor.eol():
            # Empty remainder: the only token left is the line's EOL
            token = self._eol_token(cursor, state)
            advance(state, token, config=config)
            return token

        token = self._next(cursor, config)
        advance(state, token, config=config)
        if cursor.eol() and token.kind not in _LINE_ENDERS:
            start = cursor.start
            advance(state, self._eol_token(cursor, state), config=config)
            # Keep cursor.current() on the token just returned
            cursor.start = start
        return token

    def _next(self, cursor: LineCursor, config: ModeConfig) -> Token:
        """Next token, recovering from lexical errors."""
        result = next_token(cursor, self._rules, config=config)
        if isinstance(result, LexError):
            logger.debug("No rule matches at %s", result)
            return self._recover(cursor)
        if not result.text and not cursor.eol():
            # A zero-length match cannot make progress mid-line
            logger.debug("Zero-length match %r at %d:%d", result.name, result.lineno, result.col)
            return self._recover(cursor)
        return result

    def _recover(self, cursor: LineCursor) -> Token:
        """Skip one character and classify it as an error span."""
        cursor.begin_token()
        text = cursor.skip(1)
        return Token(
            kind=TokenKind.ERROR,
            name=ERROR_NAME,
            text=text,
            lineno=cursor.lineno,
            col=cursor.column(),
            line_indent=cursor.indentation(),
        )

    def _eol_token(self, cursor: LineCursor, state: DocumentState, text: str = "") -> Token:
        cursor.begin_token()
        if cursor.line.strip(" \t"):
            line_indent = cursor.indentation()
        else:
            # Blank lines do not re-indent the block they sit in
            line_indent = query_indent(state, "", config=self.config)
        return Token(
            kind=TokenKind.EOL,
            name=EOL_NAME,
            text=text,
            lineno=cursor.lineno,
            col=cursor.column(),
            line_indent=line_indent,
        )

    def blank_line(self, state: DocumentState, lineno: int = 0) -> None:
        """Feed the EOL token of an empty line to the tracker."""
        cursor = self.make_cursor("", lineno)
        advance(state, self._eol_token(cursor, state), config=self.config)

    def indent(self, state: DocumentState, text_after: str) -> int:
        """Indentation for the next line (pure)."""
        return query_indent(state, text_after, config=self.config)

    # =========================================================================
    # Line-at-a-time helpers
    # =========================================================================

    def iter_line(self, line: str, state: DocumentState, lineno: int = 0) -> Iterator[Token]:
        """Tokenize one physical line, threading ``state``.

        Yields every token the tracker consumes, including the EOL token.
        A line that is empty or only whitespace yields a single EOL token.
        """
        config = self.config
        cursor = self.make_cursor(line, lineno)

        if not line.strip(" \t"):
            token = self._eol_token(cursor, state, text=line)
            cursor.skip(len(line))
            advance(state, token, config=config)
            yield token
            return

        last: Token | None = None
        while not cursor.eol():
            token = self._next(cursor, config)
            advance(state, token, config=config)
            yield token
            last = token

        if last is None or last.kind not in _LINE_ENDERS:
            token = self._eol_token(cursor, state)
            advance(state, token, config=config)
            yield token

    def tokenize_line(self, line: str, state: DocumentState, lineno: int = 0) -> list[Token]:
        """Tokenize one physical line, threading ``state``."""
        return list(self.iter_line(line, state, lineno))

    def style_spans(self, tokens: list[Token]) -> list[Span]:
        """(text, display class) pairs for the non-empty tokens of a line."""
        return [(t.text, classify(t, self._styles)) for t in tokens if t.text]


_DEFAULT_MODE: Mode | None = None


def get_default_mode() -> Mode:
    """Equelle mode reading the current context's config (cached)."""
    global _DEFAULT_MODE
    if _DEFAULT_MODE is None:
        _DEFAULT_MODE = Mode()
    return _DEFAULT_MODE


def highlight(source: str, mode: Mode | None = None) -> list[list[Span]]:
    """Highlight a whole document.

    Args:
        source: Document text
        mode: Mode to use (defaults to the Equelle mode)

    Returns:
        Per physical line, the (text, display class) spans of its tokens.
    """
    mode = mode or get_default_mode()
    state = mode.start_state()
    return [
        mode.style_spans(mode.tokenize_line(line, state, lineno))
        for lineno, line in enumerate(split_lines(source), start=1)
    ]


def reindent(source: str, mode: Mode | None = None) -> str:
    """Re-indent every line of a document.

    Each line's indentation is computed from the state after the lines
    before it, then the re-indented line is tokenized to advance the state.
    Blank lines are emptied and line breaks are normalized to ``\\n``.

    Args:
        source: Document text
        mode: Mode to use (defaults to the Equelle mode)

    Returns:
        The re-indented document
    """
    mode = mode or get_default_mode()
    state = mode.start_state()
    out: list[str] = []
    for lineno, line in enumerate(split_lines(source), start=1):
        content = line.lstrip(" \t")
        if content:
            line = " " * mode.indent(state, content) + content
        else:
            line = ""
        mode.tokenize_line(line, state, lineno)
        out.append(line)
    return "\n".join(out)
