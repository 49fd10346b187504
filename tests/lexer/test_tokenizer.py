"""Tests for the longest-match tokenizer."""

import re

import pytest

from equelle_mode.config import ModeConfig
from equelle_mode.cursor import LineCursor
from equelle_mode.errors import LexError
from equelle_mode.grammar import create_default_rules
from equelle_mode.lexer import next_token
from equelle_mode.rules import RuleTableBuilder, token_action
from equelle_mode.tokens import Token, TokenKind


def _all_tokens(line: str, rules=None) -> list[Token]:
    """Tokenize a line that contains no unmatched characters."""
    rules = rules or create_default_rules()
    cursor = LineCursor(line, lineno=1)
    tokens = []
    while not cursor.eol():
        result = next_token(cursor, rules)
        assert isinstance(result, Token), f"unexpected {result}"
        tokens.append(result)
    return tokens


class TestLongestMatch:
    """Selection of the winning rule."""

    def test_equal_length_tie_goes_to_first_registered(self) -> None:
        rules = RuleTableBuilder().add_token("a", "K1").add_token("a", "K2").build()
        token = next_token(LineCursor("a"), rules)
        assert isinstance(token, Token)
        assert token.name == "K1"

    def test_longer_match_beats_earlier_rule(self) -> None:
        rules = RuleTableBuilder().add_token("a", "SHORT").add_token("ab", "LONG").build()
        token = next_token(LineCursor("abc"), rules)
        assert isinstance(token, Token)
        assert token.name == "LONG"
        assert token.text == "ab"

    def test_keyword_beats_builtin_on_tie(self) -> None:
        tokens = _all_tokens("Collection")
        assert [t.name for t in tokens] == ["COLLECTION"]

    def test_longer_builtin_beats_keyword(self) -> None:
        tokens = _all_tokens("Collections")
        assert [t.name for t in tokens] == ["BUILTIN"]

    def test_multichar_operator_beats_single_char(self) -> None:
        tokens = _all_tokens("a->b")
        assert [t.name for t in tokens] == ["ID", "RET", "ID"]

    def test_zero_length_match_is_tracked(self) -> None:
        rules = RuleTableBuilder().add_token(r"x*", "EMPTY_OK").build()
        cursor = LineCursor("y")
        token = next_token(cursor, rules)
        assert isinstance(token, Token)
        assert token.name == "EMPTY_OK"
        assert token.text == ""
        assert cursor.pos == 0

    def test_match_consumes_text(self) -> None:
        cursor = LineCursor("abc def", lineno=4)
        token = next_token(cursor, create_default_rules())
        assert isinstance(token, Token)
        assert token.text == "abc"
        assert token.lineno == 4
        assert cursor.pos == 3


class TestLexError:
    """No rule matches."""

    def test_returns_lex_error_without_advancing(self) -> None:
        rules = RuleTableBuilder().add_token("a", "A").build()
        cursor = LineCursor("ab", lineno=2)
        cursor.skip(1)
        result = next_token(cursor, rules)
        assert result == LexError(position=1, lineno=2, col=1)
        assert cursor.pos == 1

    def test_empty_table_always_fails(self) -> None:
        result = next_token(LineCursor("x"), RuleTableBuilder().build())
        assert isinstance(result, LexError)

    def test_unknown_character_in_equelle(self) -> None:
        result = next_token(LineCursor("$"), create_default_rules())
        assert isinstance(result, LexError)
        assert result.position == 0


class TestReclassification:
    """Continuation detection layered on top of the grammar."""

    def test_continuation_marker_forces_kind(self) -> None:
        # The grammar action calls it something else entirely
        rules = RuleTableBuilder().add_token(r"\.\.\..*", "DOTS").build()
        token = next_token(LineCursor("... more"), rules)
        assert isinstance(token, Token)
        assert token.kind is TokenKind.LINE_CONTINUATION
        assert token.name == "LINECONT"

    def test_equelle_continuation_with_comment(self) -> None:
        tokens = _all_tokens("x = f(a, ... # more args")
        assert tokens[-1].kind is TokenKind.LINE_CONTINUATION
        assert tokens[-1].text == "... # more args"

    def test_custom_continuation_marker(self) -> None:
        rules = RuleTableBuilder().add_token(r"\\", "BACKSLASH").build()
        config = ModeConfig(continuation_marker="\\")
        token = next_token(LineCursor("\\"), rules, config=config)
        assert isinstance(token, Token)
        assert token.kind is TokenKind.LINE_CONTINUATION

    def test_plain_dot_is_not_continuation(self) -> None:
        tokens = _all_tokens("a.b")
        assert [t.kind for t in tokens] == [TokenKind.GENERIC] * 3


class TestPositions:
    """Columns and line indentation stamped on tokens."""

    def test_column_and_indent(self) -> None:
        tokens = _all_tokens("  f : Function(x)")
        function = next(t for t in tokens if t.kind is TokenKind.FUNCTION)
        assert function.col == 6
        assert function.line_indent == 2

    def test_tabs_expand_to_tab_size(self) -> None:
        cursor = LineCursor("\tx", tab_size=4)
        first = next_token(cursor, create_default_rules())
        second = next_token(cursor, create_default_rules())
        assert isinstance(first, Token) and isinstance(second, Token)
        assert first.name == "WHITESPACE"
        assert second.col == 4
        assert second.line_indent == 4

    def test_action_receives_text_and_line(self) -> None:
        seen = []

        def action(text: str, lineno: int) -> Token:
            seen.append((text, lineno))
            return token_action("X")(text, lineno)

        rules = RuleTableBuilder().add(re.compile(r"\w+"), action).build()
        next_token(LineCursor("hello", lineno=9), rules)
        assert seen == [("hello", 9)]


class TestStructuralKinds:
    """Grammar names map to structural kinds."""

    @pytest.mark.parametrize(
        ("source", "kind"),
        [
            ("{", TokenKind.BLOCK_OPEN),
            ("}", TokenKind.BLOCK_CLOSE),
            ("Function", TokenKind.FUNCTION),
            ("...", TokenKind.LINE_CONTINUATION),
            ("Scalar", TokenKind.GENERIC),
            ("# note", TokenKind.GENERIC),
        ],
    )
    def test_kind(self, source: str, kind: TokenKind) -> None:
        tokens = _all_tokens(source)
        assert len(tokens) == 1
        assert tokens[0].kind is kind
