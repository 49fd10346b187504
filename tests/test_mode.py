"""Tests for the host-facing Mode: token protocol, highlight, reindent."""

from equelle_mode.config import ModeConfig, mode_config_context
from equelle_mode.mode import Mode, highlight, reindent
from equelle_mode.rules import RuleTableBuilder
from equelle_mode.tokens import TokenKind

HEAT_EQUATION = """\
# Heat equation
k : Scalar = InputScalarWithDefault("k", 0.3)
u0 : Collection Of Scalar On AllCells() = InputCollectionOfScalar("u0", AllCells())
computeFlux : Function(u : Collection Of Scalar On AllCells()) ...
              -> Collection Of Scalar On InteriorFaces()
computeFlux(u) = {
  fluxes = -k * Gradient(u)
  -> fluxes
}
"""


class TestTokenProtocol:
    """One call per host token request."""

    def test_styles_of_a_line(self) -> None:
        mode = Mode()
        state = mode.start_state()
        cursor = mode.make_cursor("x = 1 # one", 1)
        styles = []
        while not cursor.eol():
            styles.append(mode.token(cursor, state))
        assert styles == ["variable", "whitespace", "operator", "whitespace", "number",
                          "whitespace", "comment"]

    def test_eol_fed_when_line_ends(self) -> None:
        mode = Mode()
        state = mode.start_state()
        cursor = mode.make_cursor("x = {", 1)
        while not cursor.eol():
            mode.token(cursor, state)
        assert state.at_eol is True
        assert state.block_indent == [0, 2]

    def test_no_eol_after_continuation(self) -> None:
        mode = Mode()
        state = mode.start_state()
        cursor = mode.make_cursor("f(a, ...", 1)
        while not cursor.eol():
            mode.token(cursor, state)
        assert state.at_eol is False
        assert state.continued_line is True

    def test_error_recovery_continues(self) -> None:
        mode = Mode()
        state = mode.start_state()
        cursor = mode.make_cursor("a $ b", 1)
        styles = []
        while not cursor.eol():
            styles.append(mode.token(cursor, state))
        assert styles == ["variable", "whitespace", "error", "whitespace", "variable"]

    def test_blank_line_keeps_block_indent(self) -> None:
        mode = Mode()
        state = mode.start_state()
        mode.tokenize_line("x = {", state, 1)
        mode.tokenize_line("    y", state, 2)
        mode.blank_line(state, 3)
        assert state.block_indent == [0, 4]
        assert state.at_eol is True

    def test_token_and_tokenize_line_agree(self) -> None:
        mode = Mode()
        by_token = mode.start_state()
        by_line = mode.start_state()
        for lineno, line in enumerate(HEAT_EQUATION.split("\n"), start=1):
            mode.tokenize_line(line, by_line, lineno)
            if not line:
                mode.blank_line(by_token, lineno)
                continue
            cursor = mode.make_cursor(line, lineno)
            while not cursor.eol():
                mode.token(cursor, by_token)
        assert by_token == by_line

    def test_host_reads_token_text_from_cursor(self) -> None:
        mode = Mode()
        state = mode.start_state()
        line = "u : Scalar = 1 $"
        cursor = mode.make_cursor(line, 1)
        spans = []
        while not cursor.eol():
            if cursor.sol():
                assert cursor.peek() == "u"
            style = mode.token(cursor, state)
            spans.append((cursor.current(), style))
        assert "".join(text for text, _ in spans) == line
        assert spans[-1] == ("$", "error")
        assert [s for s in spans if s[0].strip()] == [
            s for s in highlight(line)[0] if s[0].strip()
        ]
        assert state.at_eol is True


class TestTokenizeLine:
    def test_empty_line_single_eol(self) -> None:
        mode = Mode()
        tokens = mode.tokenize_line("", mode.start_state(), 1)
        assert [t.kind for t in tokens] == [TokenKind.EOL]

    def test_whitespace_line_single_eol(self) -> None:
        mode = Mode()
        tokens = mode.tokenize_line("   \t", mode.start_state(), 1)
        assert [t.kind for t in tokens] == [TokenKind.EOL]
        assert tokens[0].text == "   \t"

    def test_line_numbers(self) -> None:
        mode = Mode()
        tokens = mode.tokenize_line("a b", mode.start_state(), 7)
        assert {t.lineno for t in tokens} == {7}

    def test_zero_length_rule_cannot_stall(self) -> None:
        rules = RuleTableBuilder().add_token(r"a*", "AS").build()
        mode = Mode(rules=rules)
        tokens = mode.tokenize_line("bab", mode.start_state(), 1)
        assert [t.kind for t in tokens] == [
            TokenKind.ERROR,
            TokenKind.GENERIC,
            TokenKind.ERROR,
            TokenKind.EOL,
        ]

    def test_grammar_eol_is_not_duplicated(self) -> None:
        rules = RuleTableBuilder().add_token(r"\w+", "W").add_token(r";", "EOL").build()
        mode = Mode(rules=rules)
        tokens = mode.tokenize_line("a;", mode.start_state(), 1)
        assert [t.kind for t in tokens] == [TokenKind.GENERIC, TokenKind.EOL]


class TestHighlight:
    def test_spans_cover_lines(self) -> None:
        result = highlight(HEAT_EQUATION)
        for line, spans in zip(HEAT_EQUATION.split("\n"), result, strict=True):
            if line.strip():
                assert "".join(text for text, _ in spans) == line

    def test_keywords_and_builtins(self) -> None:
        spans = highlight("u0 : Collection Of Scalar On AllCells()")[0]
        classes = {text: style for text, style in spans}
        assert classes["Collection"] == "keyword"
        assert classes["Scalar"] == "type"
        assert classes["AllCells"] == "builtin"
        assert classes["u0"] == "variable"

    def test_custom_mode(self) -> None:
        rules = RuleTableBuilder().add_token(r"\S+", "WORD").add_token(r"\s+", "SPACE").build()
        mode = Mode(rules=rules, styles={"WORD": "w"})
        assert highlight("a b", mode) == [[("a", "w"), (" ", "SPACE"), ("b", "w")]]


class TestReindent:
    def test_reindents_blocks(self) -> None:
        source = "f(x) = {\nreturn x\n}"
        assert reindent(source) == "f(x) = {\n  return x\n}"

    def test_nested_blocks_with_wider_unit(self) -> None:
        source = "a = {\nb = {\nc\n}\n}"
        expected = "a = {\n    b = {\n        c\n    }\n}"
        with mode_config_context(ModeConfig(indent_unit=4)):
            assert reindent(source) == expected

    def test_continuation_aligns_past_function(self) -> None:
        source = "f : Function(x : Scalar, ...\ny : Scalar) -> Scalar"
        expected = "f : Function(x : Scalar, ...\n            y : Scalar) -> Scalar"
        assert reindent(source) == expected

    def test_blank_lines_emptied(self) -> None:
        source = "a = {\n   \nb\n}"
        assert reindent(source) == "a = {\n\n  b\n}"

    def test_idempotent(self) -> None:
        once = reindent(HEAT_EQUATION)
        assert reindent(once) == once

    def test_unbalanced_close(self) -> None:
        assert reindent("}\n}\nx") == "}\n}\nx"


class TestLineBreaks:
    """Windows and old Mac line breaks behave like ``\\n``."""

    def test_crlf_highlight_has_no_error_spans(self) -> None:
        result = highlight("x = {\r\n  y\r\n}\r\n")
        assert len(result) == 4
        assert result == highlight("x = {\n  y\n}\n")
        assert all(style != "error" for spans in result for _, style in spans)

    def test_lone_cr_splits_lines(self) -> None:
        assert highlight("a\rb") == highlight("a\nb")

    def test_crlf_reindent_normalizes_to_lf(self) -> None:
        source = "a = {\r\nb\r\n    \r\n}\r\n"
        assert reindent(source) == "a = {\n  b\n\n}\n"

    def test_crlf_blank_line_does_not_shift_block(self) -> None:
        source = "a = {\r\n  b\r\n    \r\n  c\r\n}"
        assert reindent(source) == "a = {\n  b\n\n  c\n}"
