"""Incremental re-tokenization for edited buffers.

An IncrementalDocument keeps, for every line, the DocumentState before it
and the tokens it produced. When lines are replaced, tokenization restarts
from the saved state before the first edited line and runs until the state
before some line past the edit equals the state previously recorded there.
From that point on the old results are reused, with line numbers shifted.

Tokens depend only on line text, and the tracker only on the state and the
tokens, so convergence of the state implies everything after is unchanged.
The result is identical to re-tokenizing the whole document from
``create_initial_state()``; ``reparse()`` does exactly that.

Thread Safety:
    One IncrementalDocument per buffer. Not safe for concurrent edits.

"""

from collections.abc import Sequence
from dataclasses import replace

from equelle_mode.errors import EditRangeError
from equelle_mode.mode import Mode, get_default_mode
from equelle_mode.state import DocumentState
from equelle_mode.tokens import Token
from equelle_mode.utils.logger import get_logger
from equelle_mode.utils.text import split_lines

logger = get_logger(__name__)

LineTokens = tuple[Token, ...]


class IncrementalDocument:
    """Line-indexed token and state cache for one buffer.

    Lines are 0-indexed here; tokens carry 1-indexed line numbers.

    Usage:
        >>> doc = IncrementalDocument("x = {\\n  y\\n}")
        >>> doc.indent_for(1)
        2
        >>> doc.edit(1, 2, ["  z", "  w"])
        2
    """

    __slots__ = ("_mode", "_lines", "_states", "_tokens")

    def __init__(self, source: str = "", mode: Mode | None = None) -> None:
        """Initialize and fully tokenize ``source``.

        Args:
            source: Document text
            mode: Mode to use (defaults to the Equelle mode). Its effective
                config is captured now, so cached states stay valid when
                the context config changes later.
        """
        mode = mode or get_default_mode()
        self._mode = Mode(mode.rules, mode.styles, config=mode.config)
        self._lines: list[str] = []
        self._states: list[DocumentState] = []
        self._tokens: list[LineTokens] = []
        self.set_text(source)

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def mode(self) -> Mode:
        """Mode with the config this document was tokenized under."""
        return self._mode

    def __len__(self) -> int:
        return len(self._lines)

    def set_text(self, source: str) -> None:
        """Replace the whole document and re-tokenize it."""
        self._lines = split_lines(source)
        self.reparse()

    def reparse(self) -> None:
        """Rebuild all states and tokens from the initial state."""
        state = self._mode.start_state()
        self._states = [state.copy()]
        self._tokens = []
        for index, line in enumerate(self._lines):
            self._tokens.append(tuple(self._mode.tokenize_line(line, state, index + 1)))
            self._states.append(state.copy())

    def edit(self, first_line: int, last_line: int, new_lines: Sequence[str]) -> int:
        """Replace lines ``first_line:last_line`` with ``new_lines``.

        Args:
            first_line: First replaced line (0-indexed)
            last_line: End of the replaced range (exclusive); equal to
                ``first_line`` for a pure insertion
            new_lines: Replacement lines, without newlines

        Returns:
            Number of lines re-tokenized

        Raises:
            EditRangeError: If the range is outside the document
        """
        line_count = len(self._lines)
        if not 0 <= first_line <= last_line <= line_count:
            raise EditRangeError(first_line, last_line, line_count)
        if not new_lines and first_line == 0 and last_line == line_count:
            # A document always has at least one line
            new_lines = [""]

        old_states = self._states
        old_tokens = self._tokens
        delta = len(new_lines) - (last_line - first_line)
        edit_end = first_line + len(new_lines)

        self._lines[first_line:last_line] = list(new_lines)
        states = old_states[: first_line + 1]
        tokens = old_tokens[:first_line]
        state = states[-1].copy()

        retokenized = 0
        index = first_line
        while index < len(self._lines):
            if index >= edit_end:
                old_index = index - delta
                if state == old_states[old_index]:
                    tokens.extend(_shift_lines(old_tokens[old_index:], delta))
                    states.extend(old_states[old_index + 1 :])
                    break
            tokens.append(tuple(self._mode.tokenize_line(self._lines[index], state, index + 1)))
            states.append(state.copy())
            retokenized += 1
            index += 1

        self._states = states
        self._tokens = tokens
        logger.debug(
            "Edit %d..%d (+%d lines): re-tokenized %d of %d lines",
            first_line,
            last_line,
            len(new_lines),
            retokenized,
            len(self._lines),
        )
        return retokenized

    def state_before(self, index: int) -> DocumentState:
        """Copy of the state before line ``index`` (``len(doc)`` for the end)."""
        return self._states[index].copy()

    @property
    def final_state(self) -> DocumentState:
        """Copy of the state after the last line."""
        return self._states[-1].copy()

    def tokens(self, index: int) -> LineTokens:
        """Tokens of line ``index``, ending in its EOL or continuation token."""
        return self._tokens[index]

    def indent_for(self, index: int) -> int:
        """Indentation the mode computes for line ``index``."""
        return self._mode.indent(self._states[index], self._lines[index])

    def states(self) -> list[DocumentState]:
        """Copies of the states before every line, plus the final state."""
        return [s.copy() for s in self._states]


def _shift_lines(lines: Sequence[LineTokens], delta: int) -> list[LineTokens]:
    """Shift token line numbers by delta."""
    if delta == 0:
        return list(lines)
    return [tuple(replace(t, lineno=t.lineno + delta) for t in line) for line in lines]
