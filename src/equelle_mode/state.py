"""Per-buffer indentation state.

One DocumentState belongs to one editable buffer. It is created once,
mutated in place by every token the indentation tracker consumes, and
discarded with the buffer. States compare by value, so a state threaded
incrementally can be checked against a full reparse.

Thread Safety:
    Not shared between buffers; no locking.

"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class DocumentState:
    """Mutable block-structure state for one buffer.

    Attributes:
        block_level: Current nesting depth
        block_indent: Column new lines align to at each level;
            ``len(block_indent) == block_level + 1``
        line_contained_block_start: The current line has opened a block
        at_eol: An end-of-line token was the last token consumed
        continued_line: Inside a logical line extended by a continuation marker
        function_token_column: Alignment anchor from the last Function token
            on the current logical line

    """

    block_level: int = 0
    block_indent: list[int] = field(default_factory=lambda: [0])
    line_contained_block_start: bool = False
    at_eol: bool = False
    continued_line: bool = False
    function_token_column: int = 0

    def copy(self) -> DocumentState:
        """Independent snapshot of this state."""
        return DocumentState(
            block_level=self.block_level,
            block_indent=list(self.block_indent),
            line_contained_block_start=self.line_contained_block_start,
            at_eol=self.at_eol,
            continued_line=self.continued_line,
            function_token_column=self.function_token_column,
        )


def create_initial_state() -> DocumentState:
    """State for a new, empty buffer."""
    return DocumentState()
