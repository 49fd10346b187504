"""Token and TokenKind definitions for the Equelle mode tokenizer.

The tokenizer produces Token objects one at a time; the indentation
tracker and the style resolver consume them.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenKind is an enum (inherently immutable).

"""

from dataclasses import dataclass, replace
from enum import Enum, auto

# Grammar names carrying structural meaning for the indentation tracker
EOL_NAME = "EOL"
LINECONT_NAME = "LINECONT"
FUNCTION_NAME = "FUNCTION"
BLOCK_OPEN_NAME = "{"
BLOCK_CLOSE_NAME = "}"
ERROR_NAME = "ERROR"


class TokenKind(Enum):
    """Structural token kinds.

    The grammar may produce any number of token names; only these kinds
    matter to the indentation tracker. Everything else is GENERIC.

    """

    GENERIC = auto()
    BLOCK_OPEN = auto()  # {
    BLOCK_CLOSE = auto()  # }
    FUNCTION = auto()  # Function
    EOL = auto()  # end of physical line
    LINE_CONTINUATION = auto()  # ...
    ERROR = auto()  # unmatched input

    @classmethod
    def from_name(cls, name: str) -> "TokenKind":
        """Derive the structural kind of a grammar token name."""
        return _KIND_BY_NAME.get(name, cls.GENERIC)


_KIND_BY_NAME = {
    BLOCK_OPEN_NAME: TokenKind.BLOCK_OPEN,
    BLOCK_CLOSE_NAME: TokenKind.BLOCK_CLOSE,
    FUNCTION_NAME: TokenKind.FUNCTION,
    EOL_NAME: TokenKind.EOL,
    LINECONT_NAME: TokenKind.LINE_CONTINUATION,
    ERROR_NAME: TokenKind.ERROR,
}


@dataclass(frozen=True, slots=True)
class Token:
    """A classified, positioned unit of lexical input.

    Attributes:
        kind: Structural kind (from TokenKind enum)
        name: Grammar token name, e.g. "COLLECTION" or "{"
        text: The matched source text
        lineno: Originating line number
        col: Visual start column of the token (0-indexed, tabs expanded).
            Set by the tokenizer; 0 until then.
        line_indent: Indentation of the originating line (tabs expanded).
            Set by the tokenizer; 0 until then.

    """

    kind: TokenKind
    name: str
    text: str
    lineno: int = 0
    col: int = 0
    line_indent: int = 0

    @classmethod
    def create(cls, name: str, text: str, lineno: int = 0) -> "Token":
        """Create a token whose kind is derived from its grammar name."""
        return cls(kind=TokenKind.from_name(name), name=name, text=text, lineno=lineno)

    def positioned(self, col: int, line_indent: int) -> "Token":
        """Return a copy stamped with its column and line indentation."""
        return replace(self, col=col, line_indent=line_indent)

    def as_kind(self, kind: TokenKind, name: str) -> "Token":
        """Return a copy reclassified as another kind."""
        return replace(self, kind=kind, name=name)

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.text
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.kind.name}, {self.name!r}, {val!r}, {self.lineno}:{self.col})"
