"""Token and TokenType definitions for the located JSON lexer.

The lexer produces a stream of Token objects that the parser consumes.
Each Token has a type, raw text, and source coordinates.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

Performance Note:
Token stores raw coordinates and lazily creates SourceLocation on demand.

"""

from dataclasses import dataclass
from enum import Enum, auto

from jsonsplice.location import SourceLocation


class TokenType(Enum):
    """Token types produced by the lexer."""

    EOF = auto()

    # Punctuation
    OPEN_BRACE = auto()  # {
    CLOSE_BRACE = auto()  # }
    OPEN_BRACKET = auto()  # [
    CLOSE_BRACKET = auto()  # ]
    COLON = auto()  # :
    COMMA = auto()  # ,

    # Values
    STRING = auto()
    NUMBER = auto()
    TRUE = auto()
    FALSE = auto()
    NULL = auto()


LITERAL_TOKENS: dict[str, TokenType] = {
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "null": TokenType.NULL,
}

PUNCTUATION_TOKENS: dict[str, TokenType] = {
    "{": TokenType.OPEN_BRACE,
    "}": TokenType.CLOSE_BRACE,
    "[": TokenType.OPEN_BRACKET,
    "]": TokenType.CLOSE_BRACKET,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
}

VALUE_TOKENS: frozenset[TokenType] = frozenset(
    {
        TokenType.STRING,
        TokenType.NUMBER,
        TokenType.TRUE,
        TokenType.FALSE,
        TokenType.NULL,
    }
)


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: The token type
        value: Raw source text of the token
        offset: Absolute start offset in the source
        lineno: Line number (1-indexed)
        col_offset: Column of the first character (1-indexed)

    """

    type: TokenType
    value: str
    offset: int
    lineno: int
    col_offset: int

    @property
    def end_offset(self) -> int:
        return self.offset + len(self.value)

    @property
    def location(self) -> SourceLocation:
        """Build the SourceLocation for this token."""
        return SourceLocation(
            lineno=self.lineno,
            col_offset=self.col_offset,
            offset=self.offset,
            end_offset=self.end_offset,
        )

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.lineno}:{self.col_offset})"
