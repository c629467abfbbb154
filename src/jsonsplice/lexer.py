"""Located JSON lexer.

Scans JSON text into tokens that remember their exact offsets, so that
the parser can build a tree whose spans point back into the original
text. Whitespace and (optionally) comments are skipped, never rewritten.

No regex in the hot path; every step advances the position.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from jsonsplice.errors import EditComputationError
from jsonsplice.tokens import LITERAL_TOKENS, PUNCTUATION_TOKENS, Token, TokenType

_WHITESPACE = frozenset(" \t\n\r")
_DIGITS = frozenset("0123456789")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_SIMPLE_ESCAPES = frozenset('"\\/bfnrt')


class Lexer:
    """Tokenizer for JSON text with optional comment support.

    Usage:
        >>> [t.type.name for t in Lexer('{"a": [1, true]}').tokenize()]
        ['OPEN_BRACE', 'STRING', 'COLON', 'OPEN_BRACKET', 'NUMBER', 'COMMA', 'TRUE', 'CLOSE_BRACKET', 'CLOSE_BRACE', 'EOF']

    Raises:
        EditComputationError: On any character sequence that is not JSON.

    """

    __slots__ = (
        "_source",
        "_pos",
        "_lineno",
        "_line_start",
        "_allow_comments",
    )

    def __init__(self, source: str, *, allow_comments: bool = True) -> None:
        self._source = source
        self._pos = 0
        self._lineno = 1
        self._line_start = 0
        self._allow_comments = allow_comments

    def tokenize(self) -> Iterator[Token]:
        """Yield tokens until EOF (the EOF token is always last)."""
        source = self._source
        length = len(source)

        while True:
            self._skip_trivia()
            if self._pos >= length:
                yield self._make(TokenType.EOF, self._pos, self._pos)
                return

            start = self._pos
            char = source[start]

            if char in PUNCTUATION_TOKENS:
                self._pos += 1
                yield self._make(PUNCTUATION_TOKENS[char], start, self._pos)
            elif char == '"':
                self._scan_string()
                yield self._make(TokenType.STRING, start, self._pos)
            elif char == "-" or char in _DIGITS:
                self._scan_number()
                yield self._make(TokenType.NUMBER, start, self._pos)
            elif char.isalpha():
                end = start
                while end < length and source[end].isalnum():
                    end += 1
                word = source[start:end]
                if word not in LITERAL_TOKENS:
                    raise EditComputationError(f"unexpected literal {word!r}", start)
                self._pos = end
                yield self._make(LITERAL_TOKENS[word], start, end)
            else:
                raise EditComputationError(f"unexpected character {char!r}", start)

    # =========================================================================
    # Scanners
    # =========================================================================

    def _skip_trivia(self) -> None:
        source = self._source
        length = len(source)
        while self._pos < length:
            char = source[self._pos]
            if char in _WHITESPACE:
                self._advance_whitespace(char)
            elif char == "/" and self._allow_comments:
                self._skip_comment()
            else:
                return

    def _advance_whitespace(self, char: str) -> None:
        self._pos += 1
        if char == "\n":
            self._newline()
        elif char == "\r" and not self._source.startswith("\n", self._pos):
            self._newline()

    def _newline(self) -> None:
        self._lineno += 1
        self._line_start = self._pos

    def _skip_comment(self) -> None:
        source = self._source
        start = self._pos
        if source.startswith("//", start):
            end = start + 2
            while end < len(source) and source[end] not in "\r\n":
                end += 1
            self._pos = end
        elif source.startswith("/*", start):
            close = source.find("*/", start + 2)
            if close < 0:
                raise EditComputationError("unterminated block comment", start)
            self._pos = start + 2
            while self._pos < close:
                char = source[self._pos]
                if char in "\r\n":
                    self._advance_whitespace(char)
                else:
                    self._pos += 1
            self._pos = close + 2
        else:
            raise EditComputationError("unexpected character '/'", start)

    def _scan_string(self) -> None:
        source = self._source
        length = len(source)
        pos = self._pos + 1
        while pos < length:
            char = source[pos]
            if char == '"':
                self._pos = pos + 1
                return
            if char == "\\":
                escape = source[pos + 1 : pos + 2]
                if escape == "u":
                    digits = source[pos + 2 : pos + 6]
                    if len(digits) != 4 or not all(d in _HEX_DIGITS for d in digits):
                        raise EditComputationError("invalid unicode escape", pos)
                    pos += 6
                    continue
                if escape not in _SIMPLE_ESCAPES:
                    raise EditComputationError("invalid escape sequence", pos)
                pos += 2
                continue
            if ord(char) < 0x20:
                raise EditComputationError("control character in string", pos)
            pos += 1
        raise EditComputationError("unterminated string", self._pos)

    def _scan_number(self) -> None:
        source = self._source
        start = pos = self._pos
        if source.startswith("-", pos):
            pos += 1
        pos = self._scan_int_part(pos, start)
        if source.startswith(".", pos):
            pos = self._scan_digits(pos + 1, start)
        if source[pos : pos + 1] in ("e", "E"):
            pos += 1
            if source[pos : pos + 1] in ("+", "-"):
                pos += 1
            pos = self._scan_digits(pos, start)
        self._pos = pos

    def _scan_int_part(self, pos: int, start: int) -> int:
        if self._source.startswith("0", pos):
            return pos + 1
        return self._scan_digits(pos, start)

    def _scan_digits(self, pos: int, start: int) -> int:
        source = self._source
        end = pos
        while end < len(source) and source[end] in _DIGITS:
            end += 1
        if end == pos:
            raise EditComputationError("malformed number", start)
        return end

    def _make(self, token_type: TokenType, start: int, end: int) -> Token:
        return Token(
            type=token_type,
            value=self._source[start:end],
            offset=start,
            lineno=self._lineno,
            col_offset=start - self._line_start + 1,
        )
