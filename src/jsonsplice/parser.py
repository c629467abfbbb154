"""Recursive-descent parser producing a located JSON tree.

Used only on the *original* (editor-visible) text, which may carry
comments or trailing commas. The authoritative document and edited
values go through ``json.loads``; this parser exists to know where each
value lives in the text.

Example:
    >>> from jsonsplice.parser import parse_tree, to_value
    >>> tree = parse_tree('{"a": [1, 2]}')
    >>> to_value(tree)
    {'a': [1, 2]}
    >>> tree.get("a").value.location.offset
    6

Thread Safety:
Parser instances are single-use. ``parse_tree`` and ``to_value`` are pure.

"""

from __future__ import annotations

import json
import math
from collections.abc import Iterator
from typing import Any

from jsonsplice.config import PatchConfig, resolve_config
from jsonsplice.errors import EditComputationError
from jsonsplice.lexer import Lexer
from jsonsplice.nodes import ArrayNode, ObjectNode, Property, ScalarNode, ValueNode
from jsonsplice.tokens import Token, TokenType

_SCALAR_VALUES: dict[TokenType, Any] = {
    TokenType.TRUE: True,
    TokenType.FALSE: False,
    TokenType.NULL: None,
}


def _number(token: Token) -> int | float:
    try:
        value = json.loads(token.value)
    except ValueError as exc:
        raise EditComputationError(str(exc), token.offset) from exc
    if isinstance(value, float) and not math.isfinite(value):
        raise EditComputationError(f"number {token.value} is out of range", token.offset)
    return value


class Parser:
    """Builds a located tree from one source string.

    Raises:
        EditComputationError: If the text is empty or not JSON.

    """

    __slots__ = ("_tokens", "_current", "_allow_trailing_commas")

    def __init__(self, source: str, *, config: PatchConfig | None = None) -> None:
        config = resolve_config(config)
        lexer = Lexer(source, allow_comments=config.allow_comments)
        self._tokens: Iterator[Token] = lexer.tokenize()
        self._current: Token = next(self._tokens)
        self._allow_trailing_commas = config.allow_trailing_commas

    def parse(self) -> ValueNode:
        if self._current.type is TokenType.EOF:
            raise EditComputationError("empty document", self._current.offset)
        root = self._parse_value()
        if self._current.type is not TokenType.EOF:
            raise EditComputationError(
                f"unexpected {self._current.value!r} after document end",
                self._current.offset,
            )
        return root

    # =========================================================================
    # Token navigation
    # =========================================================================

    def _advance(self) -> Token:
        token = self._current
        if token.type is not TokenType.EOF:
            self._current = next(self._tokens)
        return token

    def _expect(self, token_type: TokenType) -> Token:
        if self._current.type is not token_type:
            found = self._current.value or "end of input"
            raise EditComputationError(
                f"expected {token_type.name.lower()}, found {found!r}",
                self._current.offset,
            )
        return self._advance()

    # =========================================================================
    # Grammar
    # =========================================================================

    def _parse_value(self) -> ValueNode:
        token = self._current
        match token.type:
            case TokenType.OPEN_BRACE:
                return self._parse_object()
            case TokenType.OPEN_BRACKET:
                return self._parse_array()
            case TokenType.STRING:
                self._advance()
                return ScalarNode(location=token.location, value=json.loads(token.value), raw=token.value)
            case TokenType.NUMBER:
                self._advance()
                return ScalarNode(location=token.location, value=_number(token), raw=token.value)
            case TokenType.TRUE | TokenType.FALSE | TokenType.NULL:
                self._advance()
                return ScalarNode(location=token.location, value=_SCALAR_VALUES[token.type], raw=token.value)
            case _:
                found = token.value or "end of input"
                raise EditComputationError(f"expected a value, found {found!r}", token.offset)

    def _parse_object(self) -> ObjectNode:
        open_token = self._expect(TokenType.OPEN_BRACE)
        properties: list[Property] = []

        while self._current.type is not TokenType.CLOSE_BRACE:
            key_token = self._expect(TokenType.STRING)
            self._expect(TokenType.COLON)
            value = self._parse_value()
            properties.append(
                Property(
                    location=key_token.location.span_to(value.location),
                    key=json.loads(key_token.value),
                    key_location=key_token.location,
                    value=value,
                )
            )
            if not self._consume_separator(TokenType.CLOSE_BRACE):
                break

        close_token = self._expect(TokenType.CLOSE_BRACE)
        return ObjectNode(
            location=open_token.location.span_to(close_token.location),
            properties=tuple(properties),
        )

    def _parse_array(self) -> ArrayNode:
        open_token = self._expect(TokenType.OPEN_BRACKET)
        items: list[ValueNode] = []

        while self._current.type is not TokenType.CLOSE_BRACKET:
            items.append(self._parse_value())
            if not self._consume_separator(TokenType.CLOSE_BRACKET):
                break

        close_token = self._expect(TokenType.CLOSE_BRACKET)
        return ArrayNode(
            location=open_token.location.span_to(close_token.location),
            items=tuple(items),
        )

    def _consume_separator(self, closer: TokenType) -> bool:
        """Consume a comma between members; False when the container ends."""
        if self._current.type is not TokenType.COMMA:
            return False
        comma = self._advance()
        if self._current.type is closer and not self._allow_trailing_commas:
            raise EditComputationError("trailing comma", comma.offset)
        return True


def parse_tree(source: str, *, config: PatchConfig | None = None) -> ValueNode:
    """Parse ``source`` into a located tree.

    Raises:
        EditComputationError: If the text is empty or not JSON.

    """
    return Parser(source, config=config).parse()


def to_value(node: ValueNode) -> Any:
    """Convert a located tree into plain Python values.

    Duplicate object keys resolve the way ``json.loads`` does: last wins.

    """
    match node:
        case ObjectNode():
            return {prop.key: to_value(prop.value) for prop in node.properties}
        case ArrayNode():
            return [to_value(item) for item in node.items]
        case ScalarNode():
            return node.value
        case _:
            raise TypeError(f"not a value node: {type(node).__name__}")
