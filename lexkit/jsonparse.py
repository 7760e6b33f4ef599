"""A streaming JSON tokenizer that reports one grammar element at a time."""

from __future__ import annotations

from collections.abc import Iterator
from enum import IntEnum

from .position import ParseError

_SPACE = ord(" ")
_TAB = ord("\t")
_LF = ord("\n")
_CR = ord("\r")
_COMMA = ord(",")
_COLON = ord(":")
_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_LBRACE = ord("{")
_RBRACE = ord("}")
_LBRACKET = ord("[")
_RBRACKET = ord("]")
_MINUS = ord("-")
_PLUS = ord("+")
_DOT = ord(".")
_ZERO = ord("0")
_ONE = ord("1")
_NINE = ord("9")

_WHITESPACE = frozenset((_SPACE, _TAB, _LF, _CR))
_LITERALS = (b"true", b"false", b"null")


class GrammarType(IntEnum):
    """The kind of grammar element returned by :meth:`Parser.next`."""

    ERROR = 0
    WHITESPACE = 1
    LITERAL = 2
    NUMBER = 3
    STRING = 4
    START_OBJECT = 5
    END_OBJECT = 6
    START_ARRAY = 7
    END_ARRAY = 8

    def __str__(self) -> str:
        return _GRAMMAR_NAMES[self]


_GRAMMAR_NAMES = {
    GrammarType.ERROR: "Error",
    GrammarType.WHITESPACE: "Whitespace",
    GrammarType.LITERAL: "Literal",
    GrammarType.NUMBER: "Number",
    GrammarType.STRING: "String",
    GrammarType.START_OBJECT: "StartObject",
    GrammarType.END_OBJECT: "EndObject",
    GrammarType.START_ARRAY: "StartArray",
    GrammarType.END_ARRAY: "EndArray",
}


class State(IntEnum):
    """Which element the parser expects next."""

    VALUE = 0
    OBJECT_KEY = 1
    OBJECT_VALUE = 2
    ARRAY = 3

    def __str__(self) -> str:
        return _STATE_NAMES[self]


_STATE_NAMES = {
    State.VALUE: "Value",
    State.OBJECT_KEY: "ObjectKey",
    State.OBJECT_VALUE: "ObjectValue",
    State.ARRAY: "Array",
}


def _is_digit(c: int) -> bool:
    return _ZERO <= c <= _NINE


class Parser:
    """Tokenizes JSON input into grammar elements.

    :meth:`next` returns ``(GrammarType, bytes)`` pairs, ``None`` at the end of
    the input, and raises :class:`ParseError` on malformed input.
    """

    def __init__(self, data: bytes | str) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._data = bytes(data)
        self._start = 0
        self._pos = 0
        self._stack: list[State] = [State.VALUE]
        self._need_comma = False

    def __iter__(self) -> Iterator[tuple[GrammarType, bytes]]:
        while (item := self.next()) is not None:
            yield item

    def state(self) -> State:
        """Return the state the parser is in, i.e. which element it expects."""
        return self._stack[-1]

    def offset(self) -> int:
        """Return the byte offset up to which the input has been consumed."""
        return self._pos

    # cursor helpers

    def _peek(self, i: int = 0) -> int:
        k = self._pos + i
        return self._data[k] if 0 <= k < len(self._data) else 0

    def _at_eof(self) -> bool:
        return self._pos >= len(self._data)

    def _shift(self) -> bytes:
        lexeme = self._data[self._start : self._pos]
        self._start = self._pos
        return lexeme

    def _error(self, message: str) -> ParseError:
        return ParseError(self._data, self._pos, "JSON parse error: " + message)

    def _close(self) -> None:
        self._stack.pop()
        if self._stack[-1] == State.OBJECT_VALUE:
            self._stack[-1] = State.OBJECT_KEY

    def next(self) -> tuple[GrammarType, bytes] | None:
        """Return the next grammar element, or None when the input is exhausted."""
        self._skip_whitespace()
        c = self._peek()
        state = self._stack[-1]
        if c == _COMMA:
            if state not in (State.ARRAY, State.OBJECT_KEY):
                raise self._error("unexpected comma character")
            self._pos += 1
            self._skip_whitespace()
            self._need_comma = False
            c = self._peek()
        self._start = self._pos

        if self._need_comma and c not in (_RBRACE, _RBRACKET, 0):
            raise self._error(
                "expected comma character or an array or object ending"
            )
        if c == _LBRACE:
            self._stack.append(State.OBJECT_KEY)
            self._pos += 1
            return GrammarType.START_OBJECT, self._shift()
        if c == _RBRACE:
            if state != State.OBJECT_KEY:
                raise self._error("unexpected right brace character")
            self._need_comma = True
            self._close()
            self._pos += 1
            return GrammarType.END_OBJECT, self._shift()
        if c == _LBRACKET:
            self._stack.append(State.ARRAY)
            self._pos += 1
            return GrammarType.START_ARRAY, self._shift()
        if c == _RBRACKET:
            self._need_comma = True
            if state != State.ARRAY:
                raise self._error("unexpected right bracket character")
            self._close()
            self._pos += 1
            return GrammarType.END_ARRAY, self._shift()

        if state == State.OBJECT_KEY:
            if c != _QUOTE or not self._consume_string():
                raise self._error("expected object key to be a quoted string")
            key_length = self._pos - self._start
            self._skip_whitespace()
            if self._peek() != _COLON:
                raise self._error("expected colon character after object key")
            self._pos += 1
            self._stack[-1] = State.OBJECT_VALUE
            return GrammarType.STRING, self._shift()[:key_length]

        self._need_comma = True
        if state == State.OBJECT_VALUE:
            self._stack[-1] = State.OBJECT_KEY
        if c == _QUOTE and self._consume_string():
            return GrammarType.STRING, self._shift()
        if self._consume_number():
            return GrammarType.NUMBER, self._shift()
        if self._consume_literal():
            return GrammarType.LITERAL, self._shift()

        # a failed string scan may have moved up to a NULL byte or the end
        if self._peek() == 0:
            if not self._at_eof():
                raise self._error("unexpected NULL character")
            return None
        raise self._error(f"unexpected character '{chr(c)}'")

    # scanners

    def _skip_whitespace(self) -> None:
        while self._peek() in _WHITESPACE:
            self._pos += 1

    def _consume_literal(self) -> bool:
        for literal in _LITERALS:
            if self._data.startswith(literal, self._pos):
                self._pos += len(literal)
                return True
        return False

    def _skip_digits(self) -> None:
        while _is_digit(self._peek()):
            self._pos += 1

    def _consume_number(self) -> bool:
        mark = self._pos
        if self._peek() == _MINUS:
            self._pos += 1
        c = self._peek()
        if _ONE <= c <= _NINE:
            self._pos += 1
            self._skip_digits()
        elif c == _ZERO:
            self._pos += 1
        else:
            self._pos = mark
            return False

        if self._peek() == _DOT:
            self._pos += 1
            if not _is_digit(self._peek()):
                self._pos -= 1
                return True
            self._skip_digits()

        mark = self._pos
        if self._peek() in (ord("e"), ord("E")):
            self._pos += 1
            if self._peek() in (_PLUS, _MINUS):
                self._pos += 1
            if not _is_digit(self._peek()):
                self._pos = mark
                return True
            self._skip_digits()
        return True

    def _consume_string(self) -> bool:
        # positioned on the opening quote
        self._pos += 1
        while True:
            c = self._peek()
            if c == _QUOTE:
                escaped = False
                i = self._pos - 1
                while i >= self._start and self._data[i] == _BACKSLASH:
                    escaped = not escaped
                    i -= 1
                if not escaped:
                    self._pos += 1
                    return True
            elif c == 0:
                return False
            self._pos += 1