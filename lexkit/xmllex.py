"""A streaming XML 1.0 lexer that reports one token at a time."""

from __future__ import annotations

from collections.abc import Iterator
from enum import IntEnum

from .position import ParseError

_SPACE = ord(" ")
_TAB = ord("\t")
_LF = ord("\n")
_CR = ord("\r")
_LT = ord("<")
_GT = ord(">")
_SLASH = ord("/")
_QUESTION = ord("?")
_BANG = ord("!")
_EQUALS = ord("=")
_DQUOTE = ord('"')
_SQUOTE = ord("'")
_LBRACKET = ord("[")
_RBRACKET = ord("]")
_DASH = ord("-")

_WHITESPACE = frozenset((_SPACE, _TAB, _LF, _CR))
_VALUE_WHITESPACE = frozenset((_TAB, _LF, _CR))


class TokenType(IntEnum):
    """The kind of token returned by :meth:`Lexer.next`."""

    ERROR = 0
    COMMENT = 1
    DOCTYPE = 2
    CDATA = 3
    START_TAG = 4
    START_TAG_PI = 5
    START_TAG_CLOSE = 6
    START_TAG_CLOSE_VOID = 7
    START_TAG_CLOSE_PI = 8
    END_TAG = 9
    ATTRIBUTE = 10
    TEXT = 11

    def __str__(self) -> str:
        return _TOKEN_NAMES[self]


_TOKEN_NAMES = {
    TokenType.ERROR: "Error",
    TokenType.COMMENT: "Comment",
    TokenType.DOCTYPE: "DOCTYPE",
    TokenType.CDATA: "CDATA",
    TokenType.START_TAG: "StartTag",
    TokenType.START_TAG_PI: "StartTagPI",
    TokenType.START_TAG_CLOSE: "StartTagClose",
    TokenType.START_TAG_CLOSE_VOID: "StartTagCloseVoid",
    TokenType.START_TAG_CLOSE_PI: "StartTagClosePI",
    TokenType.END_TAG: "EndTag",
    TokenType.ATTRIBUTE: "Attribute",
    TokenType.TEXT: "Text",
}


class Lexer:
    """Splits XML input into tokens.

    :meth:`next` returns ``(TokenType, bytes)`` pairs, ``None`` at the end of
    the input, and raises :class:`ParseError` on a NULL byte.
    """

    def __init__(self, data: bytes | str) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        # mutable: tabs and newlines inside quoted attribute values become spaces
        self._data = bytearray(data)
        self._start = 0
        self._pos = 0
        self._in_tag = False
        self._text = b""
        self._attr_val = b""

    def __iter__(self) -> Iterator[tuple[TokenType, bytes]]:
        while (item := self.next()) is not None:
            yield item

    def text(self) -> bytes:
        """Return the token's content without delimiters (empty if it has none)."""
        return self._text

    def attr_val(self) -> bytes:
        """Return the value of the last attribute token, quotes included."""
        return self._attr_val

    def offset(self) -> int:
        """Return the byte offset up to which the input has been consumed."""
        return self._pos

    # cursor helpers

    def _peek(self, i: int = 0) -> int:
        k = self._pos + i
        return self._data[k] if 0 <= k < len(self._data) else 0

    def _at_eof(self) -> bool:
        return self._pos >= len(self._data)

    def _at(self, seq: bytes) -> bool:
        return self._data.startswith(seq, self._pos)

    def _slice(self, begin: int, end: int | None = None) -> bytes:
        return bytes(self._data[begin : self._pos if end is None else end])

    def _shift(self) -> bytes:
        lexeme = self._slice(self._start)
        self._start = self._pos
        return lexeme

    def _null_error(self) -> ParseError:
        return ParseError(
            bytes(self._data), self._pos, "XML parse error: unexpected NULL character"
        )

    def _skip_whitespace(self) -> int:
        while (c := self._peek()) in _WHITESPACE:
            self._pos += 1
        return c

    def _ends_name(self, c: int) -> bool:
        return (
            c in _WHITESPACE
            or c in (_GT, 0)
            or (c in (_SLASH, _QUESTION) and self._peek(1) == _GT)
        )

    def next(self) -> tuple[TokenType, bytes] | None:
        """Return the next token, or None when the input is exhausted."""
        self._text = b""
        if self._in_tag:
            return self._next_in_tag()

        while True:
            c = self._peek()
            if c == _LT:
                if self._pos > self._start:
                    self._text = self._shift()
                    return TokenType.TEXT, self._text
                c = self._peek(1)
                if c == _SLASH:
                    self._pos += 2
                    return TokenType.END_TAG, self._shift_end_tag()
                if c == _BANG:
                    self._pos += 2
                    if self._at(b"--"):
                        self._pos += 2
                        return TokenType.COMMENT, self._shift_comment_text()
                    if self._at(b"[CDATA["):
                        self._pos += 7
                        return TokenType.CDATA, self._shift_cdata_text()
                    if self._at(b"DOCTYPE"):
                        self._pos += 7
                        return TokenType.DOCTYPE, self._shift_doctype_text()
                    self._pos -= 2
                elif c == _QUESTION:
                    self._pos += 2
                    self._in_tag = True
                    return TokenType.START_TAG_PI, self._shift_start_tag()
                self._pos += 1
                self._in_tag = True
                return TokenType.START_TAG, self._shift_start_tag()
            if c == 0:
                if self._pos > self._start:
                    self._text = self._shift()
                    return TokenType.TEXT, self._text
                if not self._at_eof():
                    raise self._null_error()
                return None
            self._pos += 1

    def _next_in_tag(self) -> tuple[TokenType, bytes] | None:
        self._attr_val = b""
        c = self._skip_whitespace()
        if c == 0:
            if not self._at_eof():
                raise self._null_error()
            return None
        if c != _GT and (c not in (_SLASH, _QUESTION) or self._peek(1) != _GT):
            return TokenType.ATTRIBUTE, self._shift_attribute()

        self._start = self._pos
        self._in_tag = False
        if c == _SLASH:
            self._pos += 2
            return TokenType.START_TAG_CLOSE_VOID, self._shift()
        if c == _QUESTION:
            self._pos += 2
            return TokenType.START_TAG_CLOSE_PI, self._shift()
        self._pos += 1
        return TokenType.START_TAG_CLOSE, self._shift()

    # scanners

    def _shift_doctype_text(self) -> bytes:
        in_string = False
        in_brackets = False
        while True:
            c = self._peek()
            if c == _DQUOTE:
                in_string = not in_string
            elif c in (_LBRACKET, _RBRACKET) and not in_string:
                in_brackets = c == _LBRACKET
            elif c == _GT and not in_string and not in_brackets:
                self._text = self._slice(self._start + 9)
                self._pos += 1
                return self._shift()
            elif c == 0:
                self._text = self._slice(self._start + 9)
                return self._shift()
            self._pos += 1

    def _shift_cdata_text(self) -> bytes:
        while True:
            c = self._peek()
            if c == _RBRACKET and self._at(b"]]>"):
                self._text = self._slice(self._start + 9)
                self._pos += 3
                return self._shift()
            if c == 0:
                self._text = self._slice(self._start + 9)
                return self._shift()
            self._pos += 1

    def _shift_comment_text(self) -> bytes:
        while True:
            c = self._peek()
            if c == _DASH and self._at(b"-->"):
                self._text = self._slice(self._start + 4)
                self._pos += 3
                return self._shift()
            if c == 0:
                return self._shift()
            self._pos += 1

    def _shift_start_tag(self) -> bytes:
        name_start = self._pos
        while not self._ends_name(self._peek()):
            self._pos += 1
        self._text = self._slice(name_start)
        return self._shift()

    def _shift_attribute(self) -> bytes:
        name_start = self._pos
        while (c := self._peek()) != _EQUALS and not self._ends_name(c):
            self._pos += 1
        name_end = self._pos
        c = self._skip_whitespace()
        if c == _EQUALS:
            self._pos += 1
            delim = self._skip_whitespace()
            value_start = self._pos
            if delim in (_DQUOTE, _SQUOTE):
                self._pos += 1
                while True:
                    c = self._peek()
                    if c == delim:
                        self._pos += 1
                        break
                    if c == 0:
                        break
                    self._pos += 1
                    if c in _VALUE_WHITESPACE:
                        self._data[self._pos - 1] = _SPACE
            else:
                while not self._ends_name(self._peek()):
                    self._pos += 1
            self._attr_val = self._slice(value_start)
        else:
            self._pos = name_end
            self._attr_val = b""
        self._text = self._slice(name_start, name_end)
        return self._shift()

    def _shift_end_tag(self) -> bytes:
        while True:
            c = self._peek()
            if c == _GT:
                self._text = self._slice(self._start + 2)
                self._pos += 1
                break
            if c == 0:
                self._text = self._slice(self._start + 2)
                break
            self._pos += 1
        self._text = self._text.rstrip(b" \t\n\r")
        return self._shift()