"""Line and column lookup for byte offsets, and the error type lexers raise."""

from __future__ import annotations

import unicodedata
from typing import NamedTuple

_LF = ord("\n")
_CR = ord("\r")
_UNICODE_LINE_BREAKS = ("\u2028".encode(), "\u2029".encode())

_CONTEXT_LIMIT = 60
_CONTEXT_OFFSET = 20


class TextPosition(NamedTuple):
    """A one-based line and column, with a two-line excerpt marking the spot."""

    line: int
    col: int
    context: str


def _is_graphic(ch: str) -> bool:
    category = unicodedata.category(ch)
    return category[0] in "LMNPS" or category == "Zs"


def _rune_size(data: bytes, pos: int) -> int:
    lead = data[pos]
    size = 2 if lead < 0xE0 else 3 if lead < 0xF0 else 4
    return min(size, len(data) - pos)


def position(data: bytes | str, offset: int) -> TextPosition:
    """Return the line, column and context for ``offset`` into ``data``.

    Only \\n, \\r, \\r\\n, U+2028 and U+2029 are treated as line breaks.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    data = bytes(data)
    end = len(data)

    line = 1
    start = 0
    pos = 0
    while pos < offset and pos < end:
        c = data[pos]
        size = 1
        newline = False
        if c == _LF:
            newline = True
        elif c == _CR:
            newline = True
            if pos + 1 < end and data[pos + 1] == _LF:
                size = 2
        elif c >= 0xC0:
            size = _rune_size(data, pos)
            newline = data[pos : pos + size] in _UNICODE_LINE_BREAKS

        if size > 1 and offset < pos + size:
            break
        pos += size
        if newline:
            line += 1
            start = pos

    col = len(data[start:pos].decode("utf-8", "replace")) + 1
    return TextPosition(line, col, _context(data, start, pos, line, col))


def _context(data: bytes, start: int, pos: int, line: int, col: int) -> str:
    end = pos
    while end < len(data) and data[end] not in (_LF, _CR):
        end += 1
    chars = list(data[start:end].decode("utf-8", "replace"))

    # cut off the front or rear so the excerpt stays near the limit
    front = ""
    rear = ""
    if len(chars) > _CONTEXT_LIMIT:
        if col <= _CONTEXT_LIMIT - _CONTEXT_OFFSET:
            rear = "..."
            chars = chars[: _CONTEXT_LIMIT - 3]
        elif col >= len(chars) - _CONTEXT_OFFSET - 3:
            front = "..."
            col -= len(chars) - 2 * _CONTEXT_OFFSET - 7
            chars = chars[len(chars) - 2 * _CONTEXT_OFFSET - 4 :]
        else:
            front = "..."
            rear = "..."
            chars = chars[col - _CONTEXT_OFFSET - 1 : col + _CONTEXT_OFFSET]
            col = _CONTEXT_OFFSET + 4

    text = "".join(ch if _is_graphic(ch) else "·" for ch in chars)
    return f"{line:5d}: {front}{text}{rear}\n" + " " * (6 + col) + "^"


class ParseError(Exception):
    """An error found at a byte offset in some input."""

    def __init__(self, data: bytes, offset: int, message: str) -> None:
        super().__init__(message)
        self.data = bytes(data)
        self.offset = offset
        self.message = message

    def position(self) -> TextPosition:
        """Return the line, column and context of the error."""
        return position(self.data, self.offset)

    def __str__(self) -> str:
        return self.message