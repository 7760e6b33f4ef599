"""Byte-level helpers for lexers: case folding, whitespace, entities and URL escaping."""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Collection, Mapping

_SPACE = ord(" ")
_NEWLINE_BYTE = ord("\n")
_AMP = ord("&")
_HASH = ord("#")
_SEMICOLON = ord(";")
_PERCENT = ord("%")
_PLUS = ord("+")

_WHITESPACE = frozenset(b" \t\n\f\r")
_NEWLINES = frozenset(b"\n\r")
_WHITESPACE_CHARS = b" \t\n\f\r"
_WHITESPACE_RUN = re.compile(rb"[ \t\n\f\r]+")

_DIGITS = frozenset(b"0123456789")
_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")
_ENTITY_FOLLOWER = frozenset(
    b"0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ#"
)

# Longest HTML entity name: CounterClockwiseContourIntegral
_MAX_ENTITY_LENGTH = 31

URL_ENCODING_TABLE: frozenset[int] = frozenset(
    set(range(0, 33))
    | set(b'"#$%&+,/:;<=>?@[\\]^`{|}')
    | {127}
    | set(range(128, 256))
)
"""Byte values that must be escaped in the URL encoding scheme."""

DATA_URI_ENCODING_TABLE: frozenset[int] = frozenset(
    set(range(0, 33))
    | set(b'"#%&<>[\\]^`{|}')
    | {127}
    | set(range(128, 256))
)
"""Byte values that must be escaped in a data URI: non-printables, non-ASCII and a few delimiters."""


def copy(src: bytes | bytearray | memoryview) -> bytes:
    """Return an independent copy of the given bytes."""
    return bytes(src)


def to_lower(src: bytes | bytearray) -> bytes:
    """Convert the ASCII letters A-Z to a-z, leaving every other byte alone."""
    return bytes(src).lower()


def equal_fold(s: bytes, target_lower: bytes) -> bool:
    """Return whether ``s`` matches the lowercase ``target_lower`` ignoring ASCII case."""
    if len(s) != len(target_lower):
        return False
    for d, c in zip(s, target_lower):
        if d != c and not (0x41 <= d <= 0x5A and d + 0x20 == c):
            return False
    return True


def _is_graphic(cp: int) -> bool:
    category = unicodedata.category(chr(cp))
    return category[0] in "LMNPS" or category == "Zs"


def printable(r: str | int) -> str:
    """Return a printable representation of a single character."""
    cp = r if isinstance(r, int) else ord(r)
    if _is_graphic(cp):
        return chr(cp)
    if cp < 128:
        return f"0x{cp:02X}"
    return f"U+{cp:04X}"


def is_whitespace(c: int) -> bool:
    """Return whether the byte is a space, tab, newline, form feed or carriage return."""
    return c in _WHITESPACE


def is_newline(c: int) -> bool:
    """Return whether the byte is a newline or carriage return."""
    return c in _NEWLINES


def is_all_whitespace(b: bytes) -> bool:
    """Return whether every byte is whitespace (an empty input counts as whitespace)."""
    return all(c in _WHITESPACE for c in b)


def trim_whitespace(b: bytes) -> bytes:
    """Remove leading and trailing whitespace."""
    return bytes(b).strip(_WHITESPACE_CHARS)


def replace_multiple_whitespace(b: bytes) -> bytes:
    """Collapse each run of whitespace into one space, or one newline if the run held a newline."""
    data = bytes(b)
    out = bytearray()
    last = 0
    for match in _WHITESPACE_RUN.finditer(data):
        out += data[last : match.start()]
        run = match.group()
        out.append(_NEWLINE_BYTE if any(c in _NEWLINES for c in run) else _SPACE)
        last = match.end()
    out += data[last:]
    return bytes(out)


def _replace_entity(
    buf: bytearray,
    i: int,
    entities: Mapping[str, bytes],
    rev_entities: Mapping[int, bytes],
) -> int:
    """Replace the entity starting at ``buf[i] == '&'`` in place.

    Returns the index of the last byte handled, so scanning may resume after it.
    """
    j = i + 1
    if buf[j] == _HASH:
        j += 1
        if buf[j] == ord("x"):
            j += 1
            code = 0
            while j < len(buf) and buf[j] in _HEX_DIGITS:
                code = code * 16 + int(chr(buf[j]), 16)
                j += 1
            if j <= i + 3 or code >= 10000:
                return j - 1
            replacement = bytes([code]) if code < 128 else b"&#%d;" % code
        else:
            code = 0
            while j < len(buf) and code < 128 and buf[j] in _DIGITS:
                code = code * 10 + (buf[j] - 0x30)
                j += 1
            if j <= i + 2 or code >= 128:
                return j - 1
            replacement = bytes([code])
    else:
        while j < len(buf) and j - i - 1 <= _MAX_ENTITY_LENGTH and buf[j] != _SEMICOLON:
            j += 1
        if j <= i + 1 or j >= len(buf):
            return j - 1
        name = bytes(buf[i + 1 : j]).decode("utf-8", "surrogateescape")
        found = entities.get(name)
        if found is None:
            return j
        replacement = bytes(found)

    # j is at the semicolon
    n = j + 1 - i
    if j < len(buf) and buf[j] == _SEMICOLON and n > 2:
        if len(replacement) == 1:
            reverse = rev_entities.get(replacement[0])
            if reverse is not None:
                if bytes(reverse) == bytes(buf[i : j + 1]):
                    return j
                replacement = bytes(reverse)
            elif replacement[0] == _AMP:
                # e.g. &amp; followed by something that could start another entity
                k = j + 1
                if k < len(buf) and buf[k] in _ENTITY_FOLLOWER:
                    return k
        buf[i : j + 1] = replacement
        return i + len(replacement) - 1
    return i


def replace_entities(
    b: bytes,
    entities: Mapping[str, bytes],
    rev_entities: Mapping[int, bytes] | None,
) -> bytes:
    """Replace character references and named entities by their unencoded bytes.

    ``entities`` maps entity names to their replacement; ``rev_entities`` maps a
    byte value to the preferred entity for that byte.
    """
    reverse = rev_entities or {}
    buf = bytearray(b)
    i = 0
    while i < len(buf):
        if buf[i] == _AMP and i + 3 < len(buf):
            i = _replace_entity(buf, i, entities, reverse)
        i += 1
    return bytes(buf)


def replace_multiple_whitespace_and_entities(
    b: bytes,
    entities: Mapping[str, bytes],
    rev_entities: Mapping[int, bytes] | None,
) -> bytes:
    """Collapse whitespace runs and replace entities in a single pass."""
    reverse = rev_entities or {}
    buf = bytearray(b)
    write = 0  # write position of the compacted text
    pending = 0  # start of the next text section still to be moved
    i = 0
    while i < len(buf):
        if buf[i] in _WHITESPACE:
            start = i
            newline = buf[i] in _NEWLINES
            i += 1
            while i < len(buf) and buf[i] in _WHITESPACE:
                newline = newline or buf[i] in _NEWLINES
                i += 1
            buf[start] = _NEWLINE_BYTE if newline else _SPACE
            if i - start > 1:
                if write == 0:
                    write = start + 1
                else:
                    section = bytes(buf[pending : start + 1])
                    buf[write : write + len(section)] = section
                    write += len(section)
                pending = i
        if i + 3 < len(buf) and buf[i] == _AMP:
            i = _replace_entity(buf, i, entities, reverse)
        i += 1

    if write == 0:
        return bytes(buf)
    if write == 1:
        # a single run at the very start
        buf[pending - 1] = buf[0]
        return bytes(buf[pending - 1 :])
    if pending < len(buf):
        section = bytes(buf[pending:])
        buf[write : write + len(section)] = section
        write += len(section)
    return bytes(buf[:write])


def encode_url(b: bytes, table: Collection[int]) -> bytes:
    """Percent-encode every byte whose value is in ``table``."""
    return b"".join(
        b"%%%02X" % c if c in table else bytes((c,)) for c in bytes(b)
    )


def decode_url(b: bytes) -> bytes:
    """Decode percent escapes of ASCII bytes and turn '+' into a space."""
    data = bytes(b)
    out = bytearray()
    i = 0
    while i < len(data):
        c = data[i]
        if c == _PERCENT and i + 2 < len(data):
            pair = data[i + 1 : i + 3]
            if all(h in _HEX_DIGITS for h in pair):
                value = int(pair, 16)
                if value < 128:
                    out.append(value)
                    i += 3
                    continue
            out.append(c)
        elif c == _PLUS:
            out.append(_SPACE)
        else:
            out.append(c)
        i += 1
    return bytes(out)