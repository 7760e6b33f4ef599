"""Escaping helpers for XML attribute values and CDATA sections."""

from __future__ import annotations

_SINGLE_QUOTE_ENTITY = b"&#39;"
_DOUBLE_QUOTE_ENTITY = b"&#34;"
_CDATA_OVERHEAD = len(b"<![CDATA[]]>")


def escape_attr_val(b: bytes) -> bytes:
    """Quote an attribute value, picking the quote that needs the fewest escapes."""
    data = bytes(b)
    doubles = data.count(b'"')
    singles = data.count(b"'")
    if doubles > singles:
        quote, entity = b"'", _SINGLE_QUOTE_ENTITY
    else:
        quote, entity = b'"', _DOUBLE_QUOTE_ENTITY
    return quote + data.replace(quote, entity) + quote


def escape_cdata_val(b: bytes) -> bytes | None:
    """Escape the contents of a CDATA section as plain text.

    Returns None when escaping would add more bytes than keeping the CDATA
    section wrapper.
    """
    data = bytes(b)
    extra = 3 * data.count(b"<") + 4 * data.count(b"&")
    if extra > _CDATA_OVERHEAD:
        return None
    return data.replace(b"&", b"&amp;").replace(b"<", b"&lt;")