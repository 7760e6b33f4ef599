# lexkit

Small building blocks for lexers and minifiers that work on `bytes`. The
package has no dependencies.

## Modules

- `lexkit.util` has byte-level helpers:
  - `copy` copies a byte string and `to_lower` lower-cases ASCII letters.
  - `equal_fold` compares bytes with an already lowercase target and ignores ASCII case.
  - `printable` gives a readable form of one character: the character itself, `0xNN`, or `U+NNNN`.
  - `is_whitespace`, `is_newline`, `is_all_whitespace` and `trim_whitespace` test for whitespace or strip it.
  - `replace_multiple_whitespace` collapses each run of whitespace into one space. If the run contained a newline, it becomes one newline instead.
  - `replace_entities` shortens character references and named entities using a name → bytes map and an optional byte → entity map. `replace_multiple_whitespace_and_entities` does both jobs in one pass.
  - `encode_url` percent-encodes bytes. It uses a table of byte values, either `URL_ENCODING_TABLE` or `DATA_URI_ENCODING_TABLE`.
  - `decode_url` decodes `%XX` escapes of ASCII bytes and turns `+` into a space.
- `lexkit.position` has the following:
  - `position(data, offset)` returns a `TextPosition`, which holds the line, the column and a two-line context excerpt with a caret.
  - `ParseError` is the exception the parsers raise. Its `position()` method returns the same information.
- `lexkit.numconv` converts numbers:
  - `parse_int`, `parse_uint`, `parse_float` and `parse_decimal` each return `(value, bytes_consumed)`. The count is `0` when no number was read.
  - `len_int` returns the number of decimal digits in an integer.
  - `format_float(f, prec)` writes a float in its shortest form and returns bytes. It raises `ValueError` for NaN and infinities.
  - `format_price(price, dec, mil_separator, dec_separator)` formats an amount given in cents and returns bytes. It does not show the sign.
- `lexkit.jsonparse` has a streaming JSON `Parser`:
  - `next()` returns `(GrammarType, bytes)` pairs. It returns `None` at the end of the input and raises `ParseError` on malformed input.
  - The parser is iterable.
  - `state()` returns the current `State` and `offset()` returns the position consumed so far.
- `lexkit.xmllex` has an XML `Lexer` that works the same way and returns `(TokenType, bytes)` pairs:
  - After a token, `text()` gives the tag name, the attribute name or the content.
  - `attr_val()` gives the attribute value, quotes included.
  - `offset()` gives the position consumed so far.
- `lexkit.xmlutil` has two escaping helpers:
  - `escape_attr_val` quotes an attribute value with whichever quote needs fewer escapes.
  - `escape_cdata_val` escapes CDATA contents as text. It returns `None` when keeping the CDATA section would be shorter.

## Installing

```
pip install lexkit
```

## Examples

```python
from lexkit.jsonparse import Parser

for grammar, data in Parser(b'{"key": [1, true]}'):
    print(grammar.name, data)
```

```python
from lexkit.xmllex import Lexer

lexer = Lexer(b"<span class='user'>John Doe</span>")
print(b"".join(data for _, data in lexer))
```

```python
from lexkit.numconv import format_float, format_price

format_float(0.0001, 6)                      # b"1e-4"
format_price(123456789012, True, ",", ".")   # b"1,234,567,890.12"
```

```python
from lexkit.jsonparse import Parser
from lexkit.position import ParseError

try:
    list(Parser(b"[true false]"))
except ParseError as err:
    line, col, context = err.position()
```

## What it does not do

This is a library only. It has no command-line tool. The JSON parser and the
XML lexer split input into tokens. They do not build documents or decode string
values.

## Running the tests

```
pip install -e .[test]
pytest
```