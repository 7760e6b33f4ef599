import json

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from lexkit.jsonparse import GrammarType, Parser, State
from lexkit.position import ParseError

G = GrammarType


def _types(data):
    return [gt for gt, _ in Parser(data)]


@pytest.mark.parametrize(
    "data, expected",
    [
        (" \t\n\r", []),
        ("null", [G.LITERAL]),
        ("[]", [G.START_ARRAY, G.END_ARRAY]),
        ("15.2", [G.NUMBER]),
        ("0.4", [G.NUMBER]),
        ("5e9", [G.NUMBER]),
        ("-4E-3", [G.NUMBER]),
        ("true", [G.LITERAL]),
        ("false", [G.LITERAL]),
        ('""', [G.STRING]),
        ('"abc"', [G.STRING]),
        ('"\\""', [G.STRING]),
        ('"\\\\"', [G.STRING]),
        ("{}", [G.START_OBJECT, G.END_OBJECT]),
        (
            '{"a": "b", "c": "d"}',
            [G.START_OBJECT, G.STRING, G.STRING, G.STRING, G.STRING, G.END_OBJECT],
        ),
        (
            '{"a": [1, 2], "b": {"c": 3}}',
            [
                G.START_OBJECT,
                G.STRING,
                G.START_ARRAY,
                G.NUMBER,
                G.NUMBER,
                G.END_ARRAY,
                G.STRING,
                G.START_OBJECT,
                G.STRING,
                G.NUMBER,
                G.END_OBJECT,
                G.END_OBJECT,
            ],
        ),
        ("[null,]", [G.START_ARRAY, G.LITERAL, G.END_ARRAY]),
    ],
)
def test_grammars(data, expected):
    assert _types(data) == expected


def test_next_returns_none_at_end():
    p = Parser("null")
    assert p.next() == (G.LITERAL, b"null")
    assert p.next() is None
    assert p.next() is None


def test_grammar_and_state_names():
    assert str(G.ERROR) == "Error"
    assert str(G.START_OBJECT) == "StartObject"
    assert str(G.END_ARRAY) == "EndArray"
    assert str(State.VALUE) == "Value"
    assert str(State.OBJECT_KEY) == "ObjectKey"
    assert str(State.ARRAY) == "Array"
    with pytest.raises(ValueError):
        GrammarType(9)
    with pytest.raises(ValueError):
        State(4)


@pytest.mark.parametrize(
    "data, expected",
    [
        ('{"":"', [G.START_OBJECT, G.STRING]),
        ('"a\\', []),
    ],
)
def test_grammars_error_eof(data, expected):
    assert _types(data) == expected


@pytest.mark.parametrize(
    "data, col",
    [
        ("true, false", 5),
        ("[true false]", 7),
        ("]", 1),
        ("}", 1),
        ("{0: 1}", 2),
        ('{"a" 1}', 6),
        ("1.", 2),
        ("1e+", 2),
        ("[true, \x00]", 8),
        ('"string\x00"', 8),
        ('{"id": noquote}', 8),
        ('{"id"\x00: 5}', 6),
        ('{"id: \x00}', 7),
        ('{"id: 5\x00', 8),
    ],
)
def test_grammars_error(data, col):
    with pytest.raises(ParseError) as info:
        list(Parser(data))
    assert info.value.position().col == col


def test_error_message():
    with pytest.raises(ParseError, match="unexpected character 'n'"):
        list(Parser('{"id": noquote}'))


@pytest.mark.parametrize(
    "data, expected",
    [
        ("null", [State.VALUE]),
        ("[null]", [State.ARRAY, State.ARRAY, State.VALUE]),
        (
            '{"":null}',
            [State.OBJECT_KEY, State.OBJECT_VALUE, State.OBJECT_KEY, State.VALUE],
        ),
    ],
)
def test_states(data, expected):
    p = Parser(data)
    states = [p.state() for _ in p]
    assert states == expected


def test_offset():
    p = Parser('{"key": [5, "string", null, true]}')
    assert p.offset() == 0
    offsets = []
    for _ in range(9):
        p.next()
        offsets.append(p.offset())
    assert offsets == [1, 7, 9, 10, 20, 26, 32, 33, 34]


def test_token_data():
    assert list(Parser('{"key": [5, "s"]}')) == [
        (G.START_OBJECT, b"{"),
        (G.STRING, b'"key"'),
        (G.START_ARRAY, b"["),
        (G.NUMBER, b"5"),
        (G.STRING, b'"s"'),
        (G.END_ARRAY, b"]"),
        (G.END_OBJECT, b"}"),
    ]


def test_example_reconstruction():
    p = Parser('{"key": 5}')
    out = b""
    while True:
        state = p.state()
        item = p.next()
        if item is None:
            break
        gt, data = item
        out += data
        if state == State.OBJECT_KEY and gt != G.END_OBJECT:
            out += b":"
    assert out == b'{"key":5}'


_json_values = st.recursive(
    st.none()
    | st.booleans()
    | st.integers()
    | st.floats(allow_nan=False, allow_infinity=False)
    | st.text(),
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(st.text(max_size=5), children, max_size=4),
    max_leaves=12,
)


@settings(max_examples=60)
@given(_json_values)
def test_valid_json_is_fully_consumed(value):
    data = json.dumps(value)
    p = Parser(data)
    types = [gt for gt, _ in p]
    assert p.offset() == len(data.encode())
    assert types.count(G.START_OBJECT) == types.count(G.END_OBJECT)
    assert types.count(G.START_ARRAY) == types.count(G.END_ARRAY)