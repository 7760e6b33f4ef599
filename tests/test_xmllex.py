import pytest

from lexkit.position import ParseError
from lexkit.xmllex import Lexer, TokenType

T = TokenType


def _types(xml):
    return [tt for tt, _ in Lexer(xml)]


@pytest.mark.parametrize(
    "xml, expected",
    [
        ("", []),
        ("<!-- comment -->", [T.COMMENT]),
        ("<!-- comment \n multi \r line -->", [T.COMMENT]),
        ("<foo/>", [T.START_TAG, T.START_TAG_CLOSE_VOID]),
        ("<foo \t\r\n/>", [T.START_TAG, T.START_TAG_CLOSE_VOID]),
        ("<foo:bar.qux-norf/>", [T.START_TAG, T.START_TAG_CLOSE_VOID]),
        ("<foo></foo>", [T.START_TAG, T.START_TAG_CLOSE, T.END_TAG]),
        ("<foo>text</foo>", [T.START_TAG, T.START_TAG_CLOSE, T.TEXT, T.END_TAG]),
        ("<foo/> text", [T.START_TAG, T.START_TAG_CLOSE_VOID, T.TEXT]),
        (
            "<a> <b> <c>text</c> </b> </a>",
            [
                T.START_TAG, T.START_TAG_CLOSE, T.TEXT,
                T.START_TAG, T.START_TAG_CLOSE, T.TEXT,
                T.START_TAG, T.START_TAG_CLOSE, T.TEXT,
                T.END_TAG, T.TEXT, T.END_TAG, T.TEXT, T.END_TAG,
            ],
        ),
        (
            "<foo a='a' b=\"b\" c=c/>",
            [T.START_TAG, T.ATTRIBUTE, T.ATTRIBUTE, T.ATTRIBUTE, T.START_TAG_CLOSE_VOID],
        ),
        ("<foo a=\"\"/>", [T.START_TAG, T.ATTRIBUTE, T.START_TAG_CLOSE_VOID]),
        ("<foo a-b=\"\"/>", [T.START_TAG, T.ATTRIBUTE, T.START_TAG_CLOSE_VOID]),
        (
            "<foo \nchecked \r\n value\r=\t'=/>\"' />",
            [T.START_TAG, T.ATTRIBUTE, T.ATTRIBUTE, T.START_TAG_CLOSE_VOID],
        ),
        ("<?xml?>", [T.START_TAG_PI, T.START_TAG_CLOSE_PI]),
        ("<?xml a=\"a\" ?>", [T.START_TAG_PI, T.ATTRIBUTE, T.START_TAG_CLOSE_PI]),
        ("<?xml a=a?>", [T.START_TAG_PI, T.ATTRIBUTE, T.START_TAG_CLOSE_PI]),
        ("<![CDATA[ test ]]>", [T.CDATA]),
        ("<!DOCTYPE>", [T.DOCTYPE]),
        ("<!DOCTYPE note SYSTEM \"Note.dtd\">", [T.DOCTYPE]),
        (
            '<!DOCTYPE note [<!ENTITY nbsp "&#xA0;"><!ENTITY writer "Writer: Donald Duck.">'
            '<!ENTITY copyright "Copyright:]> W3Schools.">]>',
            [T.DOCTYPE],
        ),
        ("<!foo>", [T.START_TAG, T.START_TAG_CLOSE]),
        # early endings
        ("<!-- comment", [T.COMMENT]),
        ("<foo", [T.START_TAG]),
        ("</foo", [T.END_TAG]),
        ("<foo x", [T.START_TAG, T.ATTRIBUTE]),
        ("<foo x=", [T.START_TAG, T.ATTRIBUTE]),
        ("<foo x='", [T.START_TAG, T.ATTRIBUTE]),
        ("<foo x=''", [T.START_TAG, T.ATTRIBUTE]),
        ("<?xml", [T.START_TAG_PI]),
        ("<![CDATA[ test", [T.CDATA]),
        ("<!DOCTYPE note SYSTEM", [T.DOCTYPE]),
        # fuzz
        ("</", [T.END_TAG]),
        ("</\n", [T.END_TAG]),
    ],
)
def test_tokens(xml, expected):
    assert _types(xml) == expected


@pytest.mark.parametrize(
    "xml, names",
    [
        ("<foo/>", ["StartTag", "StartTagCloseVoid"]),
        ("<?xml?>", ["StartTagPI", "StartTagClosePI"]),
        ("<!DOCTYPE>", ["DOCTYPE"]),
        ("<a>t", ["StartTag", "StartTagClose", "Text"]),
        ("<a x='1'></a>", ["StartTag", "Attribute", "StartTagClose", "EndTag"]),
    ],
)
def test_token_type_names(xml, names):
    assert [str(tt) for tt in _types(xml)] == names


@pytest.mark.parametrize(
    "xml, expected",
    [
        ("<foo:bar.qux-norf/>", b"foo:bar.qux-norf"),
        ("<?xml?>", b"xml"),
        ("<foo?bar/qux>", b"foo?bar/qux"),
        ("<!DOCTYPE note SYSTEM \"Note.dtd\">", b' note SYSTEM "Note.dtd"'),
        ("<foo ", b"foo"),
    ],
)
def test_tags(xml, expected):
    lexer = Lexer(xml)
    wanted = {T.START_TAG, T.START_TAG_PI, T.END_TAG, T.DOCTYPE}
    for tt, _ in lexer:
        if tt in wanted:
            assert lexer.text() == expected
            break
    else:
        pytest.fail("no tag token found")


@pytest.mark.parametrize(
    "xml, expected",
    [
        ("<foo a=\"b\" />", [b"a", b'"b"']),
        ("<foo \nchecked \r\n value\r=\t'=/>\"' />", [b"checked", b"", b"value", b"'=/>\"'"]),
        ("<foo bar=\" a \n\t\r b \" />", [b"bar", b'" a     b "']),
        ("<?xml a=b?>", [b"a", b"b"]),
        ("<foo /=? >", [b"/", b"?"]),
        ("<foo x", [b"x", b""]),
        ("<foo x=", [b"x", b""]),
        ("<foo x='", [b"x", b"'"]),
    ],
)
def test_attributes(xml, expected):
    lexer = Lexer(xml)
    found = []
    for tt, _ in lexer:
        if tt == T.ATTRIBUTE:
            found.extend([lexer.text(), lexer.attr_val()])
    assert found == expected


@pytest.mark.parametrize(
    "xml, col",
    [
        ("a\x00b", 2),
        ("<\x00 b='5'>", 2),
        ("<a\x00b='5'>", 3),
        ("<a \x00='5'>", 4),
        ("<a b\x00'5'>", 5),
        ("<a b=\x005'>", 6),
        ("<a b='\x00'>", 7),
        ("<a b='5\x00>", 8),
        ("<a b='5'\x00", 9),
        ("</\x00a>", 3),
        ("</ \x00>", 4),
        ("</ a\x00", 5),
        ("<!\x00", 3),
        ("<![CDATA[\x00", 10),
        ("/*\x00", 3),
    ],
)
def test_errors(xml, col):
    with pytest.raises(ParseError) as info:
        _types(xml)
    assert info.value.position().col == col
    assert "unexpected NULL character" in str(info.value)


def test_text_and_attr_val():
    lexer = Lexer('<xml attr="val" >text<!--comment--><!DOCTYPE doctype><![CDATA[cdata]]>')

    assert lexer.next() == (T.START_TAG, b"<xml")
    assert lexer.text() == b"xml"
    assert lexer.attr_val() == b""

    assert lexer.next() == (T.ATTRIBUTE, b' attr="val"')
    assert lexer.text() == b"attr"
    assert lexer.attr_val() == b'"val"'

    assert lexer.next() == (T.START_TAG_CLOSE, b">")
    assert lexer.text() == b""
    assert lexer.attr_val() == b""

    assert lexer.next() == (T.TEXT, b"text")
    assert lexer.text() == b"text"
    assert lexer.attr_val() == b""

    assert lexer.next() == (T.COMMENT, b"<!--comment-->")
    assert lexer.text() == b"comment"
    assert lexer.attr_val() == b""

    assert lexer.next() == (T.DOCTYPE, b"<!DOCTYPE doctype>")
    assert lexer.text() == b" doctype"
    assert lexer.attr_val() == b""

    assert lexer.next() == (T.CDATA, b"<![CDATA[cdata]]>")
    assert lexer.text() == b"cdata"
    assert lexer.attr_val() == b""

    assert lexer.next() is None


def test_offset():
    lexer = Lexer('<div attr="val">text</div>')
    assert lexer.offset() == 0
    offsets = []
    for _ in range(5):
        lexer.next()
        offsets.append(lexer.offset())
    assert offsets == [4, 15, 16, 20, 26]


def test_end_tag_text_strips_trailing_whitespace():
    lexer = Lexer("</foo \t\n>")
    assert lexer.next() == (T.END_TAG, b"</foo \t\n>")
    assert lexer.text() == b"foo"


def test_example_round_trip():
    xml = "<span class='user'>John Doe</span>"
    assert b"".join(data for _, data in Lexer(xml)) == xml.encode()