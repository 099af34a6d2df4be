import pytest

from tinyhttp.errors import ErrorKind, TransportError
from tinyhttp.header import (
    Header,
    add_header,
    get_all_headers,
    get_header,
    has_header,
    is_tchar,
    valid_name,
    valid_value,
)


def test_valid_name():
    assert valid_name(b"example")
    assert valid_name(b"Content-Type")
    assert valid_name(b"h-123456789")
    assert not valid_name(b"Content-Type:")
    assert not valid_name(b"Content-Type ")
    assert not valid_name(b" some-header")
    assert not valid_name(b'"invalid"')
    assert not valid_name(b"G\xf6del")
    assert not valid_name(b"")


def test_valid_value():
    assert valid_value(b"example")
    assert valid_value(b"foo bar")
    assert valid_value(b" foobar ")
    assert valid_value(b" foo\tbar ")
    assert valid_value(b" foo~")
    assert valid_value(b" !bar")
    assert valid_value(b" ")
    assert not valid_value(b" \nfoo")
    assert not valid_value(b"foo\x7f")


def test_is_tchar():
    assert is_tchar(ord("a"))
    assert is_tchar(ord("~"))
    assert not is_tchar(ord(":"))
    assert not is_tchar(ord(" "))


@pytest.mark.parametrize(
    "line",
    [
        "Content-Type  :",
        " Content-Type: foo",
        "Content-Type foo",
        '"some-header": foo',
        "Gödel: Escher, Bach",
        "Foo: \n",
        "Foo: \nbar",
        "Foo: \x7f bar",
        "Foo",
    ],
)
def test_parse_invalid(line):
    with pytest.raises(TransportError) as info:
        Header.parse(line)
    assert info.value.kind is ErrorKind.BAD_HEADER


def test_parse_non_utf8_value():
    raw = "x-geo-stuff: älvsjö ".encode("cp1252")
    header = Header.from_line(raw)
    assert header.name == "x-geo-stuff"
    assert header.value is None
    assert header.value_raw() == bytes([228, 108, 118, 115, 106, 246])


def test_empty_value():
    assert Header.parse("foo:").value == ""


def test_value_with_whitespace():
    assert Header.parse("foo:      bar    ").value == "bar"


def test_name_and_value():
    header = Header.parse("X-Forwarded-For: 127.0.0.1")
    assert header.name == "X-Forwarded-For"
    assert header.value == "127.0.0.1"
    assert header.is_name("X-Forwarded-For")
    assert header.is_name("x-forwarded-for")
    assert header.is_name("X-FORWARDED-FOR")
    assert not header.is_name("X-Forwarded")


def test_iso8859_utf8_mixup():
    header = Header.from_line("header: \x00xc2\x00xa5".encode("utf-8"))
    assert header.value is None


def test_new_header_round_trip():
    header = Header("Accept", "text/html")
    assert str(header) == "Accept: text/html"
    assert header == Header.parse("Accept: text/html")


def test_get_header_helpers():
    headers = [Header.parse("A: 1"), Header.parse("a: 2"), Header.parse("B: 3")]
    assert get_header(headers, "a") == "1"
    assert get_all_headers(headers, "A") == ["1", "2"]
    assert has_header(headers, "b")
    assert not has_header(headers, "c")
    assert get_header(headers, "c") is None


def test_add_header_replaces_same_name():
    headers = [Header("Accept", "a"), Header("Host", "h")]
    add_header(headers, Header("Accept", "b"))
    assert [str(h) for h in headers] == ["Host: h", "Accept: b"]


def test_add_header_keeps_x_headers():
    headers = [Header("X-Thing", "a")]
    add_header(headers, Header("X-Thing", "b"))
    assert get_all_headers(headers, "x-thing") == ["a", "b"]