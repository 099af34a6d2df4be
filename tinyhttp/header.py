"""HTTP header fields, kept as the raw bytes of a single header line."""

from __future__ import annotations

from typing import Iterable, List, Optional

from tinyhttp.errors import ErrorKind

_TCHARS = frozenset(
    b"!#$%&'*+-.^_`|~"
    b"0123456789"
    b"abcdefghijklmnopqrstuvwxyz"
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZ"
)

# Bytes that `bytes.isspace` would also strip, minus vertical tab.
_ASCII_WHITESPACE = b" \t\n\r\x0c"


def is_tchar(byte: int) -> bool:
    """True if ``byte`` may appear in a header field name (RFC 7230 tchar)."""
    return byte in _TCHARS


def _is_field_vchar_or_obs_fold(byte: int) -> bool:
    return byte in (0x20, 0x09) or 0x21 <= byte <= 0x7E


def valid_name(name: bytes) -> bool:
    """True if ``name`` is a non-empty token."""
    return bool(name) and all(is_tchar(b) for b in name)


def valid_value(value: bytes) -> bool:
    """True if every byte of ``value`` is a visible char, space or tab."""
    return all(_is_field_vchar_or_obs_fold(b) for b in value)


class Header:
    """A single header field: name, colon and value, without the final CRLF."""

    __slots__ = ("_line", "_index")

    def __init__(self, name: str, value: str) -> None:
        self._line = f"{name}: {value}".encode("utf-8")
        self._index = len(name.encode("utf-8"))

    @classmethod
    def _from_parts(cls, line: bytes, index: int) -> "Header":
        header = cls.__new__(cls)
        header._line = line
        header._index = index
        return header

    @classmethod
    def from_line(cls, line: bytes) -> "Header":
        """Split a raw header line at its colon, checking the name bytes."""
        line = bytes(line)
        colon = line.find(b":")
        head = line if colon < 0 else line[:colon]
        bad = next((b for b in head if not is_tchar(b)), None)
        if bad is not None:
            raise ErrorKind.BAD_HEADER.msg(
                f"Invalid char ({bad:x}) while looking for ':'"
            )
        if colon < 0:
            raise ErrorKind.BAD_HEADER.msg("no ':' found in header line")
        return cls._from_parts(line, colon)

    @classmethod
    def parse(cls, text: str) -> "Header":
        """Parse and validate a header line such as ``"Accept: */*"``."""
        header = cls.from_line(text.encode("utf-8"))
        header.validate()
        return header

    @property
    def name(self) -> str:
        """The header name."""
        return self._line[: self._index].decode("utf-8")

    @property
    def value(self) -> Optional[str]:
        """The trimmed header value, or None if it is not valid UTF-8 text."""
        try:
            text = self._line[self._index + 1 :].decode("utf-8")
        except UnicodeDecodeError:
            return None
        text = text.strip()
        if not valid_value(text.encode("utf-8")):
            return None
        return text

    def value_raw(self) -> bytes:
        """The header value as bytes with ASCII whitespace trimmed."""
        return self._line[self._index + 1 :].strip(_ASCII_WHITESPACE)

    def is_name(self, other: str) -> bool:
        """Compare ``other`` to the header name ignoring ASCII case."""
        name = self.name
        return len(name) == len(other) and name.lower() == other.lower()

    def validate(self) -> None:
        """Raise a BAD_HEADER error if the name or value is malformed."""
        name_raw = self._line[: self._index]
        value_raw = self._line[self._index + 1 :]
        if not valid_name(name_raw) or not valid_value(value_raw):
            raise ErrorKind.BAD_HEADER.msg(f"invalid header '{self}'")

    def __str__(self) -> str:
        return self._line.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return str(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Header):
            return NotImplemented
        return self._line == other._line and self._index == other._index

    def __hash__(self) -> int:
        return hash((self._line, self._index))


def get_header(headers: Iterable[Header], name: str) -> Optional[str]:
    """The value of the first header called ``name``, if any."""
    found = next((h for h in headers if h.is_name(name)), None)
    return None if found is None else found.value


def get_all_headers(headers: Iterable[Header], name: str) -> List[str]:
    """The readable values of every header called ``name``."""
    values = (h.value for h in headers if h.is_name(name))
    return [v for v in values if v is not None]


def has_header(headers: Iterable[Header], name: str) -> bool:
    """True if a header called ``name`` with a readable value is present."""
    return get_header(headers, name) is not None


def add_header(headers: List[Header], header: Header) -> None:
    """Append ``header``, replacing same-named headers unless it is an x- header."""
    name = header.name
    if not name.startswith(("x-", "X-")):
        headers[:] = [h for h in headers if h.name != name]
    headers.append(header)