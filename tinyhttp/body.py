"""Request bodies: payload kinds, their sizes and how they are written."""

from __future__ import annotations

import codecs
import io
import shutil
from dataclasses import dataclass
from enum import Enum, auto
from typing import BinaryIO, Optional

DEFAULT_CHARACTER_SET = "utf-8"

CHUNK_MAX_SIZE = 0x4000  # maximum size of a TLS fragment
CHUNK_HEADER_MAX_SIZE = 6  # four hex digits plus CRLF
CHUNK_FOOTER_SIZE = 2  # CRLF
CHUNK_MAX_PAYLOAD_SIZE = CHUNK_MAX_SIZE - CHUNK_HEADER_MAX_SIZE - CHUNK_FOOTER_SIZE


@dataclass(frozen=True)
class BodySize:
    """Size of a body: empty, unknown (``length`` None) or a known length."""

    length: Optional[int] = None
    empty: bool = False

    def __repr__(self) -> str:
        if self.empty:
            return "Empty"
        if self.length is None:
            return "Unknown"
        return f"Known({self.length})"


@dataclass
class SizedReader:
    """A readable body together with its size."""

    size: BodySize
    reader: BinaryIO

    def __repr__(self) -> str:
        return f"SizedReader[size={self.size!r},reader]"


class _Kind(Enum):
    EMPTY = auto()
    TEXT = auto()
    READER = auto()
    BYTES = auto()


def _encode(text: str, charset: str) -> bytes:
    try:
        name = codecs.lookup(charset).name
    except LookupError:
        name = DEFAULT_CHARACTER_SET
    return text.encode(name, errors="xmlcharrefreplace")


class Payload:
    """One of the kinds of body a request can send."""

    __slots__ = ("_kind", "_data", "_charset")

    def __init__(self) -> None:
        self._kind = _Kind.EMPTY
        self._data: object = None
        self._charset = DEFAULT_CHARACTER_SET

    @classmethod
    def _make(cls, kind: _Kind, data: object, charset: str = DEFAULT_CHARACTER_SET) -> "Payload":
        payload = cls()
        payload._kind = kind
        payload._data = data
        payload._charset = charset
        return payload

    @classmethod
    def empty(cls) -> "Payload":
        """No body."""
        return cls()

    @classmethod
    def text(cls, text: str, charset: str) -> "Payload":
        """Text to be encoded with ``charset`` (utf-8 if unknown)."""
        return cls._make(_Kind.TEXT, text, charset)

    @classmethod
    def reader(cls, stream: BinaryIO) -> "Payload":
        """A binary stream of unknown length."""
        return cls._make(_Kind.READER, stream)

    @classmethod
    def of_bytes(cls, data: bytes) -> "Payload":
        """A fixed run of bytes."""
        return cls._make(_Kind.BYTES, bytes(data))

    def into_read(self) -> SizedReader:
        """Turn the payload into a reader with its size."""
        if self._kind is _Kind.EMPTY:
            return SizedReader(BodySize(empty=True), io.BytesIO(b""))
        if self._kind is _Kind.READER:
            return SizedReader(BodySize(), self._data)  # type: ignore[arg-type]
        if self._kind is _Kind.TEXT:
            data = _encode(self._data, self._charset)  # type: ignore[arg-type]
        else:
            data = self._data  # type: ignore[assignment]
        return SizedReader(BodySize(length=len(data)), io.BytesIO(data))

    def __repr__(self) -> str:
        if self._kind is _Kind.EMPTY:
            return "Empty"
        if self._kind is _Kind.TEXT:
            return str(self._data)
        if self._kind is _Kind.READER:
            return "Reader"
        return repr(list(self._data))  # type: ignore[call-overload]


def _read_up_to(reader: BinaryIO, limit: int) -> bytes:
    parts = []
    remaining = limit
    while remaining > 0:
        block = reader.read(remaining)
        if not block:
            break
        parts.append(block)
        remaining -= len(block)
    return b"".join(parts)


def copy_chunked(reader: BinaryIO, writer: BinaryIO) -> int:
    """Copy ``reader`` to ``writer`` in chunked transfer encoding.

    Each chunk is written with a single ``write`` call; a zero-sized chunk
    ends the body. Returns the number of payload bytes copied.
    """
    written = 0
    while True:
        payload = _read_up_to(reader, CHUNK_MAX_PAYLOAD_SIZE)
        header = f"{len(payload):x}\r\n".encode("ascii")
        writer.write(header + payload + b"\r\n")
        written += len(payload)
        if not payload:
            return written


def send_body(body: SizedReader, do_chunk: bool, stream: BinaryIO) -> None:
    """Write ``body`` to ``stream``, chunked or as-is."""
    if do_chunk:
        copy_chunked(body.reader, stream)
    else:
        shutil.copyfileobj(body.reader, stream)