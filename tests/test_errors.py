import errno
from dataclasses import dataclass, field

import pytest

from tinyhttp.errors import (
    ErrorKind,
    HttpError,
    StatusError,
    TransportError,
    from_os_error,
    from_url_error,
    or_any_status,
)


@dataclass
class FakeResponse:
    status: int
    url: str
    history: list = field(default_factory=list)


def test_status_code_error():
    response = FakeResponse(404, "http://example.org/")
    err = StatusError(response.status, response)
    assert str(err) == "http://example.org/: status code 404"
    assert err.kind is ErrorKind.HTTP


def test_status_code_error_redirect():
    response = FakeResponse(
        500,
        "http://example.com/status/500",
        ["test://example.org/redirect_a", "test://example.edu/redirect_b"],
    )
    err = StatusError(500, response)
    assert err.kind is ErrorKind.HTTP
    assert str(err) == (
        "http://example.com/status/500: status code 500 "
        "(redirected from test://example.org/redirect_a)"
    )


def test_io_error():
    ioe = TimeoutError("too slow")
    err = TransportError(ErrorKind.IO, "oops").with_source(ioe)
    err = err.with_url("http://example.com/")
    assert str(err) == "http://example.com/: Network Error: oops: too slow"
    assert err.__cause__ is ioe


def test_connection_closed():
    err = ErrorKind.IO.error().with_source(ConnectionResetError("connection reset"))
    assert err.connection_closed() is True
    err = ErrorKind.IO.error().with_source(ConnectionAbortedError("connection aborted"))
    assert err.connection_closed() is True


def test_connection_closed_by_errno():
    err = from_os_error(OSError(errno.ECONNRESET, "reset"))
    assert err.connection_closed() is True


def test_connection_not_closed():
    assert ErrorKind.IO.error().connection_closed() is False
    assert from_os_error(TimeoutError("slow")).connection_closed() is False
    err = ErrorKind.DNS.error().with_source(ConnectionResetError("reset"))
    assert err.connection_closed() is False
    status = StatusError(500, FakeResponse(500, "http://example.com/"))
    assert status.connection_closed() is False


@pytest.mark.parametrize(
    "kind, text",
    [
        (ErrorKind.INVALID_URL, "Bad URL"),
        (ErrorKind.UNKNOWN_SCHEME, "Unknown Scheme"),
        (ErrorKind.DNS, "Dns Failed"),
        (
            ErrorKind.INSECURE_REQUEST_HTTPS_ONLY,
            "Insecure request attempted with https_only set",
        ),
        (ErrorKind.CONNECTION_FAILED, "Connection Failed"),
        (ErrorKind.TOO_MANY_REDIRECTS, "Too Many Redirects"),
        (ErrorKind.BAD_STATUS, "Bad Status"),
        (ErrorKind.BAD_HEADER, "Bad Header"),
        (ErrorKind.IO, "Network Error"),
        (ErrorKind.INVALID_PROXY_URL, "Malformed proxy"),
        (ErrorKind.PROXY_CONNECT, "Proxy failed to connect"),
        (ErrorKind.PROXY_UNAUTHORIZED, "Provided proxy credentials are incorrect"),
        (ErrorKind.HTTP, "HTTP status error"),
    ],
)
def test_kind_display(kind, text):
    assert str(kind) == text
    assert str(kind.error()) == text


def test_msg_sets_message():
    err = ErrorKind.BAD_HEADER.msg("invalid header 'x'")
    assert err.kind is ErrorKind.BAD_HEADER
    assert err.message == "invalid header 'x'"
    assert str(err) == "Bad Header: invalid header 'x'"
    assert isinstance(err, HttpError)


def test_into_transport_and_response():
    transport = ErrorKind.DNS.error()
    assert transport.into_transport() is transport
    assert transport.into_response() is None
    response = FakeResponse(404, "http://example.com/")
    status = StatusError(404, response)
    assert status.into_response() is response
    assert status.into_transport() is None


def test_from_url_error():
    cause = ValueError("relative URL without a base")
    err = from_url_error(cause)
    assert err.kind is ErrorKind.INVALID_URL
    assert err.source is cause
    assert err.message.startswith("failed to parse URL: ")
    assert str(err).endswith(": relative URL without a base")


def test_or_any_status_returns_response():
    response = FakeResponse(500, "http://example.com/status/500")

    def call():
        raise StatusError(500, response)

    assert or_any_status(call) is response


def test_or_any_status_passes_success_and_arguments():
    assert or_any_status(lambda a, b=0: a + b, 2, b=3) == 5


def test_or_any_status_reraises_transport():
    def call():
        raise ErrorKind.CONNECTION_FAILED.msg("refused")

    with pytest.raises(TransportError) as info:
        or_any_status(call)
    assert info.value.kind is ErrorKind.CONNECTION_FAILED