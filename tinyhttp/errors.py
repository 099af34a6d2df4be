"""Error types raised while making requests and reading responses."""

from __future__ import annotations

import errno
from enum import Enum
from typing import Any, Callable, Optional


class ErrorKind(Enum):
    """Classification of the errors that can occur when processing a request."""

    INVALID_URL = "Bad URL"
    UNKNOWN_SCHEME = "Unknown Scheme"
    DNS = "Dns Failed"
    INSECURE_REQUEST_HTTPS_ONLY = "Insecure request attempted with https_only set"
    CONNECTION_FAILED = "Connection Failed"
    TOO_MANY_REDIRECTS = "Too Many Redirects"
    BAD_STATUS = "Bad Status"
    BAD_HEADER = "Bad Header"
    IO = "Network Error"
    INVALID_PROXY_URL = "Malformed proxy"
    PROXY_CONNECT = "Proxy failed to connect"
    PROXY_UNAUTHORIZED = "Provided proxy credentials are incorrect"
    HTTP = "HTTP status error"

    def __str__(self) -> str:
        return self.value

    def error(self) -> "TransportError":
        """A transport error of this kind without a message."""
        return TransportError(self)

    def msg(self, message: str) -> "TransportError":
        """A transport error of this kind carrying ``message``."""
        return TransportError(self, str(message))


_CLOSED_ERRNOS = frozenset({errno.ECONNRESET, errno.ECONNABORTED})


class HttpError(Exception):
    """Base class of every error raised for a request."""

    @property
    def kind(self) -> ErrorKind:
        raise NotImplementedError

    def into_transport(self) -> Optional["TransportError"]:
        """The transport error, or None for a status error."""
        return None

    def into_response(self) -> Any:
        """The response carried by a status error, or None."""
        return None

    def connection_closed(self) -> bool:
        """True when the error was caused by the connection closing."""
        if self.kind is not ErrorKind.IO:
            return False
        source = getattr(self, "source", None)
        if source is None:
            return False
        if isinstance(source, (ConnectionResetError, ConnectionAbortedError)):
            return True
        return isinstance(source, OSError) and source.errno in _CLOSED_ERRNOS


class StatusError(HttpError):
    """A response arrived but its status code was 400 or above.

    The response is expected to expose ``url`` and ``history`` (a list of
    the URLs visited before any redirects).
    """

    def __init__(self, status: int, response: Any) -> None:
        super().__init__(status)
        self.status = status
        self.response = response

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.HTTP

    def into_response(self) -> Any:
        return self.response

    def __str__(self) -> str:
        text = f"{getattr(self.response, 'url', '')}: status code {self.status}"
        history = getattr(self.response, "history", None) or []
        if history:
            text += f" (redirected from {history[0]})"
        return text


class TransportError(HttpError):
    """Any error that is not a status code error: DNS, connection, protocol."""

    def __init__(
        self,
        kind: ErrorKind,
        message: Optional[str] = None,
        url: Optional[str] = None,
        source: Optional[BaseException] = None,
    ) -> None:
        super().__init__(kind, message)
        self._kind = kind
        self.message = message
        self.url = url
        self.source = source
        if source is not None:
            self.__cause__ = source

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    def with_url(self, url: Any) -> "TransportError":
        """Record the URL that failed and return this error."""
        self.url = str(url)
        return self

    def with_source(self, source: BaseException) -> "TransportError":
        """Record the underlying cause and return this error."""
        self.source = source
        self.__cause__ = source
        return self

    def into_transport(self) -> "TransportError":
        return self

    def __str__(self) -> str:
        parts = []
        if self.url is not None:
            parts.append(f"{self.url}: ")
        parts.append(str(self._kind))
        if self.message is not None:
            parts.append(f": {self.message}")
        if self.source is not None:
            parts.append(f": {self.source}")
        return "".join(parts)


def from_os_error(err: OSError) -> TransportError:
    """Wrap an operating-system error as a network error."""
    return ErrorKind.IO.error().with_source(err)


def from_url_error(err: Exception) -> TransportError:
    """Wrap a URL parsing failure as a bad-URL error."""
    return ErrorKind.INVALID_URL.msg(f"failed to parse URL: {err!r}").with_source(err)


def or_any_status(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call ``func`` and return its response, whatever the status code.

    Status errors yield their response; transport errors still propagate.
    """
    try:
        return func(*args, **kwargs)
    except StatusError as exc:
        return exc.response