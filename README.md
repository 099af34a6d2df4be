# tinyhttp

The building blocks of a small, blocking HTTP client:

- `tinyhttp.agent`: `Agent` and `AgentConfig`, which hold a client's
  configuration and its middleware chain. It also has `RedirectAuthHeaders`
  and `NoTlsConnector`.
- `tinyhttp.builder`: `AgentBuilder`, which sets up an agent through chained
  method calls.
- `tinyhttp.api`: `builder()`, `default_agent()` and `is_test()`.
- `tinyhttp.header`: `Header`, with parsing and validation that follow
  RFC 7230, and the list helpers `get_header`, `get_all_headers`,
  `has_header` and `add_header`.
- `tinyhttp.body`: `Payload`, `SizedReader` and `BodySize` for request bodies,
  and `copy_chunked` and `send_body` for writing them out.
- `tinyhttp.middleware`: `Middleware`, `MiddlewareNext` and `run_chain`.
- `tinyhttp.errors`: `HttpError`, `StatusError`, `TransportError`,
  `ErrorKind`, `from_os_error`, `from_url_error` and `or_any_status`.

## Installation

```
pip install .
```

The package has no runtime dependencies. To run the tests:

```
pip install .[test]
pytest
```

## Building an agent

```python
from datetime import timedelta

from tinyhttp.api import builder
from tinyhttp.agent import RedirectAuthHeaders

agent = (
    builder()
    .timeout_connect(5.0)
    .timeout(timedelta(seconds=30))
    .redirects(3)
    .redirect_auth_headers(RedirectAuthHeaders.SAME_HOST)
    .user_agent("my-tool/1.0")
    .build()
)
assert agent.config.redirects == 3
```

A timeout can be given in seconds or as a `timedelta`. It is stored in
`AgentConfig` as a float number of seconds. A negative timeout or count raises
`ValueError`, and a value of the wrong type raises `TypeError`.

Unless you change them, an agent has these settings:

- a connect timeout of 30 seconds, and no read, write or overall timeout;
- 5 redirects;
- `RedirectAuthHeaders.NEVER`;
- at most 100 idle connections, and at most 1 per host;
- `no_delay` set to true;
- the user agent `tinyhttp/0.1.0`;
- no proxy and no resolver;
- `NoTlsConnector` as its TLS connector.

`default_agent()` returns an agent with exactly these settings.

You can supply your own TLS connector with `tls_connector(obj)`. The object
must have a `connect(dns_name, io)` method, or `TypeError` is raised.

`is_test(False)` returns `False` until the first call to `is_test(True)`.
From then on it always returns `True`.

## Headers

```python
from tinyhttp.header import Header, add_header, get_header

h = Header.parse("X-Forwarded-For: 127.0.0.1")
assert h.name == "X-Forwarded-For"
assert h.value == "127.0.0.1"
assert h.is_name("x-forwarded-for")

headers = []
add_header(headers, Header.parse("Accept: text/html"))
add_header(headers, Header.parse("Accept: application/json"))
assert get_header(headers, "accept") == "application/json"
```

Names are looked up without regard to case:

- `get_header` returns the value of the first header with a matching name.
- `get_all_headers` returns every readable value.

`add_header` removes any earlier header whose name is exactly the same,
including case, and then appends the new one. Headers whose names start with
`x-` or `X-` are never removed, so they can appear more than once.

`Header.value` returns the trimmed value as text. It returns `None` when the
value is not valid UTF-8 or holds characters that are not allowed.
`Header.value_raw()` returns the trimmed bytes either way.

`Header.parse` and `Header.from_line` raise a `TransportError` with kind
`ErrorKind.BAD_HEADER` in these cases:

- the line has no colon;
- the name contains a character that is not allowed;
- `parse` finds that the value contains a character that is not allowed.

## Request bodies

```python
import io
from tinyhttp.body import Payload, copy_chunked

sized = Payload.text("héllo", "latin-1").into_read()
assert sized.size.length == 5

out = io.BytesIO()
copy_chunked(io.BytesIO(b"hello world"), out)
assert out.getvalue() == b"b\r\nhello world\r\n0\r\n\r\n"
```

The size of a body depends on where it comes from:

- `Payload.text` and `Payload.of_bytes` have a known length.
- `Payload.reader` has an unknown length.
- `Payload.empty` is marked as empty.

A text payload is encoded with the charset you give. If that charset is
unknown, UTF-8 is used. Characters the charset cannot encode are written as
XML character references.

`copy_chunked` writes each chunk with a single `write` call. A chunk carries at
most 16376 bytes of payload, and a zero-length chunk ends the body.
`send_body(body, do_chunk, stream)` either writes the body chunked or copies it
to the stream unchanged.

## Middleware

A middleware is any callable `(request, next) -> response`, or a subclass of
`Middleware` that overrides `handle`. To continue the chain, call
`next.handle(request)`:

```python
from tinyhttp.api import builder

def add_marker(request, next):
    request["headers"].append("X-Marker: 1")
    return next.handle(request)

agent = builder().middleware(add_marker).build()
response = agent.run_middleware({"headers": []}, lambda req: req)
assert response["headers"] == ["X-Marker: 1"]
```

Middleware runs in the order it was added. The chain ends in the function
passed to `run_middleware` or `run_chain`. Each `MiddlewareNext` can be used
only once. A second call to `handle` raises `RuntimeError`.

## Errors

Every error derives from `HttpError`, and each has a `kind` of type
`ErrorKind`.

- `StatusError` carries the status code and the response for a status of 400
  or above.
- `TransportError` covers everything else: a bad URL, a failed DNS lookup, a
  refused connection, a malformed header. It can record the URL that failed
  with `with_url` and the underlying exception with `with_source`.
- `from_os_error` wraps an `OSError` as an `ErrorKind.IO` error.
- `from_url_error` wraps a URL parsing failure as an `ErrorKind.INVALID_URL`
  error.
- `connection_closed()` is true for an IO error caused by a connection reset
  or abort.

```python
from tinyhttp.errors import ErrorKind, from_os_error

err = from_os_error(TimeoutError("too slow")).with_url("http://example.com/")
assert str(err) == "http://example.com/: Network Error: too slow"
assert err.kind is ErrorKind.IO
```

`or_any_status(func, *args, **kwargs)` calls `func`. If `func` raises a
`StatusError`, `or_any_status` returns that error's response instead of
raising. Transport errors still propagate.

## What this package does not do

This package contains no networking. It does not open connections, resolve
names, speak TLS, send requests, follow redirects, parse responses, keep
cookies or pool connections.

An `Agent` holds the settings for these things, such as the proxy, the
resolver, the timeouts, the redirect limit and the pool limits. It does not
act on them. The default `NoTlsConnector` refuses every HTTPS connection with
an `ErrorKind.UNKNOWN_SCHEME` error.

There is no command-line program.