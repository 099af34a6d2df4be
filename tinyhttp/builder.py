"""Fluent construction of agents."""

from __future__ import annotations

import dataclasses
from datetime import timedelta
from typing import Any, List, Union

from tinyhttp.agent import (
    DEFAULT_MAX_IDLE_CONNECTIONS,
    DEFAULT_MAX_IDLE_CONNECTIONS_PER_HOST,
    Agent,
    AgentConfig,
    RedirectAuthHeaders,
)
from tinyhttp.middleware import MiddlewareLike

Seconds = Union[int, float, timedelta]


def _seconds(timeout: Seconds) -> float:
    if isinstance(timeout, timedelta):
        value = timeout.total_seconds()
    elif isinstance(timeout, (int, float)) and not isinstance(timeout, bool):
        value = float(timeout)
    else:
        raise TypeError(f"timeout must be seconds or a timedelta, not {type(timeout).__name__}")
    if value < 0:
        raise ValueError("timeout must not be negative")
    return value


def _count(value: int, what: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{what} must be an integer")
    if value < 0:
        raise ValueError(f"{what} must not be negative")
    return value


class AgentBuilder:
    """Accumulates options towards building an :class:`Agent`.

    Every option method returns the builder so calls can be chained.
    """

    def __init__(self) -> None:
        self._config = AgentConfig()
        self._max_idle_connections = DEFAULT_MAX_IDLE_CONNECTIONS
        self._max_idle_connections_per_host = DEFAULT_MAX_IDLE_CONNECTIONS_PER_HOST
        self._resolver: Any = None
        self._middleware: List[MiddlewareLike] = []

    def build(self) -> Agent:
        """Create an agent from the options set so far."""
        return Agent(
            dataclasses.replace(self._config),
            max_idle_connections=self._max_idle_connections,
            max_idle_connections_per_host=self._max_idle_connections_per_host,
            resolver=self._resolver,
            middleware=list(self._middleware),
        )

    def proxy(self, proxy: Any) -> "AgentBuilder":
        """Set the proxy server used for all connections of the agent."""
        self._config.proxy = proxy
        return self

    def https_only(self, enforce: bool) -> "AgentBuilder":
        """Only allow HTTPS requests, refusing HTTPS to HTTP redirects too."""
        self._config.https_only = bool(enforce)
        return self

    def max_idle_connections(self, maximum: int) -> "AgentBuilder":
        """Maximum number of idle pooled connections; zero disables pooling."""
        self._max_idle_connections = _count(maximum, "max_idle_connections")
        return self

    def max_idle_connections_per_host(self, maximum: int) -> "AgentBuilder":
        """Maximum number of idle pooled connections per host; zero disables pooling."""
        self._max_idle_connections_per_host = _count(
            maximum, "max_idle_connections_per_host"
        )
        return self

    def resolver(self, resolver: Any) -> "AgentBuilder":
        """Use a custom address resolver instead of the system one."""
        self._resolver = resolver
        return self

    def timeout_connect(self, timeout: Seconds) -> "AgentBuilder":
        """Timeout for establishing the connection; takes precedence over ``timeout``."""
        self._config.timeout_connect = _seconds(timeout)
        return self

    def timeout_read(self, timeout: Seconds) -> "AgentBuilder":
        """Timeout for individual socket reads."""
        self._config.timeout_read = _seconds(timeout)
        return self

    def timeout_write(self, timeout: Seconds) -> "AgentBuilder":
        """Timeout for individual socket writes."""
        self._config.timeout_write = _seconds(timeout)
        return self

    def timeout(self, timeout: Seconds) -> "AgentBuilder":
        """Timeout for the whole request, including redirects and reading the body."""
        self._config.timeout = _seconds(timeout)
        return self

    def no_delay(self, no_delay: bool) -> "AgentBuilder":
        """Whether to disable Nagle's algorithm on the socket."""
        self._config.no_delay = bool(no_delay)
        return self

    def redirects(self, n: int) -> "AgentBuilder":
        """How many redirects to follow; zero returns 3xx responses as they are."""
        self._config.redirects = _count(n, "redirects")
        return self

    def redirect_auth_headers(self, strategy: RedirectAuthHeaders) -> "AgentBuilder":
        """Set the strategy for keeping authorization headers on redirect."""
        if not isinstance(strategy, RedirectAuthHeaders):
            raise TypeError("strategy must be a RedirectAuthHeaders member")
        self._config.redirect_auth_headers = strategy
        return self

    def user_agent(self, user_agent: str) -> "AgentBuilder":
        """The default User-Agent header for requests of the agent."""
        self._config.user_agent = str(user_agent)
        return self

    def tls_connector(self, connector: Any) -> "AgentBuilder":
        """Use ``connector`` (an object with a ``connect`` method) for HTTPS."""
        if not callable(getattr(connector, "connect", None)):
            raise TypeError("a TLS connector must have a connect(dns_name, io) method")
        self._config.tls_config = connector
        return self

    def middleware(self, m: MiddlewareLike) -> "AgentBuilder":
        """Add middleware; it runs in the order it was added."""
        self._middleware.append(m)
        return self

    def __repr__(self) -> str:
        return (
            f"AgentBuilder(config={self._config!r}, "
            f"max_idle_connections={self._max_idle_connections!r}, "
            f"max_idle_connections_per_host={self._max_idle_connections_per_host!r}, "
            f"resolver={self._resolver!r}, ...)"
        )