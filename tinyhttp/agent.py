"""Agents: configuration and state shared between requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional

from tinyhttp.errors import ErrorKind
from tinyhttp.middleware import MiddlewareLike, run_chain

DEFAULT_MAX_IDLE_CONNECTIONS = 100
DEFAULT_MAX_IDLE_CONNECTIONS_PER_HOST = 1
DEFAULT_USER_AGENT = "tinyhttp/0.1.0"


class RedirectAuthHeaders(Enum):
    """Strategy for keeping ``authorization`` headers during redirects."""

    NEVER = "never"
    """Never preserve the header on redirect. The default."""
    SAME_HOST = "same_host"
    """Preserve it when redirected to the same host with an equal or more secure scheme."""


class NoTlsConnector:
    """TLS connector used when no TLS backend is configured: every HTTPS connect fails."""

    def connect(self, dns_name: str, io: Any) -> Any:
        raise ErrorKind.UNKNOWN_SCHEME.msg(
            "cannot make HTTPS request because no TLS backend is configured"
        )

    def __repr__(self) -> str:
        return "NoTlsConnector()"


@dataclass
class AgentConfig:
    """Settings fixed for the lifetime of an agent. Timeouts are in seconds."""

    proxy: Any = None
    timeout_connect: Optional[float] = 30.0
    timeout_read: Optional[float] = None
    timeout_write: Optional[float] = None
    timeout: Optional[float] = None
    https_only: bool = False
    no_delay: bool = True
    redirects: int = 5
    redirect_auth_headers: RedirectAuthHeaders = RedirectAuthHeaders.NEVER
    user_agent: str = DEFAULT_USER_AGENT
    tls_config: Any = field(default_factory=NoTlsConnector)


@dataclass(frozen=True)
class _PoolLimits:
    max_idle_connections: int = DEFAULT_MAX_IDLE_CONNECTIONS
    max_idle_connections_per_host: int = DEFAULT_MAX_IDLE_CONNECTIONS_PER_HOST


@dataclass
class _AgentState:
    pool: _PoolLimits
    resolver: Any = None
    middleware: List[MiddlewareLike] = field(default_factory=list, repr=False)


class Agent:
    """Holds configuration and state kept between requests.

    Copies of an agent share the same state object.
    """

    def __init__(
        self,
        config: Optional[AgentConfig] = None,
        *,
        max_idle_connections: int = DEFAULT_MAX_IDLE_CONNECTIONS,
        max_idle_connections_per_host: int = DEFAULT_MAX_IDLE_CONNECTIONS_PER_HOST,
        resolver: Any = None,
        middleware: Optional[List[MiddlewareLike]] = None,
    ) -> None:
        self.config = config if config is not None else AgentConfig()
        self.state = _AgentState(
            pool=_PoolLimits(max_idle_connections, max_idle_connections_per_host),
            resolver=resolver,
            middleware=list(middleware or []),
        )

    @property
    def middleware(self) -> List[MiddlewareLike]:
        """The middleware, in the order it is invoked."""
        return list(self.state.middleware)

    def run_middleware(self, request: Any, request_fn: Callable[[Any], Any]) -> Any:
        """Pass ``request`` through this agent's middleware, ending in ``request_fn``."""
        return run_chain(self.state.middleware, request, request_fn)

    def __repr__(self) -> str:
        return f"Agent(config={self.config!r}, state={self.state!r})"