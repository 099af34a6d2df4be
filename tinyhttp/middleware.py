"""Chained processing of requests and their responses."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, Union


class Middleware:
    """A step in the chain that every request of an agent passes through.

    Subclasses override :meth:`handle`. A plain callable taking
    ``(request, next)`` is accepted anywhere a middleware is.
    """

    def handle(self, request: Any, next: "MiddlewareNext") -> Any:
        """Process ``request``; call ``next.handle`` to continue the chain."""
        return next.handle(request)


MiddlewareLike = Union[Middleware, Callable[[Any, "MiddlewareNext"], Any]]


class MiddlewareNext:
    """Continuation of a middleware chain. It may be used only once."""

    def __init__(
        self,
        chain: Iterator[MiddlewareLike],
        request_fn: Callable[[Any], Any],
    ) -> None:
        self._chain = chain
        self._request_fn = request_fn
        self._used = False

    def handle(self, request: Any) -> Any:
        """Continue the chain with ``request`` (possibly amended)."""
        if self._used:
            raise RuntimeError("the middleware chain was already continued")
        self._used = True
        step = next(self._chain, None)
        if step is None:
            return self._request_fn(request)
        follow = MiddlewareNext(self._chain, self._request_fn)
        if isinstance(step, Middleware):
            return step.handle(request, follow)
        return step(request, follow)


def run_chain(
    middleware: Iterable[MiddlewareLike],
    request: Any,
    request_fn: Callable[[Any], Any],
) -> Any:
    """Pass ``request`` through ``middleware`` in order, ending in ``request_fn``."""
    return MiddlewareNext(iter(middleware), request_fn).handle(request)