"""Top-level entry points: builders and the shared default agent."""

from __future__ import annotations

import threading

from tinyhttp.agent import Agent
from tinyhttp.builder import AgentBuilder

# Once set it stays set: test mode cannot be switched off again.
_IS_TEST = threading.Event()


def builder() -> AgentBuilder:
    """Create an :class:`AgentBuilder` with default options."""
    return AgentBuilder()


def is_test(is_: bool) -> bool:
    """Report whether test mode is on, switching it on first if ``is_`` is true.

    It returns False for as long as it has only been called with False.
    After one call with True it returns True from then on.
    """
    if is_:
        _IS_TEST.set()
    return _IS_TEST.is_set()


def default_agent() -> Agent:
    """An agent with default settings, as built by ``builder().build()``."""
    return builder().build()