"""Core pieces of a small, blocking HTTP client: agent configuration, headers, request bodies, middleware and errors."""

__version__ = "0.1.0"

__all__ = ["agent", "api", "body", "builder", "errors", "header", "middleware"]