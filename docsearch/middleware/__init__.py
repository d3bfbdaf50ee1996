"""ASGI middleware for the search API.

This module provides middleware for:
- Request tracing and timing headers (X-Request-Id, Server-Timing)
"""

from .request_context import RequestContextMiddleware

__all__ = [
    "RequestContextMiddleware",
]
