"""API helpers shared by the HTTP endpoints."""

from .deps import (
    get_search_service,
    sanitize_error_message,
    verify_internal_secret,
)

__all__ = [
    "get_search_service",
    "sanitize_error_message",
    "verify_internal_secret",
]
