"""FastAPI dependency injection functions.

This module contains shared dependencies for API endpoints:
- Access to the process-wide search service
- Internal secret validation for maintenance endpoints
- Error sanitization
"""

import hmac
import logging
from typing import Annotated

from fastapi import Header, HTTPException, Request

from ..engine import DocsSearchService

logger = logging.getLogger(__name__)


# ============ ERROR SANITIZATION ============


def sanitize_error_message(error: Exception) -> str:
    """
    Sanitize error messages to prevent information disclosure.

    Returns a generic message for unexpected errors while preserving
    useful information for known error types.
    """
    error_str = str(error)

    # Known safe error patterns that can be returned to client
    safe_patterns = [
        "Document not found",
        "Invalid filter",
        "Search index not ready",
        "Permission denied",
    ]

    for pattern in safe_patterns:
        if pattern.lower() in error_str.lower():
            return error_str

    logger.error(f"Request error: {error}", exc_info=True)

    return "An error occurred processing your request. Please try again."


# ============ APPLICATION STATE ============


def get_search_service(request: Request) -> DocsSearchService:
    """The search service created during application startup."""
    service = getattr(request.app.state, "search_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Search index not ready")
    return service


# ============ VALIDATION DEPENDENCIES ============


async def verify_internal_secret(
    request: Request,
    x_internal_secret: Annotated[str | None, Header(alias="X-Internal-Secret")] = None,
) -> None:
    """Require the configured internal secret for maintenance endpoints.

    Raises:
        HTTPException: 403 when no secret is configured or it does not match.
    """
    expected = request.app.state.settings.internal_api_secret
    if not expected:
        logger.warning("Maintenance endpoint called but no internal secret is configured")
        raise HTTPException(status_code=403, detail="Internal API secret not configured")
    if not x_internal_secret or not hmac.compare_digest(x_internal_secret, expected):
        raise HTTPException(status_code=403, detail="Invalid internal secret")
