"""Request context middleware.

Adds tracing and timing headers to all HTTP responses using pure ASGI pattern.
"""

import time
from uuid import uuid4


class RequestContextMiddleware:
    """
    Add request tracing headers to all responses.

    Uses pure ASGI middleware pattern instead of BaseHTTPMiddleware
    to avoid Content-Length mismatch issues with streaming responses.

    Headers added:
        - X-Request-Id: Incoming X-Request-Id if present, otherwise a new UUID
        - X-Content-Type-Options: nosniff
        - Server-Timing: app;dur=<milliseconds until the response started>
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = None
        for name, value in scope.get("headers", []):
            if name == b"x-request-id":
                request_id = value.decode("latin-1")
                break
        request_id = request_id or str(uuid4())
        start_time = time.perf_counter()

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                duration_ms = (time.perf_counter() - start_time) * 1000
                headers = list(message.get("headers", []))
                headers.append((b"x-request-id", request_id.encode("latin-1")))
                headers.append((b"x-content-type-options", b"nosniff"))
                headers.append((b"server-timing", f"app;dur={duration_ms:.1f}".encode()))
                message = {**message, "headers": headers}
            await send(message)

        await self.app(scope, receive, send_with_headers)
