"""
Correlation ID middleware for request tracing.

The correlation ID is:
- Read from X-Correlation-ID or X-Request-ID header if present
- Generated as a new short id if not present
- Stored in request.state.correlation_id for error responses
- Added to response headers for client debugging
- Made available via get_correlation_id() for logging
"""

import contextvars
import uuid
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


_correlation_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "correlation_id",
    default=None,
)

CORRELATION_HEADERS = [
    "X-Correlation-ID",
    "X-Request-ID",
]

RESPONSE_HEADER = "X-Correlation-ID"


def get_correlation_id() -> Optional[str]:
    """Return the correlation ID of the current request context, if any."""
    return _correlation_id_ctx.get()


def generate_correlation_id() -> str:
    """Generate a new 8-character correlation ID."""
    return str(uuid.uuid4())[:8]


class CorrelationMiddleware(BaseHTTPMiddleware):
    """
    Attach a correlation ID to every request.

    For each incoming request:
    1. Checks for existing correlation ID in headers
    2. Generates a new one if not present
    3. Stores it in request.state and the context variable
    4. Adds it to response headers
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        correlation_id = None
        for header in CORRELATION_HEADERS:
            correlation_id = request.headers.get(header)
            if correlation_id:
                break

        if not correlation_id:
            correlation_id = generate_correlation_id()

        request.state.correlation_id = correlation_id
        token = _correlation_id_ctx.set(correlation_id)

        try:
            response = await call_next(request)
            response.headers[RESPONSE_HEADER] = correlation_id
            return response
        finally:
            _correlation_id_ctx.reset(token)
