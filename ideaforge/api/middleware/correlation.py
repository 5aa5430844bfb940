"""
Correlation ID middleware.

Echoes the caller's X-Correlation-ID header, or creates one, keeps it on
request.state, and logs one access line per request carrying the ID.
"""

import logging
import time
from uuid import UUID, uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)

HEADER = "X-Correlation-ID"


def resolve_correlation_id(header_value: str) -> UUID:
    """Parse the header as a UUID; malformed or empty values get a fresh one."""
    if not header_value:
        return uuid4()
    try:
        return UUID(header_value)
    except ValueError:
        logger.warning(f"Invalid correlation ID format: {header_value}, generating new")
        return uuid4()


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Attach a correlation ID to every request and response."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = resolve_correlation_id(request.headers.get(HEADER, ""))
        request.state.correlation_id = correlation_id

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers[HEADER] = str(correlation_id)
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "correlation_id": correlation_id,
                "status_code": response.status_code,
                "duration_ms": round(elapsed_ms, 1),
            },
        )
        return response
