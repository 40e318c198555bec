"""HTTP logging middleware.

- Log request metadata only (no bodies, no query strings, no headers).
- Generate or propagate X-Request-ID so a request can be followed through the load balancer.
"""

from __future__ import annotations

import logging
import re
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from greeting_service.core.metrics import route_label

logger = logging.getLogger("greeting_service.http")

REQUEST_ID_HEADER = "X-Request-ID"
_SAFE_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,127}$")


def get_or_create_request_id(*, request: Request) -> str:
    """Return the caller's request id if it is well-formed, otherwise a new UUID4 hex.

    Only a narrow character set and length is accepted to avoid log injection.
    """

    candidate = request.headers.get(REQUEST_ID_HEADER)
    if candidate and _SAFE_REQUEST_ID_PATTERN.fullmatch(candidate):
        return candidate
    return uuid.uuid4().hex


class HttpLoggingMiddleware(BaseHTTPMiddleware):
    """Log one metadata record per request and attach X-Request-ID to the response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = get_or_create_request_id(request=request)
        started = time.perf_counter()
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception:  # noqa: BLE001 - log unexpected exceptions with stack trace, then re-raise
            duration_ms = (time.perf_counter() - started) * 1000.0
            logger.exception(
                "Unhandled exception while processing request",
                extra={
                    "request_id": request_id,
                    "http_method": request.method,
                    "request_path": route_label(request),
                    "status_code": 500,
                    "duration_ms": round(duration_ms, 2),
                },
            )
            raise

        duration_ms = (time.perf_counter() - started) * 1000.0
        response.headers[REQUEST_ID_HEADER] = request_id

        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "http_method": request.method,
                "request_path": route_label(request),
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
