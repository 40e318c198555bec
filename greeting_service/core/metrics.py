"""Per-replica Prometheus metrics.

Each pod is scraped on its own; the load balancer spreads `GET /` across them,
so per-route counters summed over pods give the fleet request rate.
"""

from __future__ import annotations

import time
from typing import cast

from fastapi import APIRouter, Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

metrics_router = APIRouter(tags=["metrics"])

UNMATCHED_ROUTE = "unmatched"
_LABELS = ("method", "route", "status_code")

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    labelnames=_LABELS,
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    labelnames=_LABELS,
    # The greeting is a constant; anything past a few ms is event-loop or node pressure.
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)


def route_label(request: Request) -> str:
    """Return the matched route template, or "unmatched" for 404s.

    A public load balancer attracts scanners requesting arbitrary paths; using the
    template keeps label cardinality bounded to the few routes the app defines.
    """

    route = request.scope.get("route")
    path = getattr(route, "path", None)
    if isinstance(path, str) and path:
        return path
    return UNMATCHED_ROUTE


def observe_request(*, method: str, route: str, status_code: int, duration: float) -> None:
    labels = {"method": method, "route": route, "status_code": str(int(status_code))}
    http_requests_total.labels(**labels).inc()
    http_request_duration_seconds.labels(**labels).observe(duration)


class PrometheusMetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        # Stays 500 if the handler raises before producing a response.
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            observe_request(
                method=request.method,
                route=route_label(request),
                status_code=status_code,
                duration=time.perf_counter() - started,
            )


@metrics_router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    payload = generate_latest()
    return Response(content=cast(bytes, payload), media_type=CONTENT_TYPE_LATEST)
