from __future__ import annotations

import time
from typing import cast

from fastapi import APIRouter, Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

metrics_router = APIRouter(tags=["monitoring"])

# Route label MUST be a route template or a fixed value, never a raw path.

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    labelnames=("method", "route", "status_code"),
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    labelnames=("method", "route", "status_code"),
    # Report generation with web search takes tens of seconds to minutes.
    buckets=(0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 15.0, 30.0, 60.0, 120.0, 300.0),
)

llm_requests_total = Counter(
    "llm_requests_total",
    "Outbound LLM provider requests",
    labelnames=("provider", "model", "outcome"),
)


def route_label(request: Request) -> str:
    """
    Return a safe route label.

    Prefer the Starlette/FastAPI route template. If routing didn't match (404) or is
    otherwise unavailable, return "unmatched" to keep label cardinality bounded.
    """

    route = request.scope.get("route")
    path = getattr(route, "path", None)
    if isinstance(path, str) and path:
        return path
    return "unmatched"


class PrometheusMetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            label = route_label(request)
            method = request.method
            code = str(int(status_code))
            duration = time.perf_counter() - started
            http_requests_total.labels(method=method, route=label, status_code=code).inc()
            http_request_duration_seconds.labels(
                method=method, route=label, status_code=code
            ).observe(duration)


def record_llm_request(*, provider: str, model: str, outcome: str) -> None:
    llm_requests_total.labels(provider=provider, model=model, outcome=outcome).inc()


@metrics_router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    # Use the default registry; sufficient for single-process usage.
    payload = generate_latest()
    return Response(content=cast(bytes, payload), media_type=CONTENT_TYPE_LATEST)
