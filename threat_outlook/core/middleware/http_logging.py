"""Per-request access log for the report API.

One record per request with metadata only: correlation id, method, route template,
status, duration, and for report generation the resolved model and report type the
router published on `request.state`. Bodies, query strings and headers are never
logged; they carry customer asset locations and provider API keys.
"""

from __future__ import annotations

import logging
import re
import time
import uuid
from typing import Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from threat_outlook.core.metrics import route_label

logger = logging.getLogger("threat_outlook.http")

REQUEST_ID_HEADER = "X-Request-ID"
_SAFE_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,127}$")

# request.state attributes set by the report router once the model is resolved.
_GENERATION_STATE = {"generation_model": "model", "report_type": "report_type"}


def _request_id(request: Request) -> str:
    """Reuse a caller-supplied id only when it is short and plain; otherwise mint one."""

    candidate = request.headers.get(REQUEST_ID_HEADER, "")
    if _SAFE_REQUEST_ID_PATTERN.fullmatch(candidate):
        return candidate
    return uuid.uuid4().hex


def _access_extra(request: Request, *, status_code: int, started: float) -> dict[str, Any]:
    extra: dict[str, Any] = {
        "request_id": request.state.request_id,
        "http_method": request.method,
        "request_path": route_label(request),
        "status_code": status_code,
        "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
    }
    for attr, field in _GENERATION_STATE.items():
        value = getattr(request.state, attr, None)
        if value is not None:
            extra[field] = value
    return extra


class HttpLoggingMiddleware(BaseHTTPMiddleware):
    """Access log plus `X-Request-ID` correlation for every response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        request.state.request_id = _request_id(request)

        try:
            response = await call_next(request)
        except Exception:  # noqa: BLE001 - logged with stack trace, then re-raised
            logger.exception(
                "Unhandled exception while processing request",
                extra=_access_extra(request, status_code=500, started=started),
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        logger.info(
            "Request completed",
            extra=_access_extra(request, status_code=response.status_code, started=started),
        )
        return response
