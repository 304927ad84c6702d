from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from threat_outlook.core.llm.client import LLMUpstreamError
from threat_outlook.domain.exceptions import BusinessValidationError

logger = logging.getLogger("threat_outlook.business_validation")
upstream_logger = logging.getLogger("threat_outlook.upstream")


def _log_extra(request: Request, *, status_code: int, error: str) -> dict[str, object]:
    # Do not log request bodies or query values.
    return {
        "request_id": getattr(request.state, "request_id", None)
        or request.headers.get("X-Request-ID"),
        "http_method": request.method,
        "request_path": request.url.path,  # no query string
        "status_code": status_code,
        "error": error,
    }


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(BusinessValidationError)
    async def handle_business_validation_error(
        request: Request,
        exc: BusinessValidationError,
    ) -> JSONResponse:
        logger.info(
            "Business validation failed",
            extra=_log_extra(request, status_code=400, error="business_validation"),
        )
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        logger.info(
            "Request body validation failed",
            extra=_log_extra(request, status_code=400, error="request_validation"),
        )
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(LLMUpstreamError)
    async def handle_upstream_error(request: Request, exc: LLMUpstreamError) -> JSONResponse:
        # The provider payload is forwarded to the caller, not logged.
        upstream_logger.warning(
            "LLM provider returned an error",
            extra=_log_extra(request, status_code=exc.status_code, error="upstream"),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "Failed to generate report", "details": exc.details},
        )
