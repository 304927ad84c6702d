from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from threat_outlook.api.exception_handlers import register_exception_handlers
from threat_outlook.api.schemas import StatusOut
from threat_outlook.core.logging import setup_logging
from threat_outlook.core.metrics import PrometheusMetricsMiddleware, metrics_router
from threat_outlook.core.middleware.http_logging import HttpLoggingMiddleware
from threat_outlook.core.settings import get_settings
from threat_outlook.outlook.router import router as outlook_router

setup_logging()

SERVICE_STATUS = "Daily Threat Outlook API is running"


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Daily Threat Outlook API",
        description=(
            "Generates daily corporate security threat briefings for a customer profile.\n\n"
            "Design principles:\n"
            "- One request produces one report; nothing is stored or cached.\n"
            "- Reports are written by an external LLM provider with web search enabled and "
            "cleaned of citations, URLs and conversational text before they are returned.\n"
            "- Logging and metrics use route templates and metadata only; customer profiles "
            "and generated reports are never logged."
        ),
        docs_url="/swagger",
        openapi_tags=[
            {
                "name": "health",
                "description": "Basic uptime check.",
            },
            {
                "name": "threat-outlook",
                "description": "Report generation and provider credential checks.",
            },
            {
                "name": "monitoring",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    register_exception_handlers(app)

    @app.get(
        "/",
        response_model=StatusOut,
        tags=["health"],
        summary="Service status",
        description="Does not contact any LLM provider; use `/api/check-credits` for that.",
    )
    async def root() -> StatusOut:
        return StatusOut(status=SERVICE_STATUS)

    app.include_router(metrics_router)
    app.include_router(outlook_router)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app on $PORT."""

    settings = get_settings()
    uvicorn.run(
        "threat_outlook.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_config=None,
        reload=settings.is_development,
    )
