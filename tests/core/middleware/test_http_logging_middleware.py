"""Unit tests for the HTTP logging middleware.

Structured fields are asserted via `caplog` rather than message strings.
"""

from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from threat_outlook.core.middleware.http_logging import HttpLoggingMiddleware


def _make_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(HttpLoggingMiddleware)

    @app.get("/reports/{report_id}")
    async def report(report_id: str) -> dict[str, str]:
        return {"id": report_id}

    @app.post("/generate")
    async def generate(request: Request) -> dict[str, str]:
        request.state.generation_model = "gpt-4o"
        request.state.report_type = "text"
        return {"ok": "yes"}

    @app.get("/explode")
    async def explode() -> None:
        raise RuntimeError("explode")

    return app


def _http_records(caplog: pytest.LogCaptureFixture, level: int) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.name == "threat_outlook.http" and r.levelno == level]


def test_logs_route_template_not_raw_path(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="threat_outlook.http")

    with TestClient(_make_app()) as client:
        res = client.get("/reports/chicago-hq?locations=Chicago")

    assert res.status_code == 200
    records = _http_records(caplog, logging.INFO)
    assert len(records) == 1

    record = records[0]
    assert record.__dict__["request_id"] == res.headers["x-request-id"]
    assert record.__dict__["http_method"] == "GET"
    assert record.__dict__["request_path"] == "/reports/{report_id}"
    assert record.__dict__["status_code"] == 200
    assert record.__dict__["duration_ms"] >= 0


@pytest.mark.parametrize(
    ("sent", "propagated"),
    [
        ("req_abc-123", True),
        ("bad id with spaces", False),
        ("-leading-dash", False),
    ],
)
def test_request_id_propagated_only_when_safe(sent: str, propagated: bool) -> None:
    with TestClient(_make_app()) as client:
        res = client.get("/reports/1", headers={"X-Request-ID": sent})

    assert res.status_code == 200
    assert (res.headers["x-request-id"] == sent) is propagated
    assert res.headers["x-request-id"]


def test_unhandled_exception_logs_error_with_stack_trace(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="threat_outlook.http")

    with TestClient(_make_app(), raise_server_exceptions=False) as client:
        res = client.get("/explode", headers={"X-Request-ID": "req_err_001"})

    assert res.status_code == 500
    records = _http_records(caplog, logging.ERROR)
    assert len(records) == 1
    assert records[0].__dict__["request_id"] == "req_err_001"
    assert records[0].__dict__["request_path"] == "/explode"
    assert records[0].exc_info


def test_generation_metadata_from_request_state_is_logged(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="threat_outlook.http")

    with TestClient(_make_app()) as client:
        res = client.post("/generate")

    assert res.status_code == 200
    records = _http_records(caplog, logging.INFO)
    assert len(records) == 1
    assert records[0].__dict__["model"] == "gpt-4o"
    assert records[0].__dict__["report_type"] == "text"
    assert records[0].__dict__["request_path"] == "/generate"


def test_routes_without_generation_state_log_no_model(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="threat_outlook.http")

    with TestClient(_make_app()) as client:
        client.get("/reports/1")

    records = _http_records(caplog, logging.INFO)
    assert len(records) == 1
    assert "model" not in records[0].__dict__
    assert "report_type" not in records[0].__dict__
