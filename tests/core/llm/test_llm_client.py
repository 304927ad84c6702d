from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from threat_outlook.core.llm.client import (
    LLMClient,
    LLMResponseError,
    LLMTransportError,
    LLMUnavailableError,
    LLMUpstreamError,
)
from threat_outlook.core.llm.config import LLMConfig, Provider
from threat_outlook.core.llm.providers import ModelChoice


def _config(**overrides) -> LLMConfig:
    values = {
        "openai_api_key": "sk-test",
        "claude_api_key": "sk-ant-test",
        "openai_base_url": "https://openai.test/v1",
        "anthropic_base_url": "https://anthropic.test/v1",
        "anthropic_version": "2023-06-01",
        "max_tokens": 8000,
        "timeout_seconds": 5.0,
    }
    values.update(overrides)
    return LLMConfig(**values)


class _Recorder:
    """MockTransport handler that records requests and replies with a canned response."""

    def __init__(self, *, status_code: int = 200, body=None, raises: Exception | None = None):
        self.status_code = status_code
        self.body = body
        self.raises = raises
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raises is not None:
            raise self.raises
        if isinstance(self.body, str):
            return httpx.Response(self.status_code, text=self.body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


def _client(recorder: _Recorder, **config) -> LLMClient:
    return LLMClient(config=_config(**config), transport=httpx.MockTransport(recorder))


def _generate(client: LLMClient, model: ModelChoice) -> str:
    return asyncio.run(
        client.generate_text(model=model, system_prompt="SYSTEM", user_prompt="USER")
    )


def test_openai_request_shape_and_content_extraction() -> None:
    recorder = _Recorder(body={"choices": [{"message": {"content": "<!DOCTYPE html>"}}]})

    text = _generate(_client(recorder), ModelChoice.GPT_4O)

    assert text == "<!DOCTYPE html>"
    request = recorder.requests[0]
    assert str(request.url) == "https://openai.test/v1/chat/completions"
    assert request.headers["authorization"] == "Bearer sk-test"

    body = recorder.last_json
    assert body["model"] == "gpt-4o-search-preview"
    assert body["max_tokens"] == 8000
    assert body["web_search_options"] == {}
    assert body["messages"] == [
        {"role": "system", "content": "SYSTEM"},
        {"role": "user", "content": "USER"},
    ]


def test_openai_mini_uses_mini_search_model() -> None:
    recorder = _Recorder(body={"choices": [{"message": {"content": "ok"}}]})

    _generate(_client(recorder), ModelChoice.GPT_4O_MINI)

    assert recorder.last_json["model"] == "gpt-4o-mini-search-preview"


def test_anthropic_request_shape_and_text_blocks_joined_in_order() -> None:
    recorder = _Recorder(
        body={
            "content": [
                {"type": "text", "text": "Daily "},
                {"type": "server_tool_use", "id": "srvtoolu_1", "name": "web_search"},
                {"type": "web_search_tool_result", "content": []},
                {"type": "text", "text": "Threat Outlook"},
            ]
        }
    )

    text = _generate(_client(recorder), ModelChoice.CLAUDE_SONNET)

    assert text == "Daily Threat Outlook"
    request = recorder.requests[0]
    assert str(request.url) == "https://anthropic.test/v1/messages"
    assert request.headers["x-api-key"] == "sk-ant-test"
    assert request.headers["anthropic-version"] == "2023-06-01"

    body = recorder.last_json
    assert body["model"] == "claude-sonnet-4-5"
    assert body["system"] == "SYSTEM"
    assert body["messages"] == [{"role": "user", "content": "USER"}]
    assert body["tools"][0]["name"] == "web_search"


def test_upstream_error_payload_is_passed_through_unchanged() -> None:
    payload = {"type": "error", "error": {"type": "rate_limit_error", "message": "slow down"}}
    recorder = _Recorder(status_code=429, body=payload)

    with pytest.raises(LLMUpstreamError) as excinfo:
        _generate(_client(recorder), ModelChoice.CLAUDE_HAIKU)

    assert excinfo.value.status_code == 429
    assert excinfo.value.details == payload
    assert len(recorder.requests) == 1


def test_upstream_error_with_non_json_body_keeps_text() -> None:
    recorder = _Recorder(status_code=502, body="Bad Gateway")

    with pytest.raises(LLMUpstreamError) as excinfo:
        _generate(_client(recorder), ModelChoice.GPT_4O)

    assert excinfo.value.details == {"message": "Bad Gateway"}


def test_unexpected_response_shape_raises_response_error() -> None:
    recorder = _Recorder(body={"id": "chatcmpl-1", "choices": []})

    with pytest.raises(LLMResponseError):
        _generate(_client(recorder), ModelChoice.GPT_4O)


def test_connection_failure_raises_transport_error() -> None:
    recorder = _Recorder(raises=httpx.ConnectError("connection refused"))

    with pytest.raises(LLMTransportError):
        _generate(_client(recorder), ModelChoice.CLAUDE_HAIKU)


def test_missing_key_fails_without_outbound_call() -> None:
    recorder = _Recorder(body={})

    with pytest.raises(LLMUnavailableError):
        _generate(_client(recorder, claude_api_key=None), ModelChoice.CLAUDE_HAIKU)

    assert recorder.requests == []


def test_check_credentials_success_uses_one_token_without_search() -> None:
    recorder = _Recorder(body={"content": [{"type": "text", "text": "OK"}]})

    status = asyncio.run(_client(recorder).check_credentials(provider=Provider.CLAUDE))

    assert status.available is True
    assert status.message == "API key is valid"
    body = recorder.last_json
    assert body["max_tokens"] == 1
    assert "tools" not in body


def test_check_credentials_reports_provider_error_message() -> None:
    recorder = _Recorder(
        status_code=401,
        body={"error": {"message": "Incorrect API key provided", "type": "invalid_request_error"}},
    )

    status = asyncio.run(_client(recorder).check_credentials(provider=Provider.OPENAI))

    assert status.available is False
    assert status.error == "Incorrect API key provided"


def test_check_credentials_without_key_skips_request() -> None:
    recorder = _Recorder(body={})

    status = asyncio.run(
        _client(recorder, openai_api_key=None).check_credentials(provider=Provider.OPENAI)
    )

    assert status.available is False
    assert status.error == "API key not configured"
    assert recorder.requests == []
