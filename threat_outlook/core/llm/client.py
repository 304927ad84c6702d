from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from threat_outlook.core.llm.config import LLMConfig, Provider
from threat_outlook.core.llm.providers import (
    PROBE_PROVIDERS,
    PROVIDERS,
    MalformedResponseError,
    ModelChoice,
    ProviderRequest,
    ProviderSpec,
)
from threat_outlook.core.metrics import record_llm_request


class LLMError(Exception):
    """Base error for LLM client failures."""


class LLMUnavailableError(LLMError):
    """Raised when the selected provider is not configured (missing API key)."""


class LLMTransportError(LLMError):
    """Raised when the provider could not be reached or the call timed out."""


class LLMResponseError(LLMError):
    """Raised when a successful provider response cannot be unwrapped."""


class LLMUpstreamError(LLMError):
    """Raised when the provider answers with a non-success status.

    `details` is the provider's error payload, untouched.
    """

    def __init__(self, *, status_code: int, details: Any):
        super().__init__(f"LLM provider returned HTTP {status_code}")
        self.status_code = status_code
        self.details = details


@dataclass(frozen=True)
class CredentialStatus:
    available: bool
    message: str | None = None
    error: str | None = None


def _error_payload(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return {"message": resp.text}


def _error_message(details: Any, *, status_code: int) -> str:
    if isinstance(details, dict):
        error = details.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        if isinstance(details.get("message"), str):
            return details["message"]
    return f"HTTP {status_code}"


class LLMClient:
    """
    Stateless client for the report providers.

    Design notes:
    - No logging in this module (prompts/outputs describe customer assets).
    - Exactly one outbound request per call; no retries.
    - Upstream error payloads are carried on `LLMUpstreamError` unchanged.
    """

    def __init__(self, *, config: LLMConfig, transport: httpx.AsyncBaseTransport | None = None):
        self._config = config
        self._transport = transport

    async def _post(self, request: ProviderRequest) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self._config.timeout_seconds, transport=self._transport
        ) as client:
            return await client.post(request.url, headers=request.headers, json=request.payload)

    async def generate_text(
        self, *, model: ModelChoice, system_prompt: str, user_prompt: str
    ) -> str:
        spec: ProviderSpec = PROVIDERS[model]
        if not self._config.api_key_for(spec.provider):
            raise LLMUnavailableError(f"No API key configured for provider '{spec.provider.value}'")

        request = spec.build_request(
            self._config,
            model_id=spec.model_id,
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            max_tokens=self._config.max_tokens,
            web_search=True,
        )
        labels = {"provider": spec.provider.value, "model": model.value}

        try:
            resp = await self._post(request)
        except httpx.TimeoutException as exc:
            record_llm_request(outcome="transport_error", **labels)
            raise LLMTransportError("LLM request timed out") from exc
        except httpx.HTTPError as exc:
            record_llm_request(outcome="transport_error", **labels)
            raise LLMTransportError(f"LLM request failed: {exc}") from exc

        if not resp.is_success:
            record_llm_request(outcome="upstream_error", **labels)
            raise LLMUpstreamError(status_code=resp.status_code, details=_error_payload(resp))

        try:
            text = spec.extract_text(resp.json())
        except (ValueError, MalformedResponseError) as exc:
            record_llm_request(outcome="invalid_response", **labels)
            raise LLMResponseError(f"LLM response could not be read: {exc}") from exc

        record_llm_request(outcome="success", **labels)
        return text

    async def check_credentials(self, *, provider: Provider) -> CredentialStatus:
        """Issue a one-token request to verify the provider accepts our key."""

        if not self._config.api_key_for(provider):
            return CredentialStatus(available=False, error="API key not configured")

        spec = PROBE_PROVIDERS[provider]
        request = spec.build_request(
            self._config,
            model_id=spec.model_id,
            system_prompt="Reply with OK.",
            user_prompt="ping",
            max_tokens=1,
            web_search=False,
        )
        try:
            resp = await self._post(request)
        except httpx.HTTPError as exc:
            return CredentialStatus(available=False, error=f"Request failed: {exc}")

        if resp.is_success:
            return CredentialStatus(available=True, message="API key is valid")
        details = _error_payload(resp)
        return CredentialStatus(
            available=False, error=_error_message(details, status_code=resp.status_code)
        )
