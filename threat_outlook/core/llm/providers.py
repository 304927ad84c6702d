"""Provider strategy table.

Each selectable model maps to a `ProviderSpec` carrying the upstream model id and the
request builder / text extractor of its provider family. Adding a model is a table
entry, not another branch.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from threat_outlook.core.llm.config import LLMConfig, Provider


class ModelChoice(str, Enum):
    GPT_4O = "gpt-4o"
    GPT_4O_MINI = "gpt-4o-mini"
    CLAUDE_SONNET = "claude-sonnet"
    CLAUDE_HAIKU = "claude-haiku"


class MalformedResponseError(ValueError):
    """Raised by extractors when a 2xx body does not have the provider's shape."""


@dataclass(frozen=True)
class ProviderRequest:
    url: str
    headers: dict[str, str]
    payload: dict[str, Any]


RequestBuilder = Callable[..., ProviderRequest]
TextExtractor = Callable[[Any], str]


def build_openai_request(
    config: LLMConfig,
    *,
    model_id: str,
    system_prompt: str,
    user_prompt: str,
    max_tokens: int,
    web_search: bool,
) -> ProviderRequest:
    payload: dict[str, Any] = {
        "model": model_id,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        "max_tokens": max_tokens,
    }
    if web_search:
        # Search-preview chat models enable browsing through this option.
        payload["web_search_options"] = {}
    return ProviderRequest(
        url=f"{config.openai_base_url.rstrip('/')}/chat/completions",
        headers={
            "Authorization": f"Bearer {config.openai_api_key}",
            "Content-Type": "application/json",
        },
        payload=payload,
    )


def extract_openai_text(data: Any) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise MalformedResponseError("OpenAI response has no choices[0].message.content") from exc
    if content is None:
        return ""
    if not isinstance(content, str):
        raise MalformedResponseError("OpenAI message content is not a string")
    return content


def build_anthropic_request(
    config: LLMConfig,
    *,
    model_id: str,
    system_prompt: str,
    user_prompt: str,
    max_tokens: int,
    web_search: bool,
) -> ProviderRequest:
    payload: dict[str, Any] = {
        "model": model_id,
        "max_tokens": max_tokens,
        "system": system_prompt,
        "messages": [{"role": "user", "content": user_prompt}],
    }
    if web_search:
        payload["tools"] = [
            {"type": "web_search_20250305", "name": "web_search", "max_uses": 10},
        ]
    return ProviderRequest(
        url=f"{config.anthropic_base_url.rstrip('/')}/messages",
        headers={
            "x-api-key": str(config.claude_api_key),
            "anthropic-version": config.anthropic_version,
            "Content-Type": "application/json",
        },
        payload=payload,
    )


def extract_anthropic_text(data: Any) -> str:
    """Concatenate `text` blocks in order; tool-use and search-result blocks are skipped."""

    try:
        blocks = data["content"]
    except (KeyError, TypeError) as exc:
        raise MalformedResponseError("Anthropic response has no content blocks") from exc
    if not isinstance(blocks, list):
        raise MalformedResponseError("Anthropic content is not a list")

    parts: list[str] = []
    for block in blocks:
        if isinstance(block, dict) and block.get("type") == "text":
            parts.append(str(block.get("text", "")))
    return "".join(parts)


@dataclass(frozen=True)
class ProviderSpec:
    provider: Provider
    model_id: str
    build_request: RequestBuilder
    extract_text: TextExtractor


def _openai(model_id: str) -> ProviderSpec:
    return ProviderSpec(
        provider=Provider.OPENAI,
        model_id=model_id,
        build_request=build_openai_request,
        extract_text=extract_openai_text,
    )


def _anthropic(model_id: str) -> ProviderSpec:
    return ProviderSpec(
        provider=Provider.CLAUDE,
        model_id=model_id,
        build_request=build_anthropic_request,
        extract_text=extract_anthropic_text,
    )


PROVIDERS: dict[ModelChoice, ProviderSpec] = {
    ModelChoice.GPT_4O: _openai("gpt-4o-search-preview"),
    ModelChoice.GPT_4O_MINI: _openai("gpt-4o-mini-search-preview"),
    ModelChoice.CLAUDE_SONNET: _anthropic("claude-sonnet-4-5"),
    ModelChoice.CLAUDE_HAIKU: _anthropic("claude-haiku-4-5"),
}

# Cheapest non-search model per provider, used to verify credentials.
PROBE_PROVIDERS: dict[Provider, ProviderSpec] = {
    Provider.CLAUDE: _anthropic("claude-haiku-4-5"),
    Provider.OPENAI: _openai("gpt-4o-mini"),
}
