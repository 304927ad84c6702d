from __future__ import annotations

from threat_outlook.core.llm.client import LLMClient
from threat_outlook.core.llm.config import LLMConfig
from threat_outlook.core.settings import get_settings


def get_llm_config() -> LLMConfig:
    settings = get_settings()
    return LLMConfig(
        openai_api_key=settings.openai_api_key,
        claude_api_key=settings.claude_api_key,
        openai_base_url=settings.openai_base_url,
        anthropic_base_url=settings.anthropic_base_url,
        anthropic_version=settings.anthropic_version,
        max_tokens=int(settings.llm_max_tokens),
        timeout_seconds=float(settings.llm_timeout_seconds),
    )


def get_llm_client() -> LLMClient:
    """
    Dependency provider for LLMClient.

    Always returns a client; a provider without an API key fails when it is selected,
    so the other provider stays usable.
    """

    return LLMClient(config=get_llm_config())
