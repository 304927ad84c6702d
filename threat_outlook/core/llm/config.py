from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Provider(str, Enum):
    OPENAI = "openai"
    CLAUDE = "claude"


@dataclass(frozen=True)
class LLMConfig:
    """Provider credentials and request limits, fixed for the lifetime of a client."""

    openai_api_key: str | None
    claude_api_key: str | None
    openai_base_url: str
    anthropic_base_url: str
    anthropic_version: str
    max_tokens: int
    timeout_seconds: float

    def api_key_for(self, provider: Provider) -> str | None:
        if provider is Provider.OPENAI:
            return self.openai_api_key
        return self.claude_api_key
