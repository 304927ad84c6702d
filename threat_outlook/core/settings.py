from __future__ import annotations

import json
from functools import lru_cache
from typing import Annotated, Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from threat_outlook.core.llm.providers import ModelChoice


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "threat-outlook"
    app_env: str = Field(
        default="production",
        validation_alias=AliasChoices("APP_ENV", "app_env"),
        description="Runtime environment: development|production.",
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "port"),
        description="TCP port the HTTP server listens on.",
    )
    cors_allow_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["*"],
        validation_alias=AliasChoices("CORS_ALLOW_ORIGINS", "cors_allow_origins"),
        description="Browser origins allowed to call the API (comma-separated or JSON list).",
    )

    # Provider credentials. Either may be absent; requests for an unconfigured
    # provider fail locally without an outbound call.
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_API_KEY", "openai_api_key"),
        description="OpenAI API key (required for the gpt-4o family).",
    )
    claude_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("CLAUDE_API_KEY", "ANTHROPIC_API_KEY", "claude_api_key"),
        description="Anthropic API key (required for the claude family).",
    )
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        validation_alias=AliasChoices("OPENAI_BASE_URL", "openai_base_url"),
        description="Base URL for OpenAI API (override for proxies/emulators).",
    )
    anthropic_base_url: str = Field(
        default="https://api.anthropic.com/v1",
        validation_alias=AliasChoices("ANTHROPIC_BASE_URL", "anthropic_base_url"),
        description="Base URL for Anthropic API (override for proxies/emulators).",
    )
    anthropic_version: str = Field(
        default="2023-06-01",
        validation_alias=AliasChoices("ANTHROPIC_VERSION", "anthropic_version"),
        description="Value sent in the `anthropic-version` header.",
    )

    # Generation
    default_model: ModelChoice = Field(
        default=ModelChoice.CLAUDE_HAIKU,
        validation_alias=AliasChoices("DEFAULT_MODEL", "default_model"),
        description="Model used when a request does not name one.",
    )
    llm_max_tokens: int = Field(
        default=8000,
        ge=1,
        validation_alias=AliasChoices("LLM_MAX_TOKENS", "llm_max_tokens"),
        description="Output token budget for report generation.",
    )
    llm_timeout_seconds: float = Field(
        default=300.0,
        ge=1.0,
        validation_alias=AliasChoices("LLM_TIMEOUT_SECONDS", "llm_timeout_seconds"),
        description=(
            "Timeout for provider requests (seconds). Web-search generations routinely take "
            "minutes, so keep this generous."
        ),
    )

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        text = value.strip()
        if text.startswith("["):
            return json.loads(text)
        return [origin.strip() for origin in text.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        return str(self.app_env).strip().lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
