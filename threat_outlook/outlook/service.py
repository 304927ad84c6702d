from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, date, datetime
from typing import Protocol

from threat_outlook.core.llm.config import Provider
from threat_outlook.core.llm.providers import ModelChoice
from threat_outlook.domain.exceptions import ProfileValidationError
from threat_outlook.outlook.profile import validate_profile
from threat_outlook.outlook.prompt import build_threat_outlook_prompts, format_report_date
from threat_outlook.outlook.sanitizer import sanitize_report
from threat_outlook.outlook.schemas import (
    CredentialOut,
    CreditsOut,
    ReportType,
    ThreatOutlookIn,
    ThreatOutlookOut,
)
from threat_outlook.outlook.topics import resolve_topic_labels

CREDITS_NOTE = (
    "Providers do not expose credit balances through their APIs; availability reflects "
    "whether a minimal test request with the configured key succeeded."
)


class LLMClient(Protocol):
    async def generate_text(
        self, *, model: ModelChoice, system_prompt: str, user_prompt: str
    ) -> str: ...

    async def check_credentials(self, *, provider: Provider): ...


def resolve_model(name: str | None, *, default: ModelChoice) -> ModelChoice:
    """Map a requested model name onto the closed set of supported models.

    A blank name selects the configured default, which settings already validated;
    only a name the caller sent can produce the 400.
    """

    candidate = (name or "").strip()
    if not candidate:
        return default
    try:
        return ModelChoice(candidate)
    except ValueError:
        supported = ", ".join(m.value for m in ModelChoice)
        raise ProfileValidationError(
            f"Unsupported model '{candidate}'. Supported values: {supported}."
        ) from None


def _utc_timestamp() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def assemble_report(
    *, report: str, report_type: ReportType, generated_at: str
) -> ThreatOutlookOut:
    return ThreatOutlookOut(
        success=True, report=report, report_type=report_type, generated_at=generated_at
    )


class ThreatOutlookService:
    def __init__(
        self,
        *,
        llm_client: LLMClient,
        default_model: ModelChoice = ModelChoice.CLAUDE_HAIKU,
        today: Callable[[], date] = date.today,
        clock: Callable[[], str] = _utc_timestamp,
    ):
        self._llm = llm_client
        self._default_model = default_model
        self._today = today
        self._clock = clock

    def selected_model(self, payload: ThreatOutlookIn) -> ModelChoice:
        return resolve_model(payload.model, default=self._default_model)

    def model_label(self, payload: ThreatOutlookIn) -> str | None:
        """Resolved model name for logs; None when the requested name is unsupported."""

        try:
            return self.selected_model(payload).value
        except ProfileValidationError:
            return None

    async def generate(self, payload: ThreatOutlookIn) -> ThreatOutlookOut:
        # Validation runs before anything else so a bad profile never reaches a provider.
        profile = validate_profile(
            locations=payload.locations,
            topics=payload.topics,
            regions=payload.regions,
            industries=payload.industries,
        )
        model = self.selected_model(payload)

        today = (payload.today or "").strip() or format_report_date(self._today())
        system_prompt, user_prompt = build_threat_outlook_prompts(
            profile=profile,
            topic_labels=resolve_topic_labels(profile.topics),
            today=today,
            report_type=payload.report_type,
        )

        raw = await self._llm.generate_text(
            model=model, system_prompt=system_prompt, user_prompt=user_prompt
        )
        report = sanitize_report(raw, report_type=payload.report_type)
        return assemble_report(
            report=report, report_type=payload.report_type, generated_at=self._clock()
        )

    async def check_credits(self) -> CreditsOut:
        credits: dict[str, CredentialOut] = {}
        for provider in (Provider.CLAUDE, Provider.OPENAI):
            status = await self._llm.check_credentials(provider=provider)
            credits[provider.value] = CredentialOut(
                available=status.available, message=status.message, error=status.error
            )
        return CreditsOut(success=True, credits=credits, note=CREDITS_NOTE)
