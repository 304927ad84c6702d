from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from threat_outlook.domain.exceptions import ProfileValidationError

LOCATIONS_REQUIRED = "Asset locations are required"
TOPICS_REQUIRED = "At least one topic interest is required"


@dataclass(frozen=True)
class CustomerProfile:
    """Validated, request-scoped customer profile."""

    locations: tuple[str, ...]
    topics: tuple[str, ...]
    regions: str = ""
    industries: str = ""

    @property
    def locations_text(self) -> str:
        return ", ".join(self.locations)


def _as_list(value: str | Sequence[str] | None) -> list[str]:
    if value is None:
        return []
    items = [value] if isinstance(value, str) else list(value)
    # Order-preserving de-duplication; repeated form values add nothing to the prompt.
    return list(dict.fromkeys(item.strip() for item in items if item and item.strip()))


def _as_text(value: str | Sequence[str] | None) -> str:
    return ", ".join(_as_list(value))


def validate_profile(
    *,
    locations: str | Sequence[str] | None,
    topics: str | Sequence[str] | None,
    regions: str | Sequence[str] | None = None,
    industries: str | Sequence[str] | None = None,
) -> CustomerProfile:
    """
    Normalize the submitted profile or raise `ProfileValidationError`.

    - A single string is treated as a one-element sequence (the form sends
      comma-joined locations, which are kept as typed).
    - Blank entries are dropped before the emptiness check; repeats are collapsed
      keeping first-seen order.
    """

    location_list = _as_list(locations)
    if not location_list:
        raise ProfileValidationError(LOCATIONS_REQUIRED)

    topic_list = _as_list(topics)
    if not topic_list:
        raise ProfileValidationError(TOPICS_REQUIRED)

    return CustomerProfile(
        locations=tuple(location_list),
        topics=tuple(topic_list),
        regions=_as_text(regions),
        industries=_as_text(industries),
    )
