from __future__ import annotations

from datetime import date
from typing import NamedTuple

from threat_outlook.outlook import templates
from threat_outlook.outlook.profile import CustomerProfile
from threat_outlook.outlook.schemas import ReportType


class PromptPair(NamedTuple):
    system_prompt: str
    user_prompt: str


def format_report_date(day: date) -> str:
    """Render a date the way reports print it, e.g. `Monday, February 10, 2026`."""

    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def _profile_text(profile: CustomerProfile, topic_labels: list[str]) -> str:
    lines = [
        f"Asset Locations: {profile.locations_text}",
        f"Topic Interests: {', '.join(topic_labels)}",
    ]
    if profile.regions:
        lines.append(f"Regional Focus: {profile.regions}")
    if profile.industries:
        lines.append(f"Industry/Sector: {profile.industries}")
    return "\n".join(lines)


def _profile_bullets(profile: CustomerProfile, topic_labels: list[str]) -> str:
    items = [
        f"<li>Assets: {profile.locations_text}</li>",
        f"<li>Interests: {' | '.join(topic_labels)}</li>",
    ]
    if profile.regions:
        items.append(f"<li>Regional Focus: {profile.regions}</li>")
    if profile.industries:
        items.append(f"<li>Industry: {profile.industries}</li>")
    body = "".join(f"\n      {item}" for item in items)
    return f'<ul style="margin: 5px 0 0 0; padding-left: 20px;">{body}\n    </ul>'


def _profile_lines(profile: CustomerProfile, topic_labels: list[str]) -> str:
    lines = [
        f"- Assets: {profile.locations_text}",
        f"- Interests: {' | '.join(topic_labels)}",
    ]
    if profile.regions:
        lines.append(f"- Regional Focus: {profile.regions}")
    if profile.industries:
        lines.append(f"- Industry: {profile.industries}")
    return "\n".join(lines)


def build_threat_outlook_prompts(
    *,
    profile: CustomerProfile,
    topic_labels: list[str],
    today: str,
    report_type: ReportType = "html",
) -> PromptPair:
    """
    Create (system_prompt, user_prompt) for one report.

    - Pure string rendering: identical inputs give byte-identical prompts.
    - The regional section is requested only when `profile.regions` is set; the
      industry weighting only when `profile.industries` is set. The Global /
      Transnational section is always requested.
    """

    region_rule = (
        templates.REGION_RULE.substitute(regions=profile.regions)
        if profile.regions
        else templates.NO_REGION_RULE
    )
    industry_rule = (
        templates.INDUSTRY_RULE.substitute(industries=profile.industries)
        if profile.industries
        else templates.NO_INDUSTRY_RULE
    )
    common = {
        "today": today,
        "profile_text": _profile_text(profile, topic_labels),
        "region_rule": region_rule,
        "industry_rule": industry_rule,
    }

    if report_type == "text":
        output_rule = templates.TEXT_OUTPUT_RULE
        user_prompt = templates.TEXT_USER_PROMPT.substitute(
            common, profile_lines=_profile_lines(profile, topic_labels)
        )
    else:
        output_rule = templates.HTML_OUTPUT_RULE
        user_prompt = templates.HTML_USER_PROMPT.substitute(
            common, profile_bullets=_profile_bullets(profile, topic_labels)
        )

    system_prompt = templates.SYSTEM_PROMPT.substitute(output_rule=output_rule)
    return PromptPair(system_prompt=system_prompt, user_prompt=user_prompt)
