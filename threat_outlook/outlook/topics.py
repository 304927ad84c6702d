from __future__ import annotations

from collections.abc import Iterable

# Short codes sent by the client form -> labels used in prompts and reports.
TOPIC_LABELS: dict[str, str] = {
    "cyber": "Cyber Threats",
    "terrorism": "Terrorism",
    "civil-unrest": "Civil Unrest",
    "geopolitics": "Geopolitics",
    "crime": "Physical Crime",
    "health": "Health Risks",
    "supply-chain": "Supply Chain Disruption",
    "insider-threat": "Insider Threat",
    "natural-disasters": "Natural Disasters",
    "regulatory": "Regulatory / Legal Risk",
}


def resolve_topic_labels(topics: Iterable[str]) -> list[str]:
    """Map topic codes to display labels; unknown codes pass through verbatim."""

    return [TOPIC_LABELS.get(topic, topic) for topic in topics]
