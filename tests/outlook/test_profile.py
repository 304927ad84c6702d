from __future__ import annotations

import pytest

from threat_outlook.domain.exceptions import ProfileValidationError
from threat_outlook.outlook.profile import validate_profile
from threat_outlook.outlook.topics import TOPIC_LABELS, resolve_topic_labels


@pytest.mark.parametrize("locations", [None, "", "   ", [], ["", "  "]])
def test_missing_locations_rejected(locations) -> None:
    with pytest.raises(ProfileValidationError) as excinfo:
        validate_profile(locations=locations, topics=["cyber"])
    assert excinfo.value.message == "Asset locations are required"


@pytest.mark.parametrize("topics", [None, "", []])
def test_missing_topics_rejected(topics) -> None:
    with pytest.raises(ProfileValidationError) as excinfo:
        validate_profile(locations=["NYC"], topics=topics)
    assert excinfo.value.message == "At least one topic interest is required"


def test_locations_checked_before_topics() -> None:
    with pytest.raises(ProfileValidationError) as excinfo:
        validate_profile(locations=None, topics=None)
    assert "locations" in excinfo.value.message


def test_single_values_normalized_to_sequences() -> None:
    profile = validate_profile(locations="Chicago, IL", topics="cyber")

    assert profile.locations == ("Chicago, IL",)
    assert profile.topics == ("cyber",)
    assert profile.regions == ""
    assert profile.industries == ""


def test_optional_fields_trimmed_and_joined() -> None:
    profile = validate_profile(
        locations=[" Houston, TX ", "Dubai"],
        topics=["cyber"],
        regions=["Middle East", "  "],
        industries="  Energy ",
    )

    assert profile.locations_text == "Houston, TX, Dubai"
    assert profile.regions == "Middle East"
    assert profile.industries == "Energy"


def test_topic_labels_resolved_with_passthrough_for_unknown_codes() -> None:
    assert resolve_topic_labels(["cyber", "civil-unrest", "space-weather"]) == [
        "Cyber Threats",
        "Civil Unrest",
        "space-weather",
    ]


def test_every_known_topic_has_a_label() -> None:
    assert resolve_topic_labels(TOPIC_LABELS) == list(TOPIC_LABELS.values())


def test_repeated_entries_collapsed_in_first_seen_order() -> None:
    profile = validate_profile(
        locations=["Dubai", "Chicago", " Dubai "], topics=["cyber", "crime", "cyber"]
    )

    assert profile.locations == ("Dubai", "Chicago")
    assert profile.topics == ("cyber", "crime")
    assert resolve_topic_labels(profile.topics) == ["Cyber Threats", "Physical Crime"]
