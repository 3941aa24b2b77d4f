"""Tests for per-kind display attributes."""

import pytest

from app.application.timeline import present_event
from app.application.timeline.presentation import FALLBACK_PRESENTATION
from app.domain.entities import TimelineEventKind


@pytest.mark.parametrize("kind", [kind.value for kind in TimelineEventKind])
def test_every_known_kind_has_a_presentation(make_event, kind):
    presentation = present_event(make_event("e", kind))

    assert presentation.icon
    assert presentation.tone
    assert presentation != FALLBACK_PRESENTATION


def test_unknown_kind_falls_back(make_event):
    assert present_event(make_event("e", "satellite_ping")) == FALLBACK_PRESENTATION


def test_message_direction_and_source(make_event):
    from_client = present_event(
        make_event("e", "message", direction="client_to_team", source="whatsapp_audio_transcript")
    )

    assert from_client.label == "Cliente"
    assert from_client.icon == "mic"
    assert from_client.source_label == "Audio transcrito"
    assert present_event(make_event("f", "message")).label == "Equipo"


def test_risk_level_drives_tone(make_event):
    assert present_event(make_event("e", "risk", level="high")).tone == "red"
    assert present_event(make_event("e", "risk", level="low")).tone == "amber"


def test_automated_comment_gets_a_badge(make_comment):
    automated = present_event(make_comment("c", origin="ai_detection", user_name="Bot"))
    manual = present_event(make_comment("d", user_name="Ana"))

    assert automated.badge == "Automático"
    assert manual.badge is None
    assert manual.label == "Ana"
