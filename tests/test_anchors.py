"""Tests for deep-link anchors."""

import pytest

from app.application.timeline import build_comment_anchor, parse_anchor


def test_build_and_parse_are_consistent():
    anchor = build_comment_anchor(42, "abc-123")

    assert anchor == "/clients/42#comment-abc-123"
    parsed = parse_anchor(anchor)
    assert parsed.event_id == "abc-123"
    assert parsed.client_id == "42"
    assert parsed.path == "/clients/42"


@pytest.mark.parametrize("value", ["#comment-xyz", "comment-xyz"])
def test_bare_fragments_are_accepted(value):
    parsed = parse_anchor(value)

    assert parsed.event_id == "xyz"
    assert parsed.client_id is None


@pytest.mark.parametrize("value", [None, "", "/clients/42", "/clients/42#note-1", "#comment-"])
def test_values_without_entry_reference_are_rejected(value):
    assert parse_anchor(value) is None
