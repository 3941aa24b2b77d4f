"""Tests for environment driven settings."""

import pytest
from pydantic import ValidationError

from app.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.timeline_window_size == 10
    assert settings.highlight_glow_seconds == 2.5
    assert settings.highlight_fade_seconds == 0.5
    assert settings.notification_body_limit == 100
    assert settings.mention_ambiguity_policy == "skip"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MENTION_AMBIGUITY_POLICY", " Notify_All ")
    monkeypatch.setenv("TIMELINE_WINDOW_SIZE", "25")

    settings = Settings(_env_file=None)

    assert settings.mention_ambiguity_policy == "notify_all"
    assert settings.timeline_window_size == 25


def test_unknown_ambiguity_policy_is_rejected(monkeypatch):
    monkeypatch.setenv("MENTION_AMBIGUITY_POLICY", "first")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
