"""Tests for turning comment mentions into notifications."""

import pytest

from app.application.timeline import AmbiguousMentionPolicy, route_comment_mentions, truncate_body
from app.domain.entities import User


def _user(user_id, name, *, active=True, deleted=False):
    return User(
        id=user_id,
        name=name,
        email=f"{name.lower()}{user_id}@example.com",
        is_active=active,
        deleted=deleted,
        created_at=None,
    )


class FakeDirectory:
    def __init__(self, *users):
        self.users = list(users)
        self.lookups = []

    def find_by_display_name(self, display_name):
        self.lookups.append(display_name)
        wanted = display_name.strip().lower()
        return [user for user in self.users if user.name.strip().lower() == wanted]


@pytest.fixture
def directory():
    return FakeDirectory(_user(1, "alice"), _user(2, "bob"), _user(3, "carol"))


def test_one_notification_per_mentioned_user(directory):
    notifications = route_comment_mentions(
        "hey @bob and @carol", "cm-1", 1, 42, directory=directory, author_name="alice"
    )

    assert [n.recipient_id for n in notifications] == [2, 3]
    first = notifications[0]
    assert first.title == "alice te mencionó en un comentario"
    assert first.body == "hey @bob and @carol"
    assert first.anchor == "/clients/42#comment-cm-1"
    assert first.triggered_by_user_id == 1
    assert first.source_id == "cm-1"
    assert first.id is None


def test_author_never_notifies_themselves(directory):
    assert route_comment_mentions("note to self @alice", "cm-1", 1, 42, directory=directory) == []


def test_repeated_mentions_produce_one_notification(directory):
    notifications = route_comment_mentions("@bob @bob @BOB", "cm-1", 1, 42, directory=directory)

    assert [n.recipient_id for n in notifications] == [2]


def test_unresolved_names_are_dropped_silently(directory):
    notifications = route_comment_mentions("@ghost @bob", "cm-1", 1, 42, directory=directory)

    assert [n.recipient_id for n in notifications] == [2]


def test_no_mentions_skip_directory_lookups(directory):
    assert route_comment_mentions("plain text", "cm-1", 1, 42, directory=directory) == []
    assert directory.lookups == []


def test_inactive_or_deleted_users_are_not_notified():
    directory = FakeDirectory(_user(2, "bob", active=False), _user(3, "carol", deleted=True))

    assert route_comment_mentions("@bob @carol", "cm-1", 1, 42, directory=directory) == []


def test_long_comment_is_truncated_to_the_limit(directory):
    text = "@bob " + "x" * 145

    notification = route_comment_mentions(text, "cm-1", 1, 42, directory=directory)[0]

    assert len(text) == 150
    assert notification.body == text[:100] + "..."
    assert len(notification.body) == 103


def test_short_comment_is_quoted_verbatim(directory):
    text = "@bob " + "y" * 75

    notification = route_comment_mentions(text, "cm-1", 1, 42, directory=directory)[0]

    assert notification.body == text
    assert not notification.body.endswith("...")


def test_truncate_body_boundaries():
    assert truncate_body("a" * 100) == "a" * 100
    assert truncate_body("a" * 101) == "a" * 100 + "..."
    assert truncate_body("abcdef", 3) == "abc..."


def test_ambiguous_names_are_skipped_by_default():
    directory = FakeDirectory(_user(2, "sam"), _user(3, "Sam"), _user(4, "bob"))

    notifications = route_comment_mentions("@sam @bob", "cm-1", 1, 42, directory=directory)

    assert [n.recipient_id for n in notifications] == [4]


def test_ambiguous_names_can_notify_every_candidate():
    directory = FakeDirectory(_user(2, "sam"), _user(3, "Sam"))

    notifications = route_comment_mentions(
        "@sam",
        "cm-1",
        1,
        42,
        directory=directory,
        policy=AmbiguousMentionPolicy.NOTIFY_ALL,
    )

    assert [n.recipient_id for n in notifications] == [2, 3]


def test_title_without_author_name_and_custom_anchor_base(directory):
    notification = route_comment_mentions(
        "@bob", "cm-9", 1, 7, directory=directory, anchor_base_path="/app/clients/"
    )[0]

    assert notification.title == "Te mencionaron en un comentario"
    assert notification.anchor == "/app/clients/7#comment-cm-9"
