"""Tests for folding live comment changes into a feed."""

from dataclasses import replace
from types import SimpleNamespace

import pytest

from app.application.timeline import LiveUpdateReconciler, merge_batches
from app.domain.entities import ChangeOperation, FeedChange


@pytest.fixture
def feed(make_event, make_comment):
    return merge_batches(
        [[make_comment("c1", 2), make_event("m1", "message", 1), make_event("s1", "session", 0)]]
    )


def test_insert_places_entry_by_timestamp(feed, make_comment):
    reconciler = LiveUpdateReconciler()

    result = reconciler.apply(feed, FeedChange.insert(make_comment("c2", 1.5)))

    assert [event.id for event in result] == ["c1", "c2", "m1", "s1"]


def test_insert_echo_of_known_entry_is_ignored(feed, make_comment):
    reconciler = LiveUpdateReconciler()
    echo = FeedChange.insert(replace(make_comment("c1", 2), title="echo"))

    result = reconciler.apply(feed, echo)

    assert result == feed
    assert result[0].title != "echo"


def test_update_replaces_in_place(feed, make_comment):
    reconciler = LiveUpdateReconciler()
    edited = make_comment("c1", 2, description="texto editado")

    result = reconciler.apply(feed, FeedChange.update(edited))

    assert len(result) == len(feed)
    assert result[0].description == "texto editado"


def test_update_for_unknown_entry_is_inserted(feed, make_comment):
    reconciler = LiveUpdateReconciler()

    result = reconciler.apply(feed, FeedChange.update(make_comment("c9", 3)))

    assert [event.id for event in result][:2] == ["c9", "c1"]


def test_delete_removes_entry(feed):
    reconciler = LiveUpdateReconciler()

    result = reconciler.apply(feed, FeedChange.delete("m1"))

    assert [event.id for event in result] == ["c1", "s1"]


def test_delete_of_unknown_entry_is_a_no_op(feed):
    reconciler = LiveUpdateReconciler()

    assert reconciler.apply(feed, FeedChange.delete("ghost")) == feed


@pytest.mark.parametrize("op", [ChangeOperation.INSERT, ChangeOperation.UPDATE])
def test_change_without_event_is_rejected(feed, op):
    reconciler = LiveUpdateReconciler()
    change = SimpleNamespace(op=op, event_id="c9", event=None)

    with pytest.raises(ValueError, match="c9"):
        reconciler.apply(feed, change)


def test_changes_are_applied_in_order(feed, make_comment):
    reconciler = LiveUpdateReconciler()
    changes = [
        FeedChange.insert(make_comment("c2", 5)),
        FeedChange.update(make_comment("c2", 5, description="v2")),
        FeedChange.delete("c1"),
    ]

    result = reconciler.apply_many(feed, changes)

    assert [event.id for event in result] == ["c2", "m1", "s1"]
    assert result[0].description == "v2"


def test_advisory_for_automated_comment_from_someone_else(feed, make_comment):
    advisories = []
    reconciler = LiveUpdateReconciler(viewer_id=7, on_advisory=advisories.append)

    reconciler.apply(feed, FeedChange.insert(make_comment("ai", 3, user_id=2, origin="ai_detection")))

    assert len(advisories) == 1
    assert advisories[0].event_id == "ai"
    assert advisories[0].author_id == 2
    assert advisories[0].origin == "ai_detection"


@pytest.mark.parametrize(
    ("user_id", "origin"),
    [(7, "ai_detection"), (2, "manual")],
)
def test_no_advisory_for_own_or_manual_comments(feed, make_comment, user_id, origin):
    advisories = []
    reconciler = LiveUpdateReconciler(viewer_id=7, on_advisory=advisories.append)

    reconciler.apply(feed, FeedChange.insert(make_comment("x", 3, user_id=user_id, origin=origin)))

    assert advisories == []


def test_advisory_callback_errors_do_not_break_the_feed(feed, make_comment, caplog):
    def explode(_advisory):
        raise RuntimeError("toast failed")

    reconciler = LiveUpdateReconciler(viewer_id=7, on_advisory=explode)

    result = reconciler.apply(
        feed, FeedChange.insert(make_comment("ai", 3, user_id=2, origin="automation"))
    )

    assert result[0].id == "ai"
    assert "Advisory callback failed" in caplog.text


def test_change_payload_parsing(make_comment):
    change = FeedChange.from_payload(
        {
            "op": "INSERT",
            "event": {
                "id": "c5",
                "kind": "comment",
                "title": "Comentario",
                "timestamp": "2024-05-10T12:00:00Z",
                "metadata": {"user_id": 3},
            },
        }
    )
    assert change.op is ChangeOperation.INSERT
    assert change.event.author_id == 3

    delete = FeedChange.from_payload({"op": "delete", "event": {"id": "c5"}})
    assert delete.op is ChangeOperation.DELETE
    assert delete.event_id == "c5"

    with pytest.raises(ValueError):
        FeedChange.from_payload({"op": "update"})
