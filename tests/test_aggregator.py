"""Tests for merging, filtering, windowing and day grouping."""

from datetime import date, timezone

from app.application.timeline import (
    EMPTY_FILTER_SET,
    FilterSet,
    apply_filters,
    group_by_day,
    merge_batches,
    window_events,
)
from app.domain.entities import TimelineEventKind


def _ids(events):
    return [event.id for event in events]


def test_merge_orders_newest_first_across_batches(make_event, make_comment):
    comments = [make_comment("c1", 5), make_comment("c2", 1)]
    messages = [make_event("m1", "message", 3), make_event("m2", "message", 7)]

    merged = merge_batches([comments, messages])

    assert _ids(merged) == ["m2", "c1", "m1", "c2"]


def test_merge_is_idempotent_and_first_occurrence_wins(make_event):
    original = make_event("e1", "risk", 1, title="first", level="high")
    duplicate = make_event("e1", "risk", 9, title="second")

    merged = merge_batches([[original], [duplicate], [original]])

    assert len(merged) == 1
    assert merged[0].title == "first"
    assert merge_batches([merged, merged]) == merged


def test_equal_timestamps_keep_source_order(make_event):
    first = make_event("a", "message", 0)
    second = make_event("b", "roi", 0)
    third = make_event("c", "risk", 0)

    assert _ids(merge_batches([[first, second], [third]])) == ["a", "b", "c"]


def test_malformed_events_are_dropped_without_losing_the_batch(make_event, caplog):
    batch = [
        {"id": "ok-1", "kind": "message", "title": "hola", "timestamp": "2024-05-10T12:00:00Z"},
        {"id": "bad", "kind": "message", "title": "x", "timestamp": "not-a-date"},
        {"kind": "message", "title": "no id", "timestamp": "2024-05-10T12:00:00Z"},
        {"id": "ok-2", "type": "roi", "title": "roi", "timestamp": 1715342500},
    ]

    with caplog.at_level("WARNING"):
        merged = merge_batches([batch, [make_event("m", "message", -60)]])

    assert _ids(merged) == ["ok-2", "ok-1", "m"]
    assert "bad" in caplog.text


def test_unknown_kinds_are_kept(make_event):
    merged = merge_batches([[make_event("x", "satellite_ping", 1)]])

    assert merged[0].kind == "satellite_ping"
    assert not merged[0].is_known_kind


def test_empty_filter_shows_everything(make_event):
    events = [make_event("m", "message"), make_event("r", "risk")]

    assert apply_filters(events, EMPTY_FILTER_SET) == events
    assert apply_filters(events, None) == events


def test_session_and_field_change_survive_any_filter(make_event):
    events = [
        make_event("m", "message", 4),
        make_event("s", "session", 3),
        make_event("r", "risk", 2),
        make_event("f", "field_change", 1),
    ]

    visible = apply_filters(events, FilterSet.of([TimelineEventKind.RISK]))

    assert _ids(visible) == ["s", "r", "f"]


def test_filter_toggle_adds_and_removes_kinds():
    filters = EMPTY_FILTER_SET.toggle("comment").toggle("risk")
    assert filters.sorted_kinds() == ["comment", "risk"]

    filters = filters.toggle("comment")
    assert filters.sorted_kinds() == ["risk"]
    assert filters.cleared().is_empty


def test_window_limits_until_expanded(make_event):
    events = [make_event(str(i), "message", -i) for i in range(25)]

    assert len(window_events(events)) == 10
    assert _ids(window_events(events, size=3)) == ["0", "1", "2"]
    assert len(window_events(events, expanded=True)) == 25


def test_group_by_day_orders_days_desc_and_events_asc(make_event):
    events = merge_batches(
        [
            [
                make_event("d1-late", "message", 60),
                make_event("d1-early", "message", 0),
                make_event("d0", "message", -24 * 60),
            ]
        ]
    )

    groups = group_by_day(events, tz=timezone.utc)

    assert [group.day for group in groups] == [date(2024, 5, 10), date(2024, 5, 9)]
    assert _ids(groups[0].events) == ["d1-early", "d1-late"]
    assert _ids(groups[1].events) == ["d0"]
