"""Tests for storing collaborator events per client."""

import pytest

from app.application.use_cases.clients import (
    DuplicateEventError,
    create_client,
    record_client_event,
)
from app.application.use_cases.timeline import get_client_timeline
from app.domain.errors import MalformedEventError


def _payload(event_id, **extra):
    payload = {
        "id": event_id,
        "kind": "message",
        "title": "Hola",
        "timestamp": "2024-05-10T10:00:00Z",
    }
    payload.update(extra)
    return payload


@pytest.fixture
def clients(db_session):
    return create_client(db_session, name="ACME"), create_client(db_session, name="Globex")


def test_same_id_is_accepted_for_different_clients(db_session, clients):
    acme, globex = clients

    record_client_event(db_session, client_id=acme.id, payload=_payload("m1"))
    record_client_event(db_session, client_id=globex.id, payload=_payload("m1", title="Otro"))

    acme_view = get_client_timeline(db_session, client_id=acme.id)
    globex_view = get_client_timeline(db_session, client_id=globex.id)
    assert [event.title for event in acme_view.events] == ["Hola"]
    assert [event.title for event in globex_view.events] == ["Otro"]


def test_same_id_twice_for_one_client_is_a_duplicate(db_session, clients):
    acme, _ = clients
    record_client_event(db_session, client_id=acme.id, payload=_payload("m1"))

    with pytest.raises(DuplicateEventError):
        record_client_event(db_session, client_id=acme.id, payload=_payload("m1"))

    assert len(get_client_timeline(db_session, client_id=acme.id).events) == 1


def test_missing_id_is_generated(db_session, clients):
    acme, _ = clients

    event = record_client_event(db_session, client_id=acme.id, payload=_payload(None))

    assert event.id


def test_unparseable_timestamp_is_rejected(db_session, clients):
    acme, _ = clients

    with pytest.raises(MalformedEventError):
        record_client_event(db_session, client_id=acme.id, payload=_payload("m2", timestamp="ayer"))


def test_unknown_client_is_rejected(db_session):
    with pytest.raises(ValueError):
        record_client_event(db_session, client_id=999, payload=_payload("m1"))
