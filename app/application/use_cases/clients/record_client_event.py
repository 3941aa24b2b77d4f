"""Use case for ingesting an event produced by a collaborator system."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from uuid import uuid4

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import FlushError

from app.domain.entities import TimelineEvent
from app.infrastructure.repositories import ClientEventRepository, ClientRepository

logger = logging.getLogger(__name__)


class DuplicateEventError(ValueError):
    """Raised when an event identifier was already recorded."""


def record_client_event(
    session: Session, *, client_id: int, payload: Mapping[str, Any]
) -> TimelineEvent:
    """Validate and store one collaborator event for ``client_id``.

    The payload is checked with the same rules used while merging, so an
    event that would be discarded from the timeline is rejected here with
    :class:`~app.domain.errors.MalformedEventError`. Unknown kinds are kept
    and a missing identifier is generated.
    """

    if ClientRepository(session).get(client_id) is None:
        raise ValueError("Cliente no encontrado")

    data = dict(payload)
    if not data.get("id"):
        data["id"] = uuid4().hex
    event = TimelineEvent.from_mapping(data)
    if not event.is_known_kind:
        logger.info("Storing event %s with unknown kind %r", event.id, event.kind)

    try:
        stored = ClientEventRepository(session).create(
            client_id,
            {
                "id": event.id,
                "kind": event.kind,
                "title": event.title,
                "description": event.description,
                "timestamp": event.timestamp.isoformat(),
                "metadata": dict(event.metadata),
            },
        )
    except (IntegrityError, FlushError) as exc:
        session.rollback()
        raise DuplicateEventError(
            f"El evento {event.id} ya fue registrado para este cliente"
        ) from exc
    return TimelineEvent.from_mapping(stored)


__all__ = ["DuplicateEventError", "record_client_event"]
