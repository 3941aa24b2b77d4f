"""Persistence helpers for collaborator-produced timeline entries."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy.orm import Session

from app.infrastructure.models import ClientEventModel


class ClientEventRepository:
    """Store and read raw timeline payloads.

    Rows are returned as plain mappings shaped like a timeline event so the
    merge step decides which of them are usable.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_client(
        self,
        client_id: int,
        *,
        kinds: Sequence[str] | None = None,
        limit: int | None = 50,
    ) -> list[dict[str, Any]]:
        query = self.session.query(ClientEventModel).filter(
            ClientEventModel.client_id == client_id
        )
        if kinds:
            query = query.filter(ClientEventModel.kind.in_(list(kinds)))
        query = query.order_by(ClientEventModel.recorded_at.desc())
        if limit is not None:
            query = query.limit(limit)
        return [self._to_payload(model) for model in query.all()]

    def create(self, client_id: int, payload: Mapping[str, Any]) -> dict[str, Any]:
        model = ClientEventModel(
            client_id=client_id,
            kind=str(payload["kind"]),
            title=str(payload.get("title") or ""),
            description=payload.get("description"),
            occurred_at=str(payload["timestamp"]),
            event_metadata=dict(payload.get("metadata") or {}),
        )
        if payload.get("id"):
            model.id = str(payload["id"])
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_payload(model)

    @staticmethod
    def _to_payload(model: ClientEventModel) -> dict[str, Any]:
        return {
            "id": model.id,
            "kind": model.kind,
            "title": model.title,
            "description": model.description,
            "timestamp": model.occurred_at,
            "metadata": dict(model.event_metadata or {}),
        }


__all__ = ["ClientEventRepository"]
