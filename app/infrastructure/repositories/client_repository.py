"""Persistence layer for client data."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import Client
from app.infrastructure.models import ClientModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class ClientRepository:
    """Provide basic operations for :class:`Client` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, client_id: int) -> Client | None:
        model = self.session.get(ClientModel, client_id)
        return self._to_entity(model) if model else None

    def create(self, client: Client) -> Client:
        model = ClientModel(
            name=client.name.strip(),
            created_at=ensure_app_naive_datetime(client.created_at or now_in_app_timezone()),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ClientModel) -> Client:
        return Client(
            id=model.id,
            name=model.name,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["ClientRepository"]
