"""Use cases for creating and retrieving clients."""

from sqlalchemy.orm import Session

from app.domain.entities import Client
from app.infrastructure.repositories import ClientRepository
from app.utils import now_in_app_timezone


def create_client(session: Session, *, name: str) -> Client:
    normalized = name.strip()
    if not normalized:
        raise ValueError("El nombre del cliente es obligatorio")
    client = Client(id=None, name=normalized, created_at=now_in_app_timezone())
    return ClientRepository(session).create(client)


def get_client(session: Session, client_id: int) -> Client:
    """Return the requested client or raise ``ValueError``."""

    client = ClientRepository(session).get(client_id)
    if client is None:
        raise ValueError("Cliente no encontrado")
    return client
