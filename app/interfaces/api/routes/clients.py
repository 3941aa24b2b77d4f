"""Rutas para clientes y para la ingesta de eventos de colaboradores."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.clients import (
    DuplicateEventError,
    create_client as create_client_uc,
    get_client as get_client_uc,
    record_client_event as record_client_event_uc,
)
from app.domain.errors import MalformedEventError
from app.infrastructure.database import get_db
from app.interfaces.api.schemas import (
    ClientCreate,
    ClientEventCreate,
    ClientRead,
    TimelineEventRead,
)

router = APIRouter(prefix="/clients", tags=["clients"])


@router.post("/", response_model=ClientRead, status_code=status.HTTP_201_CREATED)
def create_client(client_in: ClientCreate, db: Session = Depends(get_db)):
    """Registra un nuevo cliente."""

    try:
        client = create_client_uc(db, name=client_in.name)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ClientRead.model_validate(client)


@router.get("/{client_id}", response_model=ClientRead)
def read_client(client_id: int, db: Session = Depends(get_db)):
    """Obtiene el cliente identificado por ``client_id``."""

    try:
        client = get_client_uc(db, client_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return ClientRead.model_validate(client)


@router.post(
    "/{client_id}/events",
    response_model=TimelineEventRead,
    status_code=status.HTTP_201_CREATED,
)
def record_client_event(
    client_id: int,
    event_in: ClientEventCreate,
    db: Session = Depends(get_db),
):
    """Registra un evento generado por otro sistema en el timeline del cliente."""

    try:
        event = record_client_event_uc(
            db, client_id=client_id, payload=event_in.model_dump()
        )
    except MalformedEventError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Evento inválido: {exc.reason}",
        ) from exc
    except DuplicateEventError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return TimelineEventRead.from_entity(event)
