"""Rutas para escribir, editar y eliminar comentarios de un cliente."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.application.use_cases.clients import get_client as get_client_uc
from app.application.use_cases.comments import (
    CommentSubmission,
    delete_comment as delete_comment_uc,
    submit_comment as submit_comment_uc,
    update_comment as update_comment_uc,
)
from app.domain.entities import User
from app.domain.errors import CommentPersistError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_acting_user
from app.interfaces.api.schemas import (
    CommentCreate,
    CommentRead,
    CommentSubmissionRead,
    CommentUpdate,
    TimelineEventRead,
)

router = APIRouter(prefix="/clients/{client_id}/comments", tags=["comments"])
logger = logging.getLogger(__name__)


def _ensure_client(db: Session, client_id: int) -> None:
    try:
        get_client_uc(db, client_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


def _submission_to_schema(submission: CommentSubmission) -> CommentSubmissionRead:
    return CommentSubmissionRead(
        comment=CommentRead.model_validate(submission.comment),
        event=TimelineEventRead.from_entity(submission.event),
        notified_user_ids=[n.recipient_id for n in submission.notifications],
        notification_error=submission.notification_error,
    )


@router.post("/", response_model=CommentSubmissionRead, status_code=status.HTTP_201_CREATED)
def create_comment(
    client_id: int,
    comment_in: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_acting_user),
):
    """Publica un comentario y notifica a los usuarios mencionados."""

    _ensure_client(db, client_id)
    try:
        submission = submit_comment_uc(
            db,
            client_id=client_id,
            author=current_user,
            content=comment_in.content,
            origin=comment_in.origin,
        )
    except CommentPersistError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="No se pudo guardar el comentario. Intenta nuevamente.",
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if submission.notification_error:
        logger.warning(
            "Comentario %s guardado sin notificaciones: %s",
            submission.comment.id,
            submission.notification_error,
        )
    return _submission_to_schema(submission)


@router.put("/{comment_id}", response_model=CommentRead)
def update_comment(
    client_id: int,
    comment_id: str,
    comment_in: CommentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_acting_user),
):
    """Actualiza el texto de un comentario propio."""

    try:
        comment = update_comment_uc(
            db,
            client_id=client_id,
            comment_id=comment_id,
            user=current_user,
            content=comment_in.content,
        )
    except PermissionError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return CommentRead.model_validate(comment)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    client_id: int,
    comment_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_acting_user),
):
    """Elimina un comentario propio."""

    try:
        delete_comment_uc(db, client_id=client_id, comment_id=comment_id, user=current_user)
    except PermissionError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
