"""Endpoints and websocket handler for realtime notifications."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    list_notifications as list_notifications_uc,
    mark_notifications_read as mark_notifications_read_uc,
)
from app.domain.entities import Notification, User
from app.infrastructure.database import SessionLocal, get_db
from app.infrastructure.notifications import notification_manager, serialize_notification
from app.interfaces.api.dependencies import get_acting_user, resolve_acting_user
from app.interfaces.api.schemas import NotificationMarkReadRequest, NotificationRead

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(serialize_notification(notification))


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    unread_only: bool = False,
    limit: int = 50,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_acting_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the acting user."""

    notifications = list_notifications_uc(
        db, user_id=current_user.id, unread_only=unread_only, limit=limit
    )
    return [_notification_to_schema(notification) for notification in notifications]


@router.post("/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_notifications_read(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_acting_user),
):
    """Mark the given notifications of the acting user as read."""

    mark_notifications_read_uc(
        db, user_id=current_user.id, notification_ids=payload.unique_ids()
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _parse_user_id(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the given user."""

    user_id = _parse_user_id(websocket.query_params.get("user_id"))
    if user_id is None:
        await websocket.close(code=1008)
        return

    session = SessionLocal()
    try:
        user = resolve_acting_user(user_id, session)
        pending_notifications = list_notifications_uc(
            session, user_id=user.id, unread_only=True
        )
    except HTTPException:
        await websocket.close(code=1008)
        return
    finally:
        session.close()

    await notification_manager.connect(user.id, websocket)
    try:
        await notification_manager.send(
            user.id,
            websocket,
            {
                "type": "init",
                "data": [serialize_notification(n) for n in pending_notifications],
            },
        )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                logger.debug("Ignoring non JSON frame from user %s", user.id)
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await notification_manager.send(user.id, websocket, {"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    ack_session = SessionLocal()
                    try:
                        mark_notifications_read_uc(
                            ack_session, user_id=user.id, notification_ids=ids
                        )
                    finally:
                        ack_session.close()
                continue
    except WebSocketDisconnect:
        notification_manager.disconnect(user.id, websocket)
    except Exception:
        notification_manager.disconnect(user.id, websocket)
        raise
