"""Rutas del timeline unificado de un cliente (REST y websocket)."""

from __future__ import annotations

import logging
import math
from dataclasses import asdict
from typing import Any

import anyio
from anyio import to_thread
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream
from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import Session

from app.application.timeline import (
    AnchorReceived,
    AsyncioTimerScheduler,
    FeedListener,
    FeedSession,
    FilterSet,
    FiltersCleared,
    FilterToggled,
    OlderRevealed,
    TimelineFeed,
)
from app.application.timeline.feed import FeedCommand
from app.application.use_cases.clients import get_client as get_client_uc
from app.application.use_cases.timeline import (
    build_client_feed,
    get_client_timeline as get_client_timeline_uc,
    load_timeline_batches,
)
from app.config import Settings, get_settings
from app.domain.entities import CommentAdvisory, HighlightState, User
from app.infrastructure.database import SessionLocal, get_db
from app.infrastructure.notifications import comment_change_broker
from app.interfaces.api.dependencies import get_app_settings, resolve_acting_user
from app.interfaces.api.schemas import (
    ConversationDayRead,
    ConversationRead,
    TimelineEventRead,
    TimelineRead,
)

router = APIRouter(prefix="/clients/{client_id}/timeline", tags=["timeline"])
logger = logging.getLogger(__name__)


@router.get("", response_model=TimelineRead)
def read_timeline(
    client_id: int,
    kind: list[str] | None = Query(default=None, description="Tipos de evento a mostrar"),
    expanded: bool = False,
    limit: int | None = Query(default=None, ge=1, le=200),
    db: Session = Depends(get_db),
):
    """Devuelve el timeline combinado del cliente, del más reciente al más antiguo."""

    try:
        view = get_client_timeline_uc(
            db, client_id=client_id, kinds=kind, expanded=expanded, window_size=limit
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    return TimelineRead(
        client_id=client_id,
        events=[TimelineEventRead.from_entity(event) for event in view.events],
        filters=view.filters.sorted_kinds(),
        total=view.total,
        filtered_total=view.filtered_total,
        has_older=view.has_older,
        expanded=view.expanded,
    )


@router.get("/conversation", response_model=ConversationRead)
def read_conversation(
    client_id: int,
    kind: list[str] | None = Query(default=None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """Devuelve el timeline agrupado por día, en orden cronológico dentro de cada día."""

    try:
        get_client_uc(db, client_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    feed = build_client_feed(db, client_id=client_id, settings=settings)
    feed.apply_filter(kind or [])
    return ConversationRead(
        client_id=client_id,
        days=[ConversationDayRead.from_group(group) for group in feed.conversation_days()],
    )


def _highlight_payload(state: HighlightState) -> dict[str, Any]:
    return {"event_id": state.target_event_id, "phase": state.phase.value}


def _feed_payload(feed: TimelineFeed) -> dict[str, Any]:
    return {
        "client_id": feed.client_id,
        "events": [
            TimelineEventRead.from_entity(event).model_dump(mode="json")
            for event in feed.visible_events()
        ],
        "filters": feed.filters.sorted_kinds(),
        "total": len(feed.events),
        "filtered_total": len(feed.filtered_events()),
        "has_older": feed.has_older,
        "expanded": feed.expanded,
        "highlight": _highlight_payload(feed.highlight),
    }


class _SocketListener(FeedListener):
    """Translate feed outputs into websocket messages queued on ``outbox``.

    The first snapshot is sent as ``init``; later ones as ``feed``.
    """

    def __init__(self, outbox: MemoryObjectSendStream) -> None:
        self._outbox = outbox
        self._initialized = False

    def feed_changed(self, feed: TimelineFeed) -> None:
        message_type = "feed" if self._initialized else "init"
        self._initialized = True
        self.emit({"type": message_type, "data": _feed_payload(feed)})

    def filters_changed(self, filters: FilterSet) -> None:
        self.emit({"type": "filters", "data": filters.sorted_kinds()})

    def highlight_changed(self, state: HighlightState) -> None:
        self.emit({"type": "highlight", "data": _highlight_payload(state)})

    def scroll_requested(self, event_id: str) -> None:
        self.emit({"type": "scroll", "data": {"event_id": event_id}})

    def advisory(self, advisory: CommentAdvisory) -> None:
        self.emit({"type": "advisory", "data": asdict(advisory)})

    def emit(self, message: dict[str, Any]) -> None:
        try:
            self._outbox.send_nowait(message)
        except (anyio.ClosedResourceError, anyio.BrokenResourceError):
            logger.debug("Timeline socket closed; dropping %s message", message.get("type"))


_PING = object()


def _parse_command(message: dict[str, Any]) -> FeedCommand | object | None:
    message_type = message.get("type")
    if message_type == "ping":
        return _PING
    if message_type == "navigate":
        anchor = message.get("anchor")
        return AnchorReceived(anchor=anchor) if isinstance(anchor, str) and anchor else None
    if message_type == "toggle_filter":
        kind = message.get("kind")
        return FilterToggled(kind=kind) if isinstance(kind, str) and kind else None
    if message_type == "clear_filters":
        return FiltersCleared()
    if message_type == "reveal_older":
        return OlderRevealed()
    return None


def _parse_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _authorize_viewer(client_id: int, user_id: int) -> User:
    session = SessionLocal()
    try:
        viewer = resolve_acting_user(user_id, session)
        get_client_uc(session, client_id)
        return viewer
    finally:
        session.close()


def _load_batches(client_id: int, limit: int) -> list[list]:
    session = SessionLocal()
    try:
        return load_timeline_batches(session, client_id=client_id, limit=limit)
    finally:
        session.close()


async def _pump_outbox(websocket: WebSocket, outbox: MemoryObjectReceiveStream) -> None:
    async with outbox:
        async for message in outbox:
            try:
                await websocket.send_json(message)
            except (WebSocketDisconnect, RuntimeError):
                logger.debug("Timeline socket went away while sending %s", message.get("type"))
                return


async def _receive_commands(
    websocket: WebSocket, session: FeedSession, listener: _SocketListener
) -> None:
    while True:
        try:
            message = await websocket.receive_json()
        except WebSocketDisconnect:
            return
        except ValueError:
            logger.debug("Ignoring non JSON frame on timeline %s", session.feed.client_id)
            continue

        if not isinstance(message, dict):
            continue
        command = _parse_command(message)
        if command is _PING:
            listener.emit({"type": "pong"})
        elif command is None:
            logger.debug("Ignoring timeline message %r", message.get("type"))
        else:
            session.submit(command)


@router.websocket("/ws")
async def timeline_websocket(websocket: WebSocket, client_id: int) -> None:
    """Stream the live timeline of ``client_id`` to one viewer.

    Comment changes published while the socket is open, and the commands sent
    by the viewer, are applied in arrival order by a single feed session.
    """

    user_id = _parse_int(websocket.query_params.get("user_id"))
    if user_id is None:
        await websocket.close(code=1008)
        return

    try:
        viewer = await to_thread.run_sync(_authorize_viewer, client_id, user_id)
    except (HTTPException, ValueError):
        await websocket.close(code=1008)
        return

    settings = get_settings()
    await websocket.accept()

    outbox_send, outbox_receive = anyio.create_memory_object_stream(math.inf)
    listener = _SocketListener(outbox_send)
    feed = TimelineFeed(
        client_id,
        viewer_id=viewer.id,
        window_size=settings.timeline_window_size,
        scheduler=AsyncioTimerScheduler(),
        glow_seconds=settings.highlight_glow_seconds,
        fade_seconds=settings.highlight_fade_seconds,
        automated_origins=settings.automated_comment_origins,
        listener=listener,
    )
    session = FeedSession(feed)
    subscription = comment_change_broker.subscribe(client_id, session.submit)

    def shutdown() -> None:
        comment_change_broker.unsubscribe(subscription)
        session.close()
        outbox_send.close()

    try:
        batches = await to_thread.run_sync(
            _load_batches, client_id, settings.timeline_source_limit
        )
        feed.load(batches)
        anchor = websocket.query_params.get("anchor")
        if anchor:
            session.submit(AnchorReceived(anchor=anchor))

        async with anyio.create_task_group() as task_group:
            task_group.start_soon(session.run)
            task_group.start_soon(_pump_outbox, websocket, outbox_receive)
            try:
                await _receive_commands(websocket, session, listener)
            finally:
                shutdown()
    finally:
        shutdown()
