"""Registry of the notification websockets opened by each user."""

from __future__ import annotations

import logging
from typing import Any

import anyio
from fastapi import WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)


class NotificationConnectionManager:
    """Track notification sockets per user and serialize writes to each one.

    Pushes scheduled from request threads and the websocket handler's own
    replies both go through :meth:`send`, so a socket never has two writers
    at the same time.
    """

    def __init__(self) -> None:
        self._sockets: dict[int, dict[WebSocket, anyio.Lock]] = {}

    async def connect(self, user_id: int, websocket: WebSocket) -> None:
        await websocket.accept()
        self._sockets.setdefault(user_id, {})[websocket] = anyio.Lock()
        logger.debug(
            "User %s opened a notification socket (%d active)",
            user_id,
            self.connection_count(user_id),
        )

    def disconnect(self, user_id: int, websocket: WebSocket) -> None:
        sockets = self._sockets.get(user_id)
        if sockets is None or sockets.pop(websocket, None) is None:
            return
        if not sockets:
            del self._sockets[user_id]
        logger.debug("User %s closed a notification socket", user_id)

    def connection_count(self, user_id: int) -> int:
        return len(self._sockets.get(user_id, ()))

    def is_connected(self, user_id: int) -> bool:
        return self.connection_count(user_id) > 0

    async def send(self, user_id: int, websocket: WebSocket, message: dict[str, Any]) -> bool:
        """Write ``message`` to one registered socket.

        Returns ``False`` when the socket is unknown or already gone; a socket
        that fails to receive is dropped from the registry.
        """

        lock = self._sockets.get(user_id, {}).get(websocket)
        if lock is None:
            return False
        async with lock:
            try:
                await websocket.send_json(message)
            except (WebSocketDisconnect, RuntimeError, OSError):
                logger.debug("Dropping notification socket of user %s", user_id)
                self.disconnect(user_id, websocket)
                return False
        return True

    async def send_to_user(self, user_id: int, message: dict[str, Any]) -> int:
        """Send ``message`` to every socket of ``user_id``; return how many got it."""

        delivered = 0
        for websocket in list(self._sockets.get(user_id, {})):
            if await self.send(user_id, websocket, message):
                delivered += 1
        return delivered


notification_manager = NotificationConnectionManager()


__all__ = ["NotificationConnectionManager", "notification_manager"]
