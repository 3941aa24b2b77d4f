"""In-process push channel for the comment sub-stream of each client."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from itertools import count
from typing import DefaultDict

from app.domain.entities import FeedChange

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[FeedChange], None]

_subscription_ids = count(1)


@dataclass(eq=False)
class CommentChangeSubscription:
    """Handle returned by :meth:`CommentChangeBroker.subscribe`."""

    client_key: str
    callback: ChangeCallback
    loop: asyncio.AbstractEventLoop | None
    id: int = field(default_factory=lambda: next(_subscription_ids))


class CommentChangeBroker:
    """Deliver :class:`FeedChange` items to every timeline open on a client.

    Callbacks run on the event loop that created the subscription, in
    publication order, so changes to the same comment keep their order.
    """

    def __init__(self) -> None:
        self._subscriptions: DefaultDict[str, dict[int, CommentChangeSubscription]] = (
            defaultdict(dict)
        )

    def subscribe(self, client_id: int | str, callback: ChangeCallback) -> CommentChangeSubscription:
        try:
            loop: asyncio.AbstractEventLoop | None = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        subscription = CommentChangeSubscription(
            client_key=str(client_id), callback=callback, loop=loop
        )
        self._subscriptions[subscription.client_key][subscription.id] = subscription
        return subscription

    def unsubscribe(self, subscription: CommentChangeSubscription) -> None:
        subscriptions = self._subscriptions.get(subscription.client_key)
        if subscriptions is None:
            return
        subscriptions.pop(subscription.id, None)
        if not subscriptions:
            self._subscriptions.pop(subscription.client_key, None)

    def subscriber_count(self, client_id: int | str) -> int:
        return len(self._subscriptions.get(str(client_id), {}))

    def publish(self, client_id: int | str, change: FeedChange) -> None:
        """Schedule ``change`` for every subscriber of ``client_id``."""

        for subscription in list(self._subscriptions.get(str(client_id), {}).values()):
            self._deliver(subscription, change)

    def _deliver(self, subscription: CommentChangeSubscription, change: FeedChange) -> None:
        loop = subscription.loop
        if loop is None:
            subscription.callback(change)
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        try:
            if running is loop:
                loop.call_soon(subscription.callback, change)
            else:
                loop.call_soon_threadsafe(subscription.callback, change)
        except RuntimeError:
            logger.debug("Dropping subscription %s; its event loop is closed", subscription.id)
            self.unsubscribe(subscription)


comment_change_broker = CommentChangeBroker()


def publish_comment_change(client_id: int | str, change: FeedChange) -> None:
    """Public helper that delegates to the shared broker instance."""

    comment_change_broker.publish(client_id, change)


__all__ = [
    "CommentChangeBroker",
    "CommentChangeSubscription",
    "comment_change_broker",
    "publish_comment_change",
]
