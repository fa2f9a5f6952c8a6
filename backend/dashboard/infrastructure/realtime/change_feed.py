"""In-process change feed — fans committed writes out to bounded subscriber inboxes."""

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Any

from dashboard.application.interfaces import ChangeFeed, ChangeSubscription
from dashboard.domain.entities import ChangeEvent

logger = logging.getLogger(__name__)

DEFAULT_INBOX_SIZE = 256


class _QueueSubscription(ChangeSubscription):
    """One subscriber's ordered inbox. Consumers drain it with ``async for``."""

    def __init__(
        self,
        feed: "InProcessChangeFeed",
        table: str,
        column: str | None,
        value: Any,
        inbox_size: int,
    ) -> None:
        self._feed = feed
        self.table = table
        self.column = column
        self.value = value
        self._queue: asyncio.Queue[ChangeEvent | None] = asyncio.Queue(maxsize=inbox_size)
        self._closed = False
        self._overflowed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def overflowed(self) -> bool:
        return self._overflowed

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def wants(self, event: ChangeEvent) -> bool:
        return event.table == self.table and event.matches(self.column, self.value)

    async def __aiter__(self) -> AsyncIterator[ChangeEvent]:
        while True:
            event = await self._queue.get()
            if event is None:
                break
            yield event

    def offer(self, event: ChangeEvent) -> bool:
        """Queue ``event``. On a full inbox the subscription is terminated instead."""
        if self._closed:
            return False
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            self._overflowed = True
            self._terminate()
            return False
        return True

    async def close(self) -> None:
        if self._closed:
            return
        self._terminate()
        self._feed._detach(self)

    def _terminate(self) -> None:
        self._closed = True
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(None)


class InProcessChangeFeed(ChangeFeed):
    """Broadcasts change events to every subscription whose filter matches.

    Each subscription owns a bounded asyncio.Queue. A subscriber that falls a
    full inbox behind is disconnected and flagged ``overflowed`` so it can
    resynchronise with a full read.
    """

    def __init__(self, inbox_size: int = DEFAULT_INBOX_SIZE) -> None:
        self._inbox_size = inbox_size
        self._subscriptions: list[_QueueSubscription] = []

    def subscribe(
        self, table: str, *, column: str | None = None, value: Any = None
    ) -> ChangeSubscription:
        subscription = _QueueSubscription(self, table, column, value, self._inbox_size)
        self._subscriptions.append(subscription)
        logger.debug(
            "Subscribed to '%s' (filter %s=%s), %d active",
            table, column, value, len(self._subscriptions),
        )
        return subscription

    async def publish(self, event: ChangeEvent) -> None:
        dead: list[_QueueSubscription] = []

        for subscription in self._subscriptions:
            if not subscription.wants(event):
                continue
            if not subscription.offer(event):
                dead.append(subscription)
                logger.warning(
                    "Change feed inbox full for '%s', disconnecting subscriber",
                    subscription.table,
                )

        for subscription in dead:
            self._detach(subscription)

    async def shutdown(self) -> None:
        """Close every subscription."""
        for subscription in list(self._subscriptions):
            await subscription.close()
        self._subscriptions.clear()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def _detach(self, subscription: _QueueSubscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)
