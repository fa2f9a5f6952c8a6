"""Shared plumbing for repositories that announce their writes on the change feed."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dashboard.application.interfaces import ChangeFeed
from dashboard.domain.entities import ChangeEvent

logger = logging.getLogger(__name__)


class PublishingRepository:
    """Runs each operation in its own transaction and publishes after commit.

    Events are only published once the transaction has committed, so a
    subscriber never sees a write that was rolled back.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        feed: ChangeFeed | None = None,
    ):
        self._session_factory = session_factory
        self._feed = feed

    async def _publish(self, event: ChangeEvent) -> None:
        if self._feed is None:
            return
        logger.debug("Publishing %s on '%s'", event.kind.value, event.table)
        await self._feed.publish(event)
