"""Abstract change feed (port) — push notifications of committed writes."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Any

from dashboard.domain.entities import ChangeEvent


class ChangeSubscription(ABC):
    """A live subscription. Iterate it to receive events in commit order.

    Iteration ends when the subscription is closed, either by its owner or by
    the feed after the inbox overflowed (``overflowed`` is then True).
    """

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[ChangeEvent]:
        ...

    @abstractmethod
    async def close(self) -> None:
        """Stop delivery. Safe to call more than once."""
        ...

    @property
    @abstractmethod
    def closed(self) -> bool:
        ...

    @property
    @abstractmethod
    def overflowed(self) -> bool:
        ...


class ChangeFeed(ABC):
    """Port for the persistence service's change stream."""

    @abstractmethod
    def subscribe(
        self, table: str, *, column: str | None = None, value: Any = None
    ) -> ChangeSubscription:
        """Open a subscription on ``table``, optionally filtered by ``column == value``."""
        ...

    @abstractmethod
    async def publish(self, event: ChangeEvent) -> None:
        """Deliver a committed write to every matching subscription."""
        ...
