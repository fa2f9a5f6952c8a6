"""Abstract repository interface (port) for the executive roster."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from dashboard.domain.entities import ExecutiveRecord, Period


class ExecutiveRepository(ABC):
    """Port for ``ejecutivos`` persistence."""

    @abstractmethod
    async def get_by_period(self, period: Period) -> list[ExecutiveRecord]:
        """Executives of ``period`` ordered by id ascending."""
        ...

    @abstractmethod
    async def get_names_by_ids(self, executive_ids: Iterable[int]) -> set[str]:
        """Names of the given executive ids, across all periods."""
        ...

    @abstractmethod
    async def create_many(self, records: list[ExecutiveRecord]) -> list[ExecutiveRecord]:
        """Persist new records in one transaction and return them with ids."""
        ...

    @abstractmethod
    async def update_fields(
        self, executive_id: int, values: dict[str, Any]
    ) -> ExecutiveRecord:
        """Apply a partial update. Raises EntityNotFoundError if missing."""
        ...
