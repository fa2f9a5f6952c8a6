"""Abstract repository interface (port) for the client roster."""

from abc import ABC, abstractmethod
from typing import Any

from dashboard.domain.entities import ClientRecord, Period


class ClientRepository(ABC):
    """Port for ``clientes`` persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_period(
        self, period: Period, *, ejecutivo: str | None = None
    ) -> list[ClientRecord]:
        """Records of ``period`` (optionally one owner's), newest id first."""
        ...

    @abstractmethod
    async def create(self, record: ClientRecord) -> ClientRecord:
        """Persist a new record and return it with its generated id."""
        ...

    @abstractmethod
    async def update_fields(self, client_id: int, values: dict[str, Any]) -> ClientRecord:
        """Apply a partial update and return the full stored record.

        Raises EntityNotFoundError when no record has ``client_id``.
        """
        ...

    @abstractmethod
    async def delete(self, client_id: int) -> bool:
        """Delete a record. Returns True if deleted, False if not found."""
        ...
