"""In-process mirror of one roster scope, patched by identifier."""

from collections.abc import Iterable, Iterator
from typing import Any, Generic, TypeVar

from dashboard.domain.entities import ClientRecord, ExecutiveRecord

R = TypeVar("R", ClientRecord, ExecutiveRecord)


class RosterMirror(Generic[R]):
    """Ordered list of records for the active scope.

    Every patch operation matches by ``id`` and is idempotent: replaying an
    insert, update or delete that was already applied leaves the list as is.
    """

    def __init__(self) -> None:
        self._records: list[R] = []

    @property
    def records(self) -> list[R]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[R]:
        return iter(list(self._records))

    def get(self, record_id: Any) -> R | None:
        index = self._index_of(record_id)
        return None if index is None else self._records[index]

    def replace_all(self, records: Iterable[R]) -> None:
        self._records = list(records)

    def upsert_front(self, record: R) -> bool:
        """Prepend ``record``, or replace it in place if its id is already present.

        Returns True when the list grew.
        """
        index = self._index_of(record.id)
        if index is not None:
            self._records[index] = record
            return False
        self._records.insert(0, record)
        return True

    def replace(self, record: R) -> bool:
        """Swap in ``record`` for the entry with the same id. Never inserts."""
        index = self._index_of(record.id)
        if index is None:
            return False
        self._records[index] = record
        return True

    def patch(self, record_id: Any, values: dict[str, Any]) -> bool:
        index = self._index_of(record_id)
        if index is None:
            return False
        self._records[index] = self._records[index].with_values(values)
        return True

    def remove(self, record_id: Any) -> bool:
        index = self._index_of(record_id)
        if index is None:
            return False
        del self._records[index]
        return True

    def _index_of(self, record_id: Any) -> int | None:
        if record_id is None:
            return None
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None
