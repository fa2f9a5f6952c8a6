"""Domain entity — a row-level change notification from the backend."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ChangeKind(str, Enum):
    """Kinds of committed writes the change feed reports."""

    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class ChangeEvent:
    """One committed write on a collection.

    ``new`` is set for inserts and updates, ``old`` for updates and deletes.
    Rows are flat column mappings, as they travel on the wire.
    """

    kind: ChangeKind
    table: str
    new: dict[str, Any] | None = None
    old: dict[str, Any] | None = None

    @property
    def row(self) -> dict[str, Any]:
        """The row that identifies the event: ``new`` when present, else ``old``."""
        return self.new if self.new is not None else (self.old or {})

    def matches(self, column: str | None, value: Any) -> bool:
        """Whether this event passes a single-column equality filter."""
        if column is None:
            return True
        for candidate in (self.new, self.old):
            if candidate is not None and candidate.get(column) == value:
                return True
        return False

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "table": self.table,
            "new": self.new,
            "old": self.old,
        }
