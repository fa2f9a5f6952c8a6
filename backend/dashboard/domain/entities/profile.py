"""Domain entity — a user account, optionally linked to an executive row."""

from dataclasses import dataclass


@dataclass
class ProfileRecord:
    """A row of the ``perfiles`` collection."""

    id: str
    nombre: str | None = None
    ejecutivo_id: int | None = None
