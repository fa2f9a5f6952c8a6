"""Domain entity — a loan / credit application on the client roster."""

from dataclasses import dataclass, field, fields, replace
from typing import Any

DISPERSION = "Dispersión"
RECHAZADO = "Rechazado"
TERMINAL_STATUSES = frozenset({DISPERSION, RECHAZADO})

PRODUCTO_NOMINA = "Crédito de nómina"


@dataclass
class ClientRecord:
    """A row of the ``clientes`` collection.

    ``mes_registro`` / ``anio_registro`` are fixed at creation. Columns the
    roster does not know about travel untouched in ``extra``.
    """

    mes_registro: int
    anio_registro: int
    id: int | None = None
    ejecutivo: str | None = None
    estatus: str | None = None
    producto: str | None = None
    monto: float | None = None
    fecha_inicio: str | None = None
    fecha_final: str | None = None
    actualizacion: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def is_terminal(self) -> bool:
        return self.estatus in TERMINAL_STATUSES

    @classmethod
    def column_names(cls) -> frozenset[str]:
        return frozenset(f.name for f in fields(cls) if f.name != "extra")

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "ClientRecord":
        """Build a record from a flat column mapping (query result or change event)."""
        known = cls.column_names()
        values = {k: v for k, v in row.items() if k in known}
        extra = {k: v for k, v in row.items() if k not in known and k != "extra"}
        # "extra" is the nested bag itself; anything but a mapping is dropped
        nested = row.get("extra")
        if isinstance(nested, dict):
            extra.update(nested)
        return cls(**values, extra=extra)

    def to_row(self) -> dict[str, Any]:
        """Flatten back into a column mapping, extra fields included."""
        row = {name: getattr(self, name) for name in self.column_names()}
        row.update(self.extra)
        return row

    def with_values(self, values: dict[str, Any]) -> "ClientRecord":
        """Return a copy with ``values`` applied, unknown keys landing in ``extra``."""
        known = self.column_names()
        extra = dict(self.extra)
        extra.update({k: v for k, v in values.items() if k not in known and k != "extra"})
        return replace(
            self, **{k: v for k, v in values.items() if k in known}, extra=extra
        )
