"""Domain entity — a sales executive with a monthly quota."""

from dataclasses import dataclass, field, fields, replace
from typing import Any

TIPO_NOMINA = frozenset({"nómina", "nomina"})
TIPO_MOTOS = "motos"


@dataclass
class ExecutiveRecord:
    """A row of the ``ejecutivos`` collection.

    Identifiers are per period: the same agent gets a new ``id`` every month,
    so ``nombre`` is the only identity that survives a rollover.
    """

    nombre: str
    mes: int
    anio: int
    id: int | None = None
    tipo: str | None = None
    meta: float = 0
    activo: bool = True
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def is_nomina(self) -> bool:
        return self.tipo in TIPO_NOMINA

    @property
    def is_motos(self) -> bool:
        return self.tipo == TIPO_MOTOS

    @classmethod
    def column_names(cls) -> frozenset[str]:
        return frozenset(f.name for f in fields(cls) if f.name != "extra")

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "ExecutiveRecord":
        known = cls.column_names()
        values = {k: v for k, v in row.items() if k in known}
        extra = {k: v for k, v in row.items() if k not in known and k != "extra"}
        # "extra" is the nested bag itself; anything but a mapping is dropped
        nested = row.get("extra")
        if isinstance(nested, dict):
            extra.update(nested)
        return cls(**values, extra=extra)

    def to_row(self) -> dict[str, Any]:
        row = {name: getattr(self, name) for name in self.column_names()}
        row.update(self.extra)
        return row

    def copy_to(self, mes: int, anio: int) -> "ExecutiveRecord":
        """Clone into another period. The clone has no id until it is persisted."""
        return replace(self, id=None, mes=mes, anio=anio, extra=dict(self.extra))

    def with_values(self, values: dict[str, Any]) -> "ExecutiveRecord":
        return replace(self, **values)
