"""Derived statistics over the client mirror."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from .client import DISPERSION, PRODUCTO_NOMINA, ClientRecord


@dataclass(frozen=True)
class ClientStats:
    """Dashboard counters for one client roster.

    Payroll credit is reported as money (sum of ``monto``); every other
    product is reported in units sold, one per dispersed record.
    """

    total_clientes: int = 0
    en_pipeline: int = 0
    dispersiones: list[ClientRecord] = field(default_factory=list)
    total_monto_nomina: float = 0
    motos_vendidas: int = 0

    @classmethod
    def from_clients(cls, clients: Iterable[ClientRecord]) -> "ClientStats":
        clients = list(clients)
        dispersiones = [c for c in clients if c.estatus == DISPERSION]
        return cls(
            total_clientes=len(clients),
            en_pipeline=sum(1 for c in clients if not c.is_terminal),
            dispersiones=dispersiones,
            total_monto_nomina=sum(
                c.monto or 0 for c in dispersiones if c.producto == PRODUCTO_NOMINA
            ),
            motos_vendidas=sum(
                1 for c in dispersiones if c.producto != PRODUCTO_NOMINA
            ),
        )
