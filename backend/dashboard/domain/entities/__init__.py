from .period import Period
from .client import (
    ClientRecord,
    DISPERSION,
    PRODUCTO_NOMINA,
    RECHAZADO,
    TERMINAL_STATUSES,
)
from .executive import ExecutiveRecord, TIPO_MOTOS, TIPO_NOMINA
from .profile import ProfileRecord
from .fetch_policy import ExecutiveFetchPolicy
from .change_event import ChangeEvent, ChangeKind
from .mutation_result import MutationResult
from .client_stats import ClientStats

__all__ = [
    "Period",
    "ClientRecord",
    "DISPERSION",
    "PRODUCTO_NOMINA",
    "RECHAZADO",
    "TERMINAL_STATUSES",
    "ExecutiveRecord",
    "TIPO_MOTOS",
    "TIPO_NOMINA",
    "ProfileRecord",
    "ExecutiveFetchPolicy",
    "ChangeEvent",
    "ChangeKind",
    "MutationResult",
    "ClientStats",
]
