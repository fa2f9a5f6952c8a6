from .client import (
    ClientCreate,
    ClientFieldUpdate,
    ClientStatusUpdate,
    ClientResponse,
    ClientStatsResponse,
    ClientRosterResponse,
)
from .executive import (
    MetaUpdate,
    ActivoUpdate,
    RolloverRequest,
    ExecutiveResponse,
    ExecutiveRosterResponse,
    RolloverResponse,
)

__all__ = [
    "ClientCreate",
    "ClientFieldUpdate",
    "ClientStatusUpdate",
    "ClientResponse",
    "ClientStatsResponse",
    "ClientRosterResponse",
    "MetaUpdate",
    "ActivoUpdate",
    "RolloverRequest",
    "ExecutiveResponse",
    "ExecutiveRosterResponse",
    "RolloverResponse",
]
