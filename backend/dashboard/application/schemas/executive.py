"""Pydantic DTOs for the executive roster."""

from pydantic import BaseModel, ConfigDict, Field


class MetaUpdate(BaseModel):
    meta: float = Field(..., ge=0, examples=[25])


class ActivoUpdate(BaseModel):
    activo: bool


class RolloverRequest(BaseModel):
    """Target period of a rollover; the source is the month before it."""

    mes: int = Field(..., ge=1, le=12)
    anio: int = Field(..., ge=2000)


class ExecutiveResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    nombre: str
    tipo: str | None = None
    meta: float
    activo: bool
    mes: int
    anio: int


class ExecutiveRosterResponse(BaseModel):
    """Snapshot of one executive roster period, split by reporting bucket."""

    mes: int
    anio: int
    ejecutivos: list[ExecutiveResponse]
    nomina: list[ExecutiveResponse]
    motos: list[ExecutiveResponse]


class RolloverResponse(BaseModel):
    copied: int
    roster: ExecutiveRosterResponse
