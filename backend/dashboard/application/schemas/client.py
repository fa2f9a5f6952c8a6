"""Pydantic DTOs (Data Transfer Objects) for the client roster."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ClientCreate(BaseModel):
    """Schema for creating a client. Unknown fields are kept and stored as-is.

    ``mes_registro`` / ``anio_registro`` are ignored: the roster's period wins.
    """

    model_config = ConfigDict(extra="allow")

    ejecutivo: str | None = Field(None, max_length=255, examples=["Laura Méndez"])
    estatus: str | None = Field(None, max_length=100, examples=["Pendiente"])
    producto: str | None = Field(None, max_length=255, examples=["Crédito de nómina"])
    monto: float | None = Field(None, ge=0, examples=[15000])
    fecha_inicio: str | None = Field(None, pattern=r"^\d{4}-\d{2}-\d{2}$")
    actualizacion: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _reject_reserved_keys(cls, data: Any) -> Any:
        if isinstance(data, dict) and "extra" in data:
            raise ValueError("'extra' is reserved; send unknown fields at the top level")
        return data


class ClientFieldUpdate(BaseModel):
    """Schema for a single-field update."""

    field: str = Field(..., min_length=1, max_length=100, examples=["telefono"])
    value: Any = None


class ClientStatusUpdate(BaseModel):
    """Schema for a status transition."""

    estatus: str = Field(..., min_length=1, max_length=100, examples=["Dispersión"])
    actualizacion: str = ""


class ClientResponse(BaseModel):
    """Schema returned for one client; extra fields are flattened in."""

    model_config = ConfigDict(extra="allow")

    id: int
    mes_registro: int
    anio_registro: int
    ejecutivo: str | None = None
    estatus: str | None = None
    producto: str | None = None
    monto: float | None = None
    fecha_inicio: str | None = None
    fecha_final: str | None = None
    actualizacion: str | None = None


class ClientStatsResponse(BaseModel):
    total_clientes: int
    en_pipeline: int
    dispersiones: int
    total_monto_nomina: float
    motos_vendidas: int


class ClientRosterResponse(BaseModel):
    """Snapshot of one client roster scope."""

    mes: int
    anio: int
    clients: list[ClientResponse]
    stats: ClientStatsResponse
