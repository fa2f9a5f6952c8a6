"""Client roster endpoints — period snapshot plus write-through mutations."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from dashboard.application.interfaces import ClientRepository
from dashboard.application.schemas import (
    ClientCreate,
    ClientFieldUpdate,
    ClientResponse,
    ClientRosterResponse,
    ClientStatsResponse,
    ClientStatusUpdate,
)
from dashboard.application.services import ClientRosterManager
from dashboard.domain.entities import ClientRecord, Period
from dashboard.infrastructure.dependencies import get_client_repository, get_period
from dashboard.presentation.api.v1.endpoints.errors import raise_for_result

router = APIRouter(prefix="/clientes", tags=["Clientes"])


def _to_response(record: ClientRecord) -> ClientResponse:
    return ClientResponse.model_validate(record.to_row())


def _manager(
    repository: ClientRepository, period: Period, ejecutivo: str | None = None
) -> ClientRosterManager:
    # Request-scoped: no change-feed subscription, the mirror lives for one call.
    return ClientRosterManager(
        repository,
        None,
        period,
        ejecutivo_nombre=ejecutivo,
        is_admin=ejecutivo is None,
    )


@router.get("", response_model=ClientRosterResponse)
async def get_roster(
    ejecutivo: str | None = Query(None, description="Only this executive's clients"),
    period: Period = Depends(get_period),
    repository: ClientRepository = Depends(get_client_repository),
) -> ClientRosterResponse:
    """Clients of a period, newest first, with dashboard statistics."""
    manager = _manager(repository, period, ejecutivo)
    await manager.fetch()
    if manager.error:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=manager.error)

    stats = manager.stats
    return ClientRosterResponse(
        mes=period.mes,
        anio=period.anio,
        clients=[_to_response(c) for c in manager.clients],
        stats=ClientStatsResponse(
            total_clientes=stats.total_clientes,
            en_pipeline=stats.en_pipeline,
            dispersiones=len(stats.dispersiones),
            total_monto_nomina=stats.total_monto_nomina,
            motos_vendidas=stats.motos_vendidas,
        ),
    )


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    data: ClientCreate,
    period: Period = Depends(get_period),
    repository: ClientRepository = Depends(get_client_repository),
) -> ClientResponse:
    """Create a client in the given period."""
    result = await _manager(repository, period).add(data.model_dump(exclude_unset=True))
    raise_for_result(result)
    return _to_response(result.record)


@router.patch("/{client_id}", response_model=ClientResponse)
async def update_client_field(
    client_id: int,
    data: ClientFieldUpdate,
    period: Period = Depends(get_period),
    repository: ClientRepository = Depends(get_client_repository),
) -> ClientResponse:
    """Write one field of a client."""
    result = await _manager(repository, period).update_field(client_id, data.field, data.value)
    raise_for_result(result)
    return _to_response(result.record)


@router.patch("/{client_id}/estatus", response_model=ClientResponse)
async def update_client_status(
    client_id: int,
    data: ClientStatusUpdate,
    period: Period = Depends(get_period),
    repository: ClientRepository = Depends(get_client_repository),
) -> ClientResponse:
    """Move a client to a new status."""
    result = await _manager(repository, period).update_status(
        client_id, data.estatus, data.actualizacion
    )
    raise_for_result(result)
    return _to_response(result.record)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: int,
    period: Period = Depends(get_period),
    repository: ClientRepository = Depends(get_client_repository),
) -> None:
    """Delete a client by ID."""
    result = await _manager(repository, period).delete(client_id)
    raise_for_result(result)
