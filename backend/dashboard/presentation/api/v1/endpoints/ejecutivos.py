"""Executive roster endpoints — quotas, activation and monthly rollover."""

from fastapi import APIRouter, Depends, HTTPException, status

from dashboard.application.interfaces import ExecutiveRepository, ProfileRepository
from dashboard.application.schemas import (
    ActivoUpdate,
    ExecutiveResponse,
    ExecutiveRosterResponse,
    MetaUpdate,
    RolloverRequest,
    RolloverResponse,
)
from dashboard.application.services import ExecutiveFetchPolicy, ExecutiveRosterManager
from dashboard.domain.entities import ExecutiveRecord, Period
from dashboard.infrastructure.dependencies import (
    get_executive_fetch_policy,
    get_executive_repository,
    get_period,
    get_profile_repository,
)
from dashboard.presentation.api.v1.endpoints.errors import raise_for_result

router = APIRouter(prefix="/ejecutivos", tags=["Ejecutivos"])


def _to_response(record: ExecutiveRecord) -> ExecutiveResponse:
    return ExecutiveResponse.model_validate(record.to_row())


def _roster_response(manager: ExecutiveRosterManager) -> ExecutiveRosterResponse:
    return ExecutiveRosterResponse(
        mes=manager.period.mes,
        anio=manager.period.anio,
        ejecutivos=[_to_response(e) for e in manager.ejecutivos],
        nomina=[_to_response(e) for e in manager.nomina_ejecutivos],
        motos=[_to_response(e) for e in manager.motos_ejecutivos],
    )


def _manager(
    repository: ExecutiveRepository,
    profiles: ProfileRepository,
    period: Period,
    policy: ExecutiveFetchPolicy,
) -> ExecutiveRosterManager:
    return ExecutiveRosterManager(repository, profiles, period, fetch_policy=policy)


@router.get("", response_model=ExecutiveRosterResponse)
async def get_roster(
    period: Period = Depends(get_period),
    repository: ExecutiveRepository = Depends(get_executive_repository),
    profiles: ProfileRepository = Depends(get_profile_repository),
    policy: ExecutiveFetchPolicy = Depends(get_executive_fetch_policy),
) -> ExecutiveRosterResponse:
    """Executives of a period, split into payroll and motorcycle buckets."""
    manager = _manager(repository, profiles, period, policy)
    await manager.fetch()
    if manager.error:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=manager.error)
    return _roster_response(manager)


@router.patch("/{executive_id}/meta", response_model=ExecutiveResponse)
async def update_meta(
    executive_id: int,
    data: MetaUpdate,
    period: Period = Depends(get_period),
    repository: ExecutiveRepository = Depends(get_executive_repository),
    profiles: ProfileRepository = Depends(get_profile_repository),
    policy: ExecutiveFetchPolicy = Depends(get_executive_fetch_policy),
) -> ExecutiveResponse:
    """Set an executive's quota for its period."""
    manager = _manager(repository, profiles, period, policy)
    result = await manager.update_meta(executive_id, data.meta)
    raise_for_result(result)
    return _to_response(result.record)


@router.patch("/{executive_id}/activo", response_model=ExecutiveResponse)
async def update_activo(
    executive_id: int,
    data: ActivoUpdate,
    period: Period = Depends(get_period),
    repository: ExecutiveRepository = Depends(get_executive_repository),
    profiles: ProfileRepository = Depends(get_profile_repository),
    policy: ExecutiveFetchPolicy = Depends(get_executive_fetch_policy),
) -> ExecutiveResponse:
    """Enable or disable an executive."""
    manager = _manager(repository, profiles, period, policy)
    result = await manager.toggle_activo(executive_id, data.activo)
    raise_for_result(result)
    return _to_response(result.record)


@router.post("/rollover", response_model=RolloverResponse, status_code=status.HTTP_201_CREATED)
async def rollover(
    data: RolloverRequest,
    repository: ExecutiveRepository = Depends(get_executive_repository),
    profiles: ProfileRepository = Depends(get_profile_repository),
    policy: ExecutiveFetchPolicy = Depends(get_executive_fetch_policy),
) -> RolloverResponse:
    """Copy the previous month's executives and quotas into the given period."""
    manager = _manager(repository, profiles, Period(mes=data.mes, anio=data.anio), policy)
    result = await manager.copy_from_previous_month()
    raise_for_result(result)
    return RolloverResponse(copied=len(result.record), roster=_roster_response(manager))
