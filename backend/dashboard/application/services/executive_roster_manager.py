"""Executive roster manager — per-period quotas, activation and month rollover."""

from typing import Any

from dashboard.application.interfaces import ExecutiveRepository, ProfileRepository
from dashboard.application.services.roster_mirror import RosterMirror
from dashboard.domain.entities import (
    ExecutiveFetchPolicy,
    ExecutiveRecord,
    MutationResult,
    Period,
)
from dashboard.domain.exceptions import (
    EntityNotFoundError,
    NoPreviousPeriodDataError,
    RecordStoreError,
)
from dashboard.infrastructure.logging.colored_logger import SyncLogger, SyncStage

slog = SyncLogger("ExecutiveRosterManager")


class ExecutiveRosterManager:
    """Owns the executive mirror for one period.

    Executive ids change every month, so the ``linked`` policy joins profiles
    to executives by name: an agent stays visible in later periods as long as
    some row carrying their name was linked to an account. With no linked
    accounts at all the roster is empty.
    """

    def __init__(
        self,
        repository: ExecutiveRepository,
        profile_repository: ProfileRepository | None,
        period: Period,
        *,
        fetch_policy: ExecutiveFetchPolicy = ExecutiveFetchPolicy.LINKED,
    ) -> None:
        if fetch_policy is ExecutiveFetchPolicy.LINKED and profile_repository is None:
            raise ValueError("The linked fetch policy needs a profile repository")

        self._repository = repository
        self._profiles = profile_repository
        self._period = period
        self._policy = fetch_policy

        self._mirror: RosterMirror[ExecutiveRecord] = RosterMirror()
        self.loading = True
        self.error: str | None = None
        self._generation = 0

    # ── State ────────────────────────────────────────────────────────

    @property
    def ejecutivos(self) -> list[ExecutiveRecord]:
        return self._mirror.records

    @property
    def nomina_ejecutivos(self) -> list[ExecutiveRecord]:
        return [e for e in self._mirror if e.is_nomina]

    @property
    def motos_ejecutivos(self) -> list[ExecutiveRecord]:
        return [e for e in self._mirror if e.is_motos]

    @property
    def period(self) -> Period:
        return self._period

    @property
    def fetch_policy(self) -> ExecutiveFetchPolicy:
        return self._policy

    # ── Queries ──────────────────────────────────────────────────────

    async def set_period(self, period: Period) -> None:
        """Switch period, invalidating any fetch still in flight, and reload."""
        self._period = period
        self._generation += 1
        await self.fetch()

    async def fetch(self) -> None:
        """Replace the mirror with the roster of the active period."""
        generation = self._generation
        period = self._period
        self.loading = True

        try:
            with slog.timed_step(
                SyncStage.FETCH, "Loading ejecutivos",
                periodo=str(period), policy=self._policy.value,
            ):
                records = await self._load(period)
        except RecordStoreError as e:
            if generation == self._generation:
                self.error = str(e)
                self.loading = False
            return

        if generation != self._generation:
            slog.detail("Discarding stale fetch", periodo=str(period))
            return

        self._mirror.replace_all(records)
        self.error = None
        self.loading = False

    async def _load(self, period: Period) -> list[ExecutiveRecord]:
        if self._policy is ExecutiveFetchPolicy.SIMPLE:
            return await self._repository.get_by_period(period)

        linked_ids = await self._profiles.get_linked_executive_ids()
        if not linked_ids:
            slog.detail("No linked accounts, roster is empty", periodo=str(period))
            return []

        linked_names = await self._repository.get_names_by_ids(linked_ids)
        records = await self._repository.get_by_period(period)
        return [r for r in records if r.nombre in linked_names]

    # ── Mutations ────────────────────────────────────────────────────

    async def update_meta(self, executive_id: int, meta: float) -> MutationResult:
        return await self._write_through(executive_id, {"meta": meta})

    async def toggle_activo(self, executive_id: int, activo: bool) -> MutationResult:
        return await self._write_through(executive_id, {"activo": activo})

    async def copy_from_previous_month(self) -> MutationResult:
        """Clone the previous period's roster into the active period, then reload.

        Every field but the id is copied; ``mes``/``anio`` become the active
        period's. Fails without writing anything when the previous period is
        empty.
        """
        current = self._period
        previous = current.previous()

        try:
            with slog.timed_step(
                SyncStage.ROLLOVER, "Copying ejecutivos",
                desde=str(previous), hacia=str(current),
            ):
                prior = await self._repository.get_by_period(previous)
                if not prior:
                    raise NoPreviousPeriodDataError(previous.mes, previous.anio)
                created = await self._repository.create_many(
                    [record.copy_to(current.mes, current.anio) for record in prior]
                )
        except (RecordStoreError, NoPreviousPeriodDataError) as e:
            return MutationResult.fail(e)

        await self.fetch()
        return MutationResult.ok(created)

    async def _write_through(
        self, executive_id: int, values: dict[str, Any]
    ) -> MutationResult:
        try:
            updated = await self._repository.update_fields(executive_id, values)
        except (RecordStoreError, EntityNotFoundError) as e:
            slog.step_error(SyncStage.MUTATION, "Executive update failed", error=e)
            return MutationResult.fail(e)

        self._mirror.patch(executive_id, values)
        slog.step_complete(SyncStage.MUTATION, "Executive updated", id=executive_id, **values)
        return MutationResult.ok(updated)
