"""Unit tests for the ExecutiveRosterManager — fetch policies, quotas and rollover."""

import asyncio
from dataclasses import replace
from typing import Any

import pytest

from dashboard.application.interfaces import ExecutiveRepository, ProfileRepository
from dashboard.application.services import ExecutiveFetchPolicy, ExecutiveRosterManager
from dashboard.domain.entities import ExecutiveRecord, Period
from dashboard.domain.exceptions import (
    EntityNotFoundError,
    NoPreviousPeriodDataError,
    RecordStoreError,
)

MARZO = Period(mes=3, anio=2025)


# ── Fakes ────────────────────────────────────────────────────────────


class FakeExecutiveRepository(ExecutiveRepository):
    """In-memory fake repository for unit testing."""

    def __init__(self):
        self._rows: dict[int, ExecutiveRecord] = {}
        self._next_id = 1
        self.fail_with: RecordStoreError | None = None
        self.insert_calls = 0

    def seed(self, nombre: str, period: Period = MARZO, **values: Any) -> ExecutiveRecord:
        record = ExecutiveRecord(
            id=self._next_id, nombre=nombre, mes=period.mes, anio=period.anio, **values
        )
        self._rows[record.id] = record
        self._next_id += 1
        return record

    async def get_by_period(self, period):
        if self.fail_with:
            raise self.fail_with
        return sorted(
            (r for r in self._rows.values() if r.mes == period.mes and r.anio == period.anio),
            key=lambda r: r.id,
        )

    async def get_names_by_ids(self, executive_ids):
        return {self._rows[i].nombre for i in executive_ids if i in self._rows}

    async def create_many(self, records):
        if self.fail_with:
            raise self.fail_with
        self.insert_calls += 1
        created = []
        for record in records:
            record = replace(record, id=self._next_id)
            self._next_id += 1
            self._rows[record.id] = record
            created.append(record)
        return created

    async def update_fields(self, executive_id, values):
        if self.fail_with:
            raise self.fail_with
        if executive_id not in self._rows:
            raise EntityNotFoundError("ExecutiveRecord", executive_id)
        self._rows[executive_id] = self._rows[executive_id].with_values(values)
        return self._rows[executive_id]

    def get(self, executive_id: int) -> ExecutiveRecord:
        return self._rows[executive_id]


class FakeProfileRepository(ProfileRepository):
    def __init__(self, linked_ids: set[int] | None = None):
        self.linked_ids = linked_ids or set()

    async def get_linked_executive_ids(self):
        return set(self.linked_ids)


def _simple(repo, period=MARZO) -> ExecutiveRosterManager:
    return ExecutiveRosterManager(repo, None, period, fetch_policy=ExecutiveFetchPolicy.SIMPLE)


# ── fetch ────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_simple_fetch_returns_period_in_id_order():
    repo = FakeExecutiveRepository()
    repo.seed("Ana")
    repo.seed("Luis", Period(mes=2, anio=2025))
    repo.seed("Sofía")
    manager = _simple(repo)

    await manager.fetch()

    assert [e.nombre for e in manager.ejecutivos] == ["Ana", "Sofía"]
    assert manager.loading is False


@pytest.mark.asyncio
async def test_linked_fetch_matches_by_name_across_periods():
    repo = FakeExecutiveRepository()
    ana_enero = repo.seed("Ana", Period(mes=1, anio=2025))
    repo.seed("Ana")
    repo.seed("Luis")
    profiles = FakeProfileRepository({ana_enero.id})
    manager = ExecutiveRosterManager(repo, profiles, MARZO)

    await manager.fetch()

    assert [e.nombre for e in manager.ejecutivos] == ["Ana"]
    assert manager.ejecutivos[0].mes == 3


@pytest.mark.asyncio
async def test_linked_fetch_without_linked_accounts_is_empty():
    repo = FakeExecutiveRepository()
    repo.seed("Ana")
    manager = ExecutiveRosterManager(repo, FakeProfileRepository(), MARZO)

    await manager.fetch()

    assert manager.ejecutivos == []
    assert manager.error is None


def test_linked_policy_requires_profiles():
    with pytest.raises(ValueError):
        ExecutiveRosterManager(FakeExecutiveRepository(), None, MARZO)


@pytest.mark.asyncio
async def test_failed_fetch_keeps_previous_roster():
    repo = FakeExecutiveRepository()
    repo.seed("Ana")
    manager = _simple(repo)
    await manager.fetch()

    repo.fail_with = RecordStoreError("select", "ejecutivos", "timeout")
    await manager.fetch()

    assert len(manager.ejecutivos) == 1
    assert "timeout" in manager.error


@pytest.mark.asyncio
async def test_partition_by_tipo():
    repo = FakeExecutiveRepository()
    repo.seed("Ana", tipo="nómina")
    repo.seed("Luis", tipo="nomina")
    repo.seed("Sofía", tipo="motos")
    repo.seed("Raúl", tipo="otro")
    manager = _simple(repo)

    await manager.fetch()

    assert [e.nombre for e in manager.nomina_ejecutivos] == ["Ana", "Luis"]
    assert [e.nombre for e in manager.motos_ejecutivos] == ["Sofía"]


@pytest.mark.asyncio
async def test_stale_fetch_is_discarded_after_period_change():
    gate = asyncio.Event()

    class GatedRepository(FakeExecutiveRepository):
        async def get_by_period(self, period):
            if period == MARZO:
                await gate.wait()
            return await super().get_by_period(period)

    repo = GatedRepository()
    repo.seed("Ana")
    repo.seed("Luis", Period(mes=4, anio=2025))
    manager = _simple(repo)

    slow_fetch = asyncio.create_task(manager.fetch())
    await asyncio.sleep(0)
    await manager.set_period(Period(mes=4, anio=2025))
    gate.set()
    await slow_fetch

    assert [e.nombre for e in manager.ejecutivos] == ["Luis"]


# ── update_meta / toggle_activo ──────────────────────────────────────


@pytest.mark.asyncio
async def test_update_meta_patches_mirror():
    repo = FakeExecutiveRepository()
    ana = repo.seed("Ana", meta=10)
    manager = _simple(repo)
    await manager.fetch()

    result = await manager.update_meta(ana.id, 25)

    assert result.success
    assert repo.get(ana.id).meta == 25
    assert manager.ejecutivos[0].meta == 25


@pytest.mark.asyncio
async def test_toggle_activo_patches_mirror():
    repo = FakeExecutiveRepository()
    ana = repo.seed("Ana", activo=True)
    manager = _simple(repo)
    await manager.fetch()

    result = await manager.toggle_activo(ana.id, False)

    assert result.success
    assert manager.ejecutivos[0].activo is False


@pytest.mark.asyncio
async def test_failed_write_leaves_mirror_untouched():
    repo = FakeExecutiveRepository()
    ana = repo.seed("Ana", meta=10)
    manager = _simple(repo)
    await manager.fetch()
    repo.fail_with = RecordStoreError("update", "ejecutivos", "denied")

    result = await manager.update_meta(ana.id, 99)

    assert result.success is False
    assert "denied" in result.error
    assert manager.ejecutivos[0].meta == 10


@pytest.mark.asyncio
async def test_update_unknown_executive_fails():
    manager = _simple(FakeExecutiveRepository())

    result = await manager.toggle_activo(404, True)

    assert result.success is False
    assert isinstance(result.exception, EntityNotFoundError)


# ── copy_from_previous_month ─────────────────────────────────────────


@pytest.mark.asyncio
async def test_rollover_without_prior_data_fails_and_inserts_nothing():
    repo = FakeExecutiveRepository()
    manager = _simple(repo)

    result = await manager.copy_from_previous_month()

    assert result.success is False
    assert result.error == "No hay datos del mes anterior"
    assert isinstance(result.exception, NoPreviousPeriodDataError)
    assert repo.insert_calls == 0


@pytest.mark.asyncio
async def test_rollover_copies_every_prior_record():
    repo = FakeExecutiveRepository()
    febrero = Period(mes=2, anio=2025)
    prior = [
        repo.seed("Ana", febrero, tipo="nómina", meta=20, activo=True, extra={"zona": "Norte"}),
        repo.seed("Luis", febrero, tipo="motos", meta=8, activo=False),
    ]
    manager = _simple(repo)

    result = await manager.copy_from_previous_month()

    assert result.success
    assert len(result.record) == 2
    assert len(manager.ejecutivos) == 2
    for old, new in zip(prior, manager.ejecutivos):
        assert new.id not in {p.id for p in prior}
        assert (new.mes, new.anio) == (3, 2025)
        assert (new.nombre, new.tipo, new.meta, new.activo, new.extra) == (
            old.nombre, old.tipo, old.meta, old.activo, old.extra,
        )


@pytest.mark.asyncio
async def test_rollover_in_january_reads_december_of_prior_year():
    repo = FakeExecutiveRepository()
    repo.seed("Ana", Period(mes=12, anio=2024), meta=30)
    manager = _simple(repo, Period(mes=1, anio=2025))

    result = await manager.copy_from_previous_month()

    assert result.success
    assert [(e.nombre, e.mes, e.anio, e.meta) for e in manager.ejecutivos] == [
        ("Ana", 1, 2025, 30),
    ]


@pytest.mark.asyncio
async def test_rollover_insert_failure_is_reported():
    repo = FakeExecutiveRepository()
    repo.seed("Ana", Period(mes=2, anio=2025))
    manager = _simple(repo)

    async def failing_create_many(records):
        raise RecordStoreError("insert", "ejecutivos", "duplicate key")

    repo.create_many = failing_create_many

    result = await manager.copy_from_previous_month()

    assert result.success is False
    assert "duplicate key" in result.error
    assert manager.ejecutivos == []
