"""SQLAlchemy implementation of the ExecutiveRepository."""

from collections.abc import Iterable
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from dashboard.application.interfaces import ExecutiveRepository
from dashboard.domain.entities import ChangeEvent, ChangeKind, ExecutiveRecord, Period
from dashboard.domain.exceptions import EntityNotFoundError, RecordStoreError
from dashboard.infrastructure.database.models import ExecutiveModel
from dashboard.infrastructure.database.repositories.publishing import PublishingRepository

TABLE = ExecutiveModel.__tablename__


class SQLAlchemyExecutiveRepository(PublishingRepository, ExecutiveRepository):
    """Concrete executive repository backed by PostgreSQL via SQLAlchemy."""

    async def get_by_period(self, period: Period) -> list[ExecutiveRecord]:
        stmt = (
            select(ExecutiveModel)
            .where(ExecutiveModel.mes == period.mes, ExecutiveModel.anio == period.anio)
            .order_by(ExecutiveModel.id.asc())
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return [self._to_domain(m) for m in result.scalars().all()]
        except SQLAlchemyError as e:
            raise RecordStoreError("select", TABLE, str(e)) from e

    async def get_names_by_ids(self, executive_ids: Iterable[int]) -> set[str]:
        ids = list(executive_ids)
        if not ids:
            return set()
        stmt = select(ExecutiveModel.nombre).where(ExecutiveModel.id.in_(ids)).distinct()
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return set(result.scalars().all())
        except SQLAlchemyError as e:
            raise RecordStoreError("select", TABLE, str(e)) from e

    async def create_many(self, records: list[ExecutiveRecord]) -> list[ExecutiveRecord]:
        try:
            async with self._session_factory() as session:
                models = [
                    ExecutiveModel(
                        nombre=r.nombre,
                        tipo=r.tipo,
                        meta=r.meta,
                        activo=r.activo,
                        mes=r.mes,
                        anio=r.anio,
                        extra=dict(r.extra),
                    )
                    for r in records
                ]
                session.add_all(models)
                await session.commit()
                created = [self._to_domain(m) for m in models]
        except SQLAlchemyError as e:
            raise RecordStoreError("insert", TABLE, str(e)) from e

        for record in created:
            await self._publish(ChangeEvent(ChangeKind.INSERT, TABLE, new=record.to_row()))
        return created

    async def update_fields(
        self, executive_id: int, values: dict[str, Any]
    ) -> ExecutiveRecord:
        columns = ExecutiveRecord.column_names() - {"id"}
        try:
            async with self._session_factory() as session:
                model = await session.get(ExecutiveModel, executive_id)
                if model is None:
                    raise EntityNotFoundError("ExecutiveRecord", executive_id)
                old_row = self._to_domain(model).to_row()
                for key, value in values.items():
                    if key in columns:
                        setattr(model, key, value)
                await session.commit()
                updated = self._to_domain(model)
        except SQLAlchemyError as e:
            raise RecordStoreError("update", TABLE, str(e)) from e

        await self._publish(
            ChangeEvent(ChangeKind.UPDATE, TABLE, new=updated.to_row(), old=old_row)
        )
        return updated

    # ── Mapping ──────────────────────────────────────────────────────

    @staticmethod
    def _to_domain(model: ExecutiveModel) -> ExecutiveRecord:
        return ExecutiveRecord(
            id=model.id,
            nombre=model.nombre,
            tipo=model.tipo,
            meta=model.meta,
            activo=model.activo,
            mes=model.mes,
            anio=model.anio,
            extra=dict(model.extra or {}),
        )
