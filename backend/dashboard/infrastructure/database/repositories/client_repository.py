"""Concrete repository implementation for the client roster backed by SQLAlchemy."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from dashboard.application.interfaces import ClientRepository
from dashboard.domain.entities import ChangeEvent, ChangeKind, ClientRecord, Period
from dashboard.domain.exceptions import EntityNotFoundError, RecordStoreError
from dashboard.infrastructure.database.models import ClientModel
from dashboard.infrastructure.database.repositories.publishing import PublishingRepository

TABLE = ClientModel.__tablename__


class SQLAlchemyClientRepository(PublishingRepository, ClientRepository):
    """Implements the ClientRepository port using SQLAlchemy async sessions."""

    def _to_entity(self, model: ClientModel) -> ClientRecord:
        """Map ORM model → domain entity."""
        return ClientRecord(
            id=model.id,
            mes_registro=model.mes_registro,
            anio_registro=model.anio_registro,
            ejecutivo=model.ejecutivo,
            estatus=model.estatus,
            producto=model.producto,
            monto=model.monto,
            fecha_inicio=model.fecha_inicio,
            fecha_final=model.fecha_final,
            actualizacion=model.actualizacion,
            extra=dict(model.extra or {}),
        )

    def _to_model(self, entity: ClientRecord) -> ClientModel:
        """Map domain entity → ORM model (for creation). The id is generated."""
        return ClientModel(
            mes_registro=entity.mes_registro,
            anio_registro=entity.anio_registro,
            ejecutivo=entity.ejecutivo,
            estatus=entity.estatus,
            producto=entity.producto,
            monto=entity.monto,
            fecha_inicio=entity.fecha_inicio,
            fecha_final=entity.fecha_final,
            actualizacion=entity.actualizacion,
            extra=dict(entity.extra),
        )

    @staticmethod
    def _apply(model: ClientModel, values: dict[str, Any]) -> None:
        columns = ClientRecord.column_names() - {"id"}
        extra = dict(model.extra or {})
        for key, value in values.items():
            if key in columns:
                setattr(model, key, value)
            elif key not in ("id", "extra"):
                extra[key] = value
        # JSON columns only notice reassignment
        model.extra = extra

    async def get_by_period(
        self, period: Period, *, ejecutivo: str | None = None
    ) -> list[ClientRecord]:
        stmt = select(ClientModel).where(
            ClientModel.mes_registro == period.mes,
            ClientModel.anio_registro == period.anio,
        )
        if ejecutivo is not None:
            stmt = stmt.where(ClientModel.ejecutivo == ejecutivo)
        stmt = stmt.order_by(ClientModel.id.desc())

        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return [self._to_entity(row) for row in result.scalars().all()]
        except SQLAlchemyError as e:
            raise RecordStoreError("select", TABLE, str(e)) from e

    async def create(self, record: ClientRecord) -> ClientRecord:
        try:
            async with self._session_factory() as session:
                model = self._to_model(record)
                session.add(model)
                await session.commit()
                created = self._to_entity(model)
        except SQLAlchemyError as e:
            raise RecordStoreError("insert", TABLE, str(e)) from e

        await self._publish(ChangeEvent(ChangeKind.INSERT, TABLE, new=created.to_row()))
        return created

    async def update_fields(self, client_id: int, values: dict[str, Any]) -> ClientRecord:
        try:
            async with self._session_factory() as session:
                model = await session.get(ClientModel, client_id)
                if model is None:
                    raise EntityNotFoundError("ClientRecord", client_id)
                old_row = self._to_entity(model).to_row()
                self._apply(model, values)
                await session.commit()
                updated = self._to_entity(model)
        except SQLAlchemyError as e:
            raise RecordStoreError("update", TABLE, str(e)) from e

        await self._publish(
            ChangeEvent(ChangeKind.UPDATE, TABLE, new=updated.to_row(), old=old_row)
        )
        return updated

    async def delete(self, client_id: int) -> bool:
        try:
            async with self._session_factory() as session:
                model = await session.get(ClientModel, client_id)
                if model is None:
                    return False
                old_row = self._to_entity(model).to_row()
                await session.delete(model)
                await session.commit()
        except SQLAlchemyError as e:
            raise RecordStoreError("delete", TABLE, str(e)) from e

        await self._publish(ChangeEvent(ChangeKind.DELETE, TABLE, old=old_row))
        return True
