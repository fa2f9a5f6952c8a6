"""SQLAlchemy implementation of the ProfileRepository."""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dashboard.application.interfaces import ProfileRepository
from dashboard.domain.exceptions import RecordStoreError
from dashboard.infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository(ProfileRepository):
    """Read-only access to 'perfiles' for the linked-account join."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get_linked_executive_ids(self) -> set[int]:
        stmt = (
            select(ProfileModel.ejecutivo_id)
            .where(ProfileModel.ejecutivo_id.is_not(None))
            .distinct()
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return set(result.scalars().all())
        except SQLAlchemyError as e:
            raise RecordStoreError("select", ProfileModel.__tablename__, str(e)) from e
