"""FastAPI dependency injection — wires infrastructure to application layer."""

from datetime import datetime, timezone
from functools import lru_cache

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dashboard.config import get_settings
from dashboard.application.interfaces import (
    ChangeFeed,
    ClientRepository,
    ExecutiveRepository,
    ProfileRepository,
)
from dashboard.domain.entities import ExecutiveFetchPolicy, Period
from dashboard.infrastructure.database.session import async_session_factory
from dashboard.infrastructure.database.repositories import (
    SQLAlchemyClientRepository,
    SQLAlchemyExecutiveRepository,
    SQLAlchemyProfileRepository,
)
from dashboard.infrastructure.realtime import InProcessChangeFeed


@lru_cache
def get_change_feed() -> InProcessChangeFeed:
    """Process-wide change feed shared by every repository and subscriber."""
    return InProcessChangeFeed(inbox_size=get_settings().feed_inbox_size)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return async_session_factory


def get_period(
    mes: int | None = Query(None, ge=1, le=12, description="Month (defaults to current)"),
    anio: int | None = Query(None, ge=2000, description="Year (defaults to current)"),
) -> Period:
    """Period from query parameters, defaulting each part to the current UTC date."""
    today = datetime.now(timezone.utc).date()
    return Period(mes=mes or today.month, anio=anio or today.year)


def get_executive_fetch_policy() -> ExecutiveFetchPolicy:
    return get_settings().executive_fetch_policy


def get_client_repository(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    feed: ChangeFeed = Depends(get_change_feed),
) -> ClientRepository:
    """Provides a client repository that publishes its writes on the change feed."""
    return SQLAlchemyClientRepository(session_factory, feed)


def get_executive_repository(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    feed: ChangeFeed = Depends(get_change_feed),
) -> ExecutiveRepository:
    return SQLAlchemyExecutiveRepository(session_factory, feed)


def get_profile_repository(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> ProfileRepository:
    return SQLAlchemyProfileRepository(session_factory)
