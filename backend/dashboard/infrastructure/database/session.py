"""SQLAlchemy database session and engine configuration."""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from dashboard.config import get_settings


def _get_async_url(url: str) -> str:
    """Convert a sync SQLAlchemy URL to an async one."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def build_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    """Create an async engine for a sync-style or async-style database URL."""
    return create_async_engine(_get_async_url(url), echo=echo, future=True)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


settings = get_settings()

engine = build_engine(
    settings.database_url,
    echo=(settings.app_env == "development" and settings.log_level_sql == "DEBUG"),
)

async_session_factory = build_session_factory(engine)
