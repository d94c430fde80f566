"""Async engine and session factory shared by the API and scripts."""

from collections.abc import AsyncIterator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from finance_dashboard.config import settings


def _engine_options(database_url: str) -> dict:
    # SQLite (tests, local runs) keeps SQLAlchemy's default pool settings.
    if make_url(database_url).get_backend_name() == "sqlite":
        return {}
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": True,
    }


# SQL parameters can contain password hashes; echo only in development.
async_engine = create_async_engine(
    settings.database_url,
    echo=(settings.db_echo if settings.app_env.lower() == "development" else False),
    **_engine_options(settings.database_url),
)

AsyncSessionLocal = async_sessionmaker(
    async_engine, class_=AsyncSession, expire_on_commit=False
)


async def get_db() -> AsyncIterator[AsyncSession]:
    """Yield one session per request; the repositories commit their own writes."""
    async with AsyncSessionLocal() as session:
        yield session


async def dispose_engine() -> None:
    await async_engine.dispose()
