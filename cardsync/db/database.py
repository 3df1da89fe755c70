"""
Database engine and session management.

Engines and session factories are built explicitly from a URL and passed
to the document store; there is no module-level engine.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from cardsync.models.db import Base


def create_engine_for(database_url: str, *, echo: bool = False) -> AsyncEngine:
    return create_async_engine(database_url, echo=echo, pool_pre_ping=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine) -> None:
    """
    Initialize database tables.

    Creates all tables defined in the ORM models. Safe to call on every run.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
