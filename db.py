"""Database configuration and session management."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

# Base class for declarative models
Base = declarative_base()


def build_engine(database_url: str, *, echo: bool = False, **kwargs) -> AsyncEngine:
    """
    Create the async engine for the relational store.

    Args:
        database_url: SQLAlchemy async URL
        echo: Log every SQL statement
        **kwargs: Extra engine options (e.g. poolclass for tests)

    Returns:
        AsyncEngine
    """
    return create_async_engine(database_url, echo=echo, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create the session factory bound to an engine.

    Sessions keep loaded attributes after commit so entities can be returned
    to callers once the transaction is closed.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """
    Initialize database (create tables).
    This should be called on application startup.
    """
    # Import models so every table is registered on Base.metadata
    import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db(engine: AsyncEngine) -> None:
    """
    Close database connections.
    This should be called on application shutdown.
    """
    await engine.dispose()
