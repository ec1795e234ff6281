"""Storage bundle: one repository per entity kind, selected at startup."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncEngine

from config import Settings
from db import build_engine, build_session_factory, close_db, init_db
from models.common import utc_now
from repos.base import CompanySettingsRepository, EntityRepository
from repos.kinds import ENTITY_KINDS, EntityKind
from repos.memory import InMemoryCompanySettingsRepository, InMemoryRepository
from repos.sql import SqlCompanySettingsRepository, SqlRepository

logger = logging.getLogger(__name__)


@dataclass
class Storage:
    """All repositories of one backend.

    Callers see the same interface whichever backend was selected.
    """

    users: EntityRepository
    clients: EntityRepository
    projects: EntityRepository
    tasks: EntityRepository
    proposals: EntityRepository
    invoices: EntityRepository
    expenses: EntityRepository
    support_tickets: EntityRepository
    support_messages: EntityRepository
    calendar_events: EntityRepository
    company_settings: CompanySettingsRepository
    engine: AsyncEngine | None = None

    def repository(self, kind: EntityKind) -> EntityRepository:
        return getattr(self, kind.attr)

    async def init(self) -> None:
        if self.engine is not None:
            await init_db(self.engine)

    async def close(self) -> None:
        if self.engine is not None:
            await close_db(self.engine)


def _company_defaults(settings: Settings | None) -> dict[str, str]:
    if settings is None:
        return {"company_name": "CRM System", "email": "contact@crmsystem.com"}
    return {
        "company_name": settings.DEFAULT_COMPANY_NAME,
        "email": settings.DEFAULT_COMPANY_EMAIL,
    }


def build_memory_storage(
    settings: Settings | None = None,
    *,
    clock: Callable[[], datetime] = utc_now,
) -> Storage:
    """Create an empty in-process storage."""
    repositories = {
        kind.attr: InMemoryRepository(kind, clock=clock) for kind in ENTITY_KINDS
    }
    return Storage(
        **repositories,
        company_settings=InMemoryCompanySettingsRepository(
            _company_defaults(settings), clock=clock
        ),
    )


def build_sql_storage(
    database_url: str,
    settings: Settings | None = None,
    *,
    echo: bool = False,
    clock: Callable[[], datetime] = utc_now,
    **engine_kwargs,
) -> Storage:
    """Create a storage backed by the database at `database_url`.

    Tables are created by Storage.init() (or by Alembic migrations).
    """
    engine = build_engine(database_url, echo=echo, **engine_kwargs)
    session_factory = build_session_factory(engine)
    repositories = {
        kind.attr: SqlRepository(kind, session_factory, clock=clock)
        for kind in ENTITY_KINDS
    }
    return Storage(
        **repositories,
        company_settings=SqlCompanySettingsRepository(
            _company_defaults(settings), session_factory, clock=clock
        ),
        engine=engine,
    )


def build_storage(settings: Settings) -> Storage:
    """Select the storage backend configured by STORAGE_BACKEND."""
    if settings.STORAGE_BACKEND == "sql":
        logger.info("Using SQL storage backend")
        return build_sql_storage(
            settings.DATABASE_URL,
            settings,
            echo=settings.DATABASE_ECHO,
        )
    logger.info("Using in-memory storage backend")
    return build_memory_storage(settings)
