"""Relational storage backend on SQLAlchemy's async ORM.

Every operation opens its own session and commits (or rolls back) before
returning, so one store call maps to exactly one transaction.
"""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from errors import DuplicateKeyError
from models.company_settings import CompanySettings
from repos.base import CompanySettingsRepository, EntityRepository, Payload

logger = logging.getLogger(__name__)


class SqlRepository(EntityRepository):
    """Repository for one entity kind backed by a table."""

    def __init__(self, kind, session_factory: async_sessionmaker[AsyncSession], **kwargs):
        super().__init__(kind, **kwargs)
        self._session_factory = session_factory

    async def create(self, data: Payload) -> Any:
        values = self._validate_create(data)
        model = self.kind.model

        async with self._session_factory() as session:
            await self._check_unique(session, values)
            if self.kind.lifecycle is not None:
                values[self.kind.lifecycle.field] = None
            entity = model(created_at=self._clock(), **values)
            session.add(entity)
            await self._commit(session)
            logger.debug("Created %s %s", self.kind.name, entity.id)
            return entity

    async def get_by_id(self, entity_id: int) -> Any | None:
        self._check_id(entity_id)
        async with self._session_factory() as session:
            return await session.get(self.kind.model, entity_id)

    async def get_by_field(self, field: str, value: Any) -> Any | None:
        self._check_unique_field(field)
        model = self.kind.model
        async with self._session_factory() as session:
            result = await session.execute(select(model).where(getattr(model, field) == value))
            return result.scalars().first()

    async def list(self, **filters: Any):
        self._check_filters(filters)
        model = self.kind.model
        query = select(model).order_by(model.id)
        for field, value in filters.items():
            query = query.where(getattr(model, field) == value)

        async with self._session_factory() as session:
            result = await session.execute(query)
            return [row for row in result.scalars().all()]

    async def update(self, entity_id: int, data: Payload) -> Any | None:
        self._check_id(entity_id)
        changes = self._validate_update(data)

        async with self._session_factory() as session:
            # Row lock keeps the status read and the lifecycle stamp in one step
            entity = await session.get(self.kind.model, entity_id, with_for_update=True)
            if entity is None:
                return None

            await self._check_unique(session, changes, exclude_id=entity_id)
            self._validate_merged(entity, changes)
            changes.update(self._lifecycle_changes(entity, changes))
            for field, value in changes.items():
                setattr(entity, field, value)
            await self._commit(session)
            return entity

    async def delete(self, entity_id: int) -> bool:
        self._check_id(entity_id)
        self._ensure_mutable()

        async with self._session_factory() as session:
            entity = await session.get(self.kind.model, entity_id)
            if entity is None:
                return False
            await session.delete(entity)
            await session.commit()
            logger.debug("Deleted %s %s", self.kind.name, entity_id)
            return True

    async def _check_unique(
        self,
        session: AsyncSession,
        values: dict[str, Any],
        *,
        exclude_id: int | None = None,
    ) -> None:
        model = self.kind.model
        for field in self.kind.unique_fields:
            if field not in values:
                continue
            query = select(model.id).where(getattr(model, field) == values[field])
            if exclude_id is not None:
                query = query.where(model.id != exclude_id)
            result = await session.execute(query)
            if result.first() is not None:
                raise DuplicateKeyError(self.kind.name, field, values[field])

    async def _commit(self, session: AsyncSession) -> None:
        """Commit, translating a unique-constraint race into DuplicateKeyError."""
        try:
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            error_str = str(e.orig) if hasattr(e, "orig") else str(e)
            is_unique_violation = getattr(getattr(e, "orig", None), "pgcode", None) == "23505"
            if is_unique_violation or any(
                pattern in error_str.lower()
                for pattern in ("unique constraint", "duplicate key", "already exists")
            ):
                raise DuplicateKeyError(self.kind.name) from e
            raise


class SqlCompanySettingsRepository(CompanySettingsRepository):
    """Company settings stored as a single row with a fixed id."""

    def __init__(self, defaults, session_factory: async_sessionmaker[AsyncSession], **kwargs):
        super().__init__(defaults, **kwargs)
        self._session_factory = session_factory

    async def get(self) -> CompanySettings:
        async with self._session_factory() as session:
            settings = await session.get(CompanySettings, self.SINGLETON_ID)
            if settings is not None:
                return settings
            return await self._insert(session, {})

    async def update(self, data: Payload) -> CompanySettings:
        changes = self._validate_update(data)
        async with self._session_factory() as session:
            settings = await session.get(
                CompanySettings, self.SINGLETON_ID, with_for_update=True
            )
            if settings is None:
                return await self._insert(session, changes)

            for field, value in changes.items():
                setattr(settings, field, value)
            settings.updated_at = self._clock()
            await session.commit()
            return settings

    async def _insert(self, session: AsyncSession, changes: dict[str, Any]) -> CompanySettings:
        settings = CompanySettings(**self._initial_values(changes))
        session.add(settings)
        try:
            await session.commit()
        except IntegrityError:
            # Another request created the row first; apply our changes on top of it
            await session.rollback()
            settings = await session.get(CompanySettings, self.SINGLETON_ID, populate_existing=True)
            for field, value in changes.items():
                setattr(settings, field, value)
            if changes:
                settings.updated_at = self._clock()
                await session.commit()
            return settings
        logger.info("Initialized default company settings")
        return settings
