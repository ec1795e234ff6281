"""In-process storage backend.

Entities live in a dict per kind and are lost on restart. None of the methods
await, so each operation completes without interleaving with any other
operation on the event loop.
"""

import logging
from typing import Any

from errors import DuplicateKeyError
from models.company_settings import CompanySettings
from repos.base import CompanySettingsRepository, EntityRepository, Payload

logger = logging.getLogger(__name__)


class InMemoryRepository(EntityRepository):
    """Dict-backed repository for one entity kind."""

    def __init__(self, kind, **kwargs):
        super().__init__(kind, **kwargs)
        self._rows: dict[int, Any] = {}
        self._next_id = 1

    async def create(self, data: Payload) -> Any:
        values = self._validate_create(data)
        self._check_unique(values)

        entity_id = self._next_id
        self._next_id += 1
        if self.kind.lifecycle is not None:
            values[self.kind.lifecycle.field] = None
        entity = self.kind.model(id=entity_id, created_at=self._clock(), **values)
        self._rows[entity_id] = entity
        logger.debug("Created %s %s", self.kind.name, entity_id)
        return entity

    async def get_by_id(self, entity_id: int) -> Any | None:
        self._check_id(entity_id)
        return self._rows.get(entity_id)

    async def get_by_field(self, field: str, value: Any) -> Any | None:
        self._check_unique_field(field)
        return next(
            (row for row in self._rows.values() if getattr(row, field) == value),
            None,
        )

    async def list(self, **filters: Any):
        self._check_filters(filters)
        return [
            row
            for row in self._rows.values()
            if all(getattr(row, field) == value for field, value in filters.items())
        ]

    async def update(self, entity_id: int, data: Payload) -> Any | None:
        self._check_id(entity_id)
        changes = self._validate_update(data)
        entity = self._rows.get(entity_id)
        if entity is None:
            return None

        self._check_unique(changes, exclude_id=entity_id)
        self._validate_merged(entity, changes)
        changes.update(self._lifecycle_changes(entity, changes))
        for field, value in changes.items():
            setattr(entity, field, value)
        return entity

    async def delete(self, entity_id: int) -> bool:
        self._check_id(entity_id)
        self._ensure_mutable()
        removed = self._rows.pop(entity_id, None)
        if removed is not None:
            logger.debug("Deleted %s %s", self.kind.name, entity_id)
        return removed is not None

    def _check_unique(self, values: dict[str, Any], *, exclude_id: int | None = None) -> None:
        for field in self.kind.unique_fields:
            if field not in values:
                continue
            for row in self._rows.values():
                if row.id != exclude_id and getattr(row, field) == values[field]:
                    raise DuplicateKeyError(self.kind.name, field, values[field])


class InMemoryCompanySettingsRepository(CompanySettingsRepository):
    """Company settings held in process memory."""

    def __init__(self, defaults, **kwargs):
        super().__init__(defaults, **kwargs)
        self._settings: CompanySettings | None = None

    async def get(self) -> CompanySettings:
        if self._settings is None:
            self._settings = CompanySettings(**self._initial_values())
            logger.info("Initialized default company settings")
        return self._settings

    async def update(self, data: Payload) -> CompanySettings:
        changes = self._validate_update(data)
        if self._settings is None:
            self._settings = CompanySettings(**self._initial_values(changes))
            return self._settings

        for field, value in changes.items():
            setattr(self._settings, field, value)
        self._settings.updated_at = self._clock()
        return self._settings
