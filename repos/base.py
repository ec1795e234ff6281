"""Repository contract shared by every storage backend.

Each entity kind gets one repository. Backends (in-memory, SQL) implement the
abstract methods; payload validation, unique-field bookkeeping and the
lifecycle-timestamp rule live here so both backends behave identically.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

import pydantic
from pydantic.alias_generators import to_camel

from errors import AppendOnlyError, ValidationError
from models.common import utc_now
from models.company_settings import CompanySettingsUpdate
from repos.kinds import EntityKind

Payload = Mapping[str, Any] | pydantic.BaseModel


def _as_dict(data: Payload, *, exclude_unset: bool = False) -> dict[str, Any]:
    if isinstance(data, pydantic.BaseModel):
        return data.model_dump(exclude_unset=exclude_unset)
    return dict(data)


class EntityRepository(ABC):
    """CRUD contract for one entity kind.

    Not-found is reported as None / False, never raised. Only
    ValidationError and DuplicateKeyError escape create/update, plus
    AppendOnlyError when an append-only kind is modified.
    """

    def __init__(self, kind: EntityKind, *, clock: Callable[[], datetime] = utc_now):
        self.kind = kind
        self._clock = clock
        self._columns = kind.model.__table__.columns

    @abstractmethod
    async def create(self, data: Payload) -> Any:
        """Validate, assign the next id, stamp created_at and store."""

    @abstractmethod
    async def get_by_id(self, entity_id: int) -> Any | None:
        """Return the entity or None."""

    @abstractmethod
    async def get_by_field(self, field: str, value: Any) -> Any | None:
        """Return the entity whose unique `field` equals `value`, or None."""

    @abstractmethod
    async def list(self, **filters: Any) -> list[Any]:
        """Return entities matching every equality filter, in id order."""

    @abstractmethod
    async def update(self, entity_id: int, data: Payload) -> Any | None:
        """Merge a partial payload; return the updated entity or None."""

    @abstractmethod
    async def delete(self, entity_id: int) -> bool:
        """Remove the entity; True if it existed."""

    # Shared helpers

    def _validate_create(self, data: Payload) -> dict[str, Any]:
        try:
            validated = self.kind.create_schema.model_validate(_as_dict(data))
        except pydantic.ValidationError as e:
            raise ValidationError.from_pydantic(self.kind.name, e) from e
        return validated.model_dump()

    def _validate_update(self, data: Payload) -> dict[str, Any]:
        self._ensure_mutable()
        try:
            validated = self.kind.update_schema.model_validate(
                _as_dict(data, exclude_unset=True)
            )
        except pydantic.ValidationError as e:
            raise ValidationError.from_pydantic(self.kind.name, e) from e
        changes = validated.model_dump(exclude_unset=True)

        errors = [
            {"loc": [to_camel(field)], "msg": "Field may not be null", "type": "null_not_allowed"}
            for field, value in changes.items()
            if value is None and not self._columns[field].nullable
        ]
        if errors:
            raise ValidationError(f"Invalid {self.kind.name} data", errors)
        return changes

    def _ensure_mutable(self) -> None:
        if self.kind.append_only:
            raise AppendOnlyError(self.kind.name)

    def _check_id(self, entity_id: Any) -> None:
        if not isinstance(entity_id, int) or isinstance(entity_id, bool):
            raise TypeError(
                f"{self.kind.name} id must be an int, got {type(entity_id).__name__}"
            )

    def _check_filters(self, filters: Mapping[str, Any]) -> None:
        unknown = set(filters) - set(self.kind.filter_fields)
        if unknown:
            raise ValueError(
                f"Cannot filter {self.kind.name} by {sorted(unknown)}; "
                f"allowed: {list(self.kind.filter_fields)}"
            )

    def _check_unique_field(self, field: str) -> None:
        if field not in self.kind.unique_fields:
            raise ValueError(f"{self.kind.name}.{field} is not a unique field")

    def _lifecycle_changes(self, entity: Any, changes: Mapping[str, Any]) -> dict[str, Any]:
        """Stamp the lifecycle field on the first transition into the terminal status.

        The timestamp is written once: moving away from the terminal status
        never clears it, and re-entering it keeps the original value.
        """
        rule = self.kind.lifecycle
        if rule is None:
            return {}
        if (
            changes.get("status") == rule.terminal_status
            and entity.status != rule.terminal_status
            and getattr(entity, rule.field) is None
        ):
            return {rule.field: self._clock()}
        return {}

    def _validate_merged(self, entity: Any, changes: Mapping[str, Any]) -> None:
        """Run the kind's cross-field check on the stored record with `changes` applied."""
        check = self.kind.merged_check
        if check is None:
            return
        merged = {
            field: changes[field] if field in changes else getattr(entity, field)
            for field in self._columns.keys()
        }
        errors = check(merged)
        if errors:
            raise ValidationError(f"Invalid {self.kind.name} data", errors)


class CompanySettingsRepository(ABC):
    """Singleton settings row, created with defaults on first access."""

    SINGLETON_ID = 1

    def __init__(
        self,
        defaults: Mapping[str, Any],
        *,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._defaults = {"theme": "light", "language": "en", **defaults}
        self._clock = clock

    @abstractmethod
    async def get(self) -> Any:
        """Return the settings row, creating it if absent."""

    @abstractmethod
    async def update(self, data: Payload) -> Any:
        """Merge a partial payload into the settings row."""

    def _validate_update(self, data: Payload) -> dict[str, Any]:
        try:
            validated = CompanySettingsUpdate.model_validate(_as_dict(data, exclude_unset=True))
        except pydantic.ValidationError as e:
            raise ValidationError.from_pydantic("CompanySettings", e) from e
        changes = validated.model_dump(exclude_unset=True)
        errors = [
            {"loc": [to_camel(field)], "msg": "Field may not be null", "type": "null_not_allowed"}
            for field in ("company_name", "email")
            if field in changes and changes[field] is None
        ]
        if errors:
            raise ValidationError("Invalid CompanySettings data", errors)
        return changes

    def _initial_values(self, changes: Mapping[str, Any] | None = None) -> dict[str, Any]:
        values = {**self._defaults, **(changes or {})}
        values["id"] = self.SINGLETON_ID
        values["updated_at"] = self._clock()
        return values
