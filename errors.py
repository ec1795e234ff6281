"""Store-level error taxonomy with stable machine-readable codes."""

from __future__ import annotations

from typing import Any


class StoreError(Exception):
    """Base class for errors raised by the entity store."""

    code = "STORE_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(StoreError):
    """Missing or malformed field in an insertable or partial payload."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def from_pydantic(cls, kind: str, exc) -> "ValidationError":
        """Build from a pydantic.ValidationError, keeping loc/msg/type only."""
        errors = [
            {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in exc.errors()
        ]
        return cls(f"Invalid {kind} data", errors)


class DuplicateKeyError(StoreError):
    """Unique-field collision (e.g. username or email already taken)."""

    code = "DUPLICATE_KEY"

    def __init__(self, kind: str, field: str | None = None, value: Any = None):
        if field:
            message = f"{kind} with {field} '{value}' already exists"
        else:
            message = f"{kind} violates a unique constraint"
        super().__init__(message)
        self.kind = kind
        self.field = field
        self.value = value


class AppendOnlyError(StoreError):
    """Update or delete attempted on a kind whose records are append-only."""

    code = "APPEND_ONLY"

    def __init__(self, kind: str):
        super().__init__(f"{kind} records are append-only")
        self.kind = kind
