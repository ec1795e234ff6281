"""Service layer shared by every entity kind.

Translates store results into HTTP outcomes: absent records become 404,
ValidationError becomes 400 and DuplicateKeyError becomes 409.
"""

from typing import Any

from fastapi import HTTPException, status
from pydantic import BaseModel

from errors import DuplicateKeyError, ValidationError
from repos.kinds import SUPPORT_MESSAGES, SUPPORT_TICKETS, EntityKind
from repos.storage import Storage


def _not_found(kind: EntityKind) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{kind.name} not found",
    )


def _store_error_to_http(e: ValidationError | DuplicateKeyError) -> HTTPException:
    if isinstance(e, DuplicateKeyError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"message": e.message, "errors": e.errors},
    )


async def list_entities(
    storage: Storage,
    *,
    kind: EntityKind,
    filters: dict[str, Any] | None = None,
) -> list[Any]:
    """
    List entities of a kind.

    Args:
        storage: Active storage
        kind: Entity kind
        filters: Equality filters on the kind's filter fields

    Returns:
        Matching entities in insertion order
    """
    return await storage.repository(kind).list(**(filters or {}))


async def get_entity(storage: Storage, *, kind: EntityKind, entity_id: int) -> Any:
    """
    Get an entity by ID.

    Raises:
        HTTPException: 404 if the entity does not exist
    """
    entity = await storage.repository(kind).get_by_id(entity_id)
    if entity is None:
        raise _not_found(kind)
    return entity


async def create_entity(storage: Storage, *, kind: EntityKind, payload: BaseModel) -> Any:
    """
    Create an entity from a validated insertable payload.

    Raises:
        HTTPException: 400 on invalid data, 409 on a unique-field collision
    """
    try:
        return await storage.repository(kind).create(payload)
    except (ValidationError, DuplicateKeyError) as e:
        raise _store_error_to_http(e)


async def update_entity(
    storage: Storage,
    *,
    kind: EntityKind,
    entity_id: int,
    payload: BaseModel,
) -> Any:
    """
    Update an existing entity.

    Only fields present in the payload are applied.

    Raises:
        HTTPException: 404 if not found, 400 on invalid data, 409 on collision
    """
    try:
        entity = await storage.repository(kind).update(entity_id, payload)
    except (ValidationError, DuplicateKeyError) as e:
        raise _store_error_to_http(e)
    if entity is None:
        raise _not_found(kind)
    return entity


async def delete_entity(storage: Storage, *, kind: EntityKind, entity_id: int) -> None:
    """
    Delete an entity. Dependents are left in place.

    Raises:
        HTTPException: 404 if not found
    """
    deleted = await storage.repository(kind).delete(entity_id)
    if not deleted:
        raise _not_found(kind)


async def list_ticket_messages(storage: Storage, *, ticket_id: int) -> list[Any]:
    """List the messages of a support ticket, oldest first."""
    return await storage.support_messages.list(ticket_id=ticket_id)


async def post_ticket_message(
    storage: Storage,
    *,
    ticket_id: int,
    payload: BaseModel,
) -> Any:
    """
    Append a message to an existing support ticket.

    Raises:
        HTTPException: 404 if the ticket does not exist, 400 on invalid data
    """
    ticket = await storage.support_tickets.get_by_id(ticket_id)
    if ticket is None:
        raise _not_found(SUPPORT_TICKETS)

    data = {**payload.model_dump(exclude_unset=True), "ticket_id": ticket_id}
    try:
        return await storage.repository(SUPPORT_MESSAGES).create(data)
    except ValidationError as e:
        raise _store_error_to_http(e)


async def get_company_settings(storage: Storage) -> Any:
    """Return company settings, creating the defaults on first read."""
    return await storage.company_settings.get()


async def update_company_settings(storage: Storage, *, payload: BaseModel) -> Any:
    """
    Merge a partial update into company settings.

    Raises:
        HTTPException: 400 on invalid data
    """
    try:
        return await storage.company_settings.update(payload)
    except ValidationError as e:
        raise _store_error_to_http(e)
