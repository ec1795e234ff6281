"""Generic CRUD endpoints, one router per entity kind."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from pydantic.alias_generators import to_camel

from api.deps import get_storage
from repos.kinds import CRUD_KINDS, EntityKind
from repos.storage import Storage
from services.entities_service import (
    create_entity,
    delete_entity,
    get_entity,
    list_entities,
    update_entity,
)

logger = logging.getLogger(__name__)


def parse_filters(kind: EntityKind, request: Request) -> dict:
    """
    Read equality filters from the query string.

    Each filter field is accepted in camelCase (clientId) or snake_case
    (client_id). Unknown query parameters are ignored.

    Raises:
        HTTPException: 400 if an id filter is not an integer
    """
    filters = {}
    for field in kind.filter_fields:
        raw = request.query_params.get(to_camel(field), request.query_params.get(field))
        if raw is None or raw == "":
            continue
        if kind.is_integer_field(field):
            try:
                filters[field] = int(raw)
            except ValueError:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Invalid {to_camel(field)} (must be an integer)",
                )
        else:
            filters[field] = raw
    return filters


def build_entity_router(kind: EntityKind) -> APIRouter:
    """
    Build the CRUD router for one entity kind.

    Request bodies and responses are typed with the kind's own schemas so
    FastAPI validates payloads and strips fields absent from the response
    schema (e.g. a user's password).
    """
    CreateSchema = kind.create_schema
    UpdateSchema = kind.update_schema
    ResponseSchema = kind.response_schema
    label = kind.name

    router = APIRouter(prefix=f"/entities/{kind.slug}")

    @router.get("", response_model=List[ResponseSchema], name=f"list_{kind.attr}")
    async def list_endpoint(
        request: Request,
        storage: Storage = Depends(get_storage),
    ):
        """List records, optionally filtered by equality on foreign keys."""
        filters = parse_filters(kind, request)
        try:
            return await list_entities(storage, kind=kind, filters=filters)
        except HTTPException:
            raise
        except Exception:
            logger.error("Error listing %s records", label, exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to fetch {label} records",
            )

    @router.get("/{entity_id}", response_model=ResponseSchema, name=f"get_{kind.attr}")
    async def get_endpoint(
        entity_id: int,
        storage: Storage = Depends(get_storage),
    ):
        """
        Get a record by ID.

        Raises:
            404 if the record does not exist.
        """
        try:
            return await get_entity(storage, kind=kind, entity_id=entity_id)
        except HTTPException:
            raise
        except Exception:
            logger.error("Error fetching %s %s", label, entity_id, exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to fetch {label}",
            )

    @router.post(
        "",
        response_model=ResponseSchema,
        status_code=status.HTTP_201_CREATED,
        name=f"create_{kind.attr}",
    )
    async def create_endpoint(
        payload: CreateSchema,
        storage: Storage = Depends(get_storage),
    ):
        """Create a record. id and createdAt are assigned server-side."""
        try:
            return await create_entity(storage, kind=kind, payload=payload)
        except HTTPException:
            raise
        except Exception:
            logger.error("Error creating %s", label, exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to create {label}",
            )

    @router.patch("/{entity_id}", response_model=ResponseSchema, name=f"update_{kind.attr}")
    async def update_endpoint(
        entity_id: int,
        payload: UpdateSchema,
        storage: Storage = Depends(get_storage),
    ):
        """
        Update a record.

        Only provided fields will be updated.
        """
        try:
            return await update_entity(
                storage,
                kind=kind,
                entity_id=entity_id,
                payload=payload,
            )
        except HTTPException:
            raise
        except Exception:
            logger.error("Error updating %s %s", label, entity_id, exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to update {label}",
            )

    @router.delete(
        "/{entity_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        name=f"delete_{kind.attr}",
    )
    async def delete_endpoint(
        entity_id: int,
        storage: Storage = Depends(get_storage),
    ):
        """Delete a record. Records referring to it are left untouched."""
        try:
            await delete_entity(storage, kind=kind, entity_id=entity_id)
        except HTTPException:
            raise
        except Exception:
            logger.error("Error deleting %s %s", label, entity_id, exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to delete {label}",
            )
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


routers = [build_entity_router(kind) for kind in CRUD_KINDS]
