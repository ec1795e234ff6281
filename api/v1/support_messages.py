"""Support ticket message endpoints (append-only)."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from api.deps import get_storage
from models.support_ticket import SupportMessageCreate, SupportMessageResponse
from repos.storage import Storage
from services.entities_service import list_ticket_messages, post_ticket_message

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/entities/support-tickets/{ticket_id}/messages",
    response_model=List[SupportMessageResponse],
)
async def list_messages_endpoint(
    ticket_id: int,
    storage: Storage = Depends(get_storage),
):
    """List messages of a ticket, oldest first."""
    try:
        return await list_ticket_messages(storage, ticket_id=ticket_id)
    except HTTPException:
        raise
    except Exception:
        logger.error("Error listing messages of ticket %s", ticket_id, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch support messages",
        )


@router.post(
    "/entities/support-tickets/{ticket_id}/messages",
    response_model=SupportMessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def post_message_endpoint(
    ticket_id: int,
    payload: SupportMessageCreate,
    storage: Storage = Depends(get_storage),
):
    """
    Append a message to a ticket.

    Raises:
        404 if the ticket does not exist.
    """
    try:
        return await post_ticket_message(storage, ticket_id=ticket_id, payload=payload)
    except HTTPException:
        raise
    except Exception:
        logger.error("Error posting message to ticket %s", ticket_id, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create support message",
        )
