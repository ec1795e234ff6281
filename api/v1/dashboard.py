"""Dashboard endpoint."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.deps import get_storage
from models.dashboard import DashboardSnapshot
from repos.storage import Storage
from services.dashboard_service import build_dashboard

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/dashboard", response_model=DashboardSnapshot)
async def get_dashboard_endpoint(storage: Storage = Depends(get_storage)):
    """
    Summary counts, task status histogram, six-month revenue and recent activity.
    """
    try:
        return await build_dashboard(storage)
    except Exception:
        logger.error("Error building dashboard", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to build dashboard",
        )
