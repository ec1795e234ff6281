"""Company settings endpoints (singleton)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.deps import get_storage
from models.company_settings import CompanySettingsResponse, CompanySettingsUpdate
from repos.storage import Storage
from services.entities_service import get_company_settings, update_company_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/company-settings", response_model=CompanySettingsResponse)
async def get_company_settings_endpoint(storage: Storage = Depends(get_storage)):
    """Get company settings; defaults are created on first read."""
    try:
        return await get_company_settings(storage)
    except HTTPException:
        raise
    except Exception:
        logger.error("Error fetching company settings", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch company settings",
        )


@router.patch("/company-settings", response_model=CompanySettingsResponse)
async def update_company_settings_endpoint(
    payload: CompanySettingsUpdate,
    storage: Storage = Depends(get_storage),
):
    """Update company settings. Only provided fields will be updated."""
    try:
        return await update_company_settings(storage, payload=payload)
    except HTTPException:
        raise
    except Exception:
        logger.error("Error updating company settings", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update company settings",
        )
