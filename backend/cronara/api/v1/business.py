"""Business settings endpoints."""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from cronara.database import get_db
from cronara.api.deps import ensure_principal, optional_bearer
from cronara.schemas.business import (
    BusinessSaved,
    BusinessSettingsEnvelope,
    BusinessSettingsUpdate,
)
from cronara.services.business_service import BusinessSettingsService

router = APIRouter()


@router.get("", response_model=BusinessSettingsEnvelope)
async def get_business_settings(
    auth_user_id: Optional[str] = Query(None, alias="authUserId"),
    db: AsyncSession = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_bearer),
):
    """
    Get the business owned by the principal.
    `business.id` is null until the first save; send it back on PUT.
    """
    ensure_principal(auth_user_id, credentials)
    service = BusinessSettingsService(db)

    owner_id = await service.get_owner_id(auth_user_id)
    business = await service.get_for_owner(owner_id)

    return BusinessSettingsEnvelope(owner_id=owner_id, business=business)


@router.put("", response_model=BusinessSaved)
async def save_business_settings(
    data: BusinessSettingsUpdate,
    db: AsyncSession = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_bearer),
):
    """Create the business on first save, update it by id afterwards."""
    ensure_principal(data.auth_user_id, credentials)
    service = BusinessSettingsService(db, business_id=data.business_id)

    owner_id = await service.get_owner_id(data.auth_user_id)
    business_id = await service.upsert(owner_id, data)

    return BusinessSaved(business_id=business_id)
