"""Staff roster endpoints."""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from cronara.database import get_db
from cronara.api.deps import ensure_principal, optional_bearer
from cronara.errors import NotFoundError
from cronara.schemas.staff import (
    StaffCreate,
    StaffCreatedResponse,
    StaffListResponse,
    StaffResponse,
)
from cronara.services.staff_service import StaffService

router = APIRouter()


@router.get("", response_model=StaffListResponse)
async def list_staff(
    auth_user_id: Optional[str] = Query(None, alias="authUserId"),
    db: AsyncSession = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_bearer),
):
    """List the staff of the principal's business. Empty without a business."""
    ensure_principal(auth_user_id, credentials)
    service = StaffService(db)

    business_id = await service.get_business_id(auth_user_id)
    if business_id is None:
        return StaffListResponse(staff=[])

    members = await service.list(business_id)
    return StaffListResponse(staff=[StaffResponse.model_validate(m) for m in members])


@router.post("", response_model=StaffCreatedResponse, status_code=status.HTTP_201_CREATED)
async def add_staff(
    data: StaffCreate,
    db: AsyncSession = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_bearer),
):
    """Add a person to the principal's business."""
    ensure_principal(data.auth_user_id, credentials)
    service = StaffService(db)

    business_id = await service.get_business_id(data.auth_user_id)
    if business_id is None:
        raise NotFoundError("Primero registra tu negocio")

    member = await service.add(business_id, data)
    return StaffCreatedResponse(staff=StaffResponse.model_validate(member))
