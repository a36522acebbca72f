"""Profile endpoints."""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from cronara.database import get_db
from cronara.api.deps import ensure_principal, optional_bearer
from cronara.schemas.onboarding import SuccessResponse
from cronara.schemas.profile import ProfileEnvelope, ProfileUpdate
from cronara.services.profile_service import ProfileService

router = APIRouter()


@router.get("", response_model=ProfileEnvelope)
async def get_profile(
    auth_user_id: Optional[str] = Query(None, alias="authUserId"),
    db: AsyncSession = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_bearer),
):
    """Get name, email and phone of the principal."""
    ensure_principal(auth_user_id, credentials)
    profile = await ProfileService(db).get(auth_user_id)
    return ProfileEnvelope(profile=profile)


@router.put("", response_model=SuccessResponse)
async def update_profile(
    data: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_bearer),
):
    """Update name, email and phone. The profile must already exist."""
    ensure_principal(data.auth_user_id, credentials)
    await ProfileService(db).update(data)
    return SuccessResponse()
