"""Onboarding endpoint."""

from typing import Optional
from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from cronara.database import get_db
from cronara.api.deps import ensure_principal, get_identity_client, optional_bearer
from cronara.errors import ServiceError, UnexpectedError
from cronara.integrations.identity_client import IdentityClient
from cronara.models.user import UserRole
from cronara.schemas.onboarding import OnboardingRequest, SuccessResponse
from cronara.services.onboarding_service import OnboardingService

router = APIRouter()
logger = structlog.get_logger(__name__)


async def sync_onboarding_metadata(
    service: OnboardingService,
    identity: IdentityClient,
    principal_id: str,
    role: UserRole,
) -> bool:
    """
    Mirror the onboarding to the principal's metadata.
    Never raises: the store writes are already committed, and a pending
    user is picked up again by the metadata sync worker.
    """
    try:
        if not await identity.mark_onboarding_completed(principal_id, role):
            logger.warning("onboarding_metadata_pending")
            return False
        await service.mark_metadata_synced(principal_id)
    except Exception:
        logger.exception("onboarding_metadata_pending")
        return False
    return True


@router.post("", response_model=SuccessResponse)
async def submit_onboarding(
    data: OnboardingRequest,
    db: AsyncSession = Depends(get_db),
    identity: IdentityClient = Depends(get_identity_client),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_bearer),
):
    """
    Reconcile the principal's user, role and business rows, then record
    `onboarding_completed` and the role on the principal's metadata.

    The metadata write is not atomic with the store writes. When it fails
    the user row keeps `metadata_synced_at` empty and the metadata sync
    worker retries it later.
    """
    ensure_principal(data.auth_user_id, credentials)
    service = OnboardingService(db)

    try:
        await service.reconcile(data)
    except ServiceError:
        raise
    except Exception as exc:
        logger.exception("onboarding_failed")
        raise UnexpectedError("No pudimos procesar el onboarding") from exc

    await sync_onboarding_metadata(service, identity, data.auth_user_id, data.role)
    return SuccessResponse()
