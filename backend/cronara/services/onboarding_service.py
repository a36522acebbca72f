"""Onboarding service - reconciles a principal's user, role and business rows."""

from typing import Optional
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from cronara.config import get_settings
from cronara.database import utcnow
from cronara.errors import StoreError, ValidationError, store_operation
from cronara.models.business import Business
from cronara.models.user import Client, Owner, User, UserRole
from cronara.schemas.onboarding import OnboardingRequest

settings = get_settings()
logger = structlog.get_logger(__name__)

MISSING_PRINCIPAL = "Falta el identificador del usuario"
MISSING_CONTACT = "Nombre, correo y teléfono son obligatorios"
MISSING_ROLE = "Selecciona un rol válido"


def validate_onboarding(data: OnboardingRequest) -> None:
    """Reject incomplete submissions before anything touches the store."""
    if not data.auth_user_id:
        raise ValidationError(MISSING_PRINCIPAL)
    if not data.full_name or not data.email or not data.phone:
        raise ValidationError(MISSING_CONTACT)
    if data.role not in (UserRole.OWNER, UserRole.CLIENT):
        raise ValidationError(MISSING_ROLE)


class OnboardingService:
    """
    Brings the store in line with an onboarding submission.

    Every insert is preceded by an existence check, so re-submitting the
    same form updates rows instead of duplicating them. Unique indexes on
    user.user_id, client.user_id and business.owner_id turn a lost race
    between two concurrent first submissions into a StoreError.

    All steps share one transaction: a failing step rolls back the rows
    written by the earlier ones.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def reconcile(self, data: OnboardingRequest) -> None:
        """Run the whole reconciliation. Returns nothing on success."""
        validate_onboarding(data)
        log = logger.bind(principal_id=data.auth_user_id, role=data.role.value)

        try:
            user_id = await self._upsert_user(data)

            if data.role == UserRole.OWNER:
                await self._ensure_owner(user_id)
                if data.business_name:
                    await self._upsert_business(user_id, data)
            else:
                await self._ensure_client(user_id)

            with store_operation("No pudimos guardar el usuario"):
                await self.db.commit()
        except StoreError:
            await self.db.rollback()
            raise

        log.info("onboarding_reconciled", user_record_id=user_id)

    async def mark_metadata_synced(self, principal_id: str) -> None:
        """Record that the identity provider holds the onboarding metadata."""
        try:
            with store_operation("No pudimos actualizar el usuario", principal_id=principal_id):
                await self.db.execute(
                    update(User)
                    .where(User.user_id == principal_id)
                    .values(metadata_synced_at=utcnow())
                )
                await self.db.commit()
        except StoreError:
            await self.db.rollback()
            raise

    # Steps

    async def _upsert_user(self, data: OnboardingRequest) -> int:
        """Update the principal's user row, or create it. Returns its id."""
        with store_operation("No pudimos consultar el usuario"):
            result = await self.db.execute(
                select(User.id).where(User.user_id == data.auth_user_id)
            )
            user_id: Optional[int] = result.scalar_one_or_none()

        fields = {
            "name": data.full_name,
            "email": data.email,
            "phone": data.phone,
            "role": data.role.value,
            "metadata_synced_at": None,
        }

        if user_id is not None:
            with store_operation("No pudimos actualizar el usuario"):
                await self.db.execute(
                    update(User)
                    .where(User.user_id == data.auth_user_id)
                    .values(**fields)
                )
            return user_id

        user = User(user_id=data.auth_user_id, **fields)
        with store_operation("No pudimos guardar el usuario"):
            self.db.add(user)
            await self.db.flush()
        if user.id is None:
            raise StoreError("No pudimos guardar el usuario")
        return user.id

    async def _ensure_owner(self, user_id: int) -> None:
        with store_operation("No pudimos consultar al dueño"):
            result = await self.db.execute(select(Owner.id).where(Owner.id == user_id))
            exists = result.scalar_one_or_none() is not None

        if not exists:
            with store_operation("No pudimos registrar al dueño"):
                self.db.add(Owner(id=user_id))
                await self.db.flush()

    async def _upsert_business(self, owner_id: int, data: OnboardingRequest) -> None:
        with store_operation("No pudimos consultar el negocio"):
            result = await self.db.execute(
                select(Business.id).where(Business.owner_id == owner_id)
            )
            business_id: Optional[int] = result.scalar_one_or_none()

        fields = {
            "owner_id": owner_id,
            "name": data.business_name,
            "description": data.business_description,
            "logo_url": settings.DEFAULT_LOGO_URL,
        }

        if business_id is not None:
            with store_operation("No pudimos actualizar el negocio"):
                await self.db.execute(
                    update(Business).where(Business.id == business_id).values(**fields)
                )
        else:
            with store_operation("No pudimos registrar el negocio"):
                self.db.add(Business(**fields))
                await self.db.flush()

    async def _ensure_client(self, user_id: int) -> None:
        with store_operation("No pudimos consultar al cliente"):
            result = await self.db.execute(select(Client.id).where(Client.user_id == user_id))
            exists = result.scalar_one_or_none() is not None

        if not exists:
            with store_operation("No pudimos registrar el cliente"):
                self.db.add(Client(user_id=user_id))
                await self.db.flush()
