"""Profile service - reads and edits a principal's profile row."""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cronara.errors import NotFoundError, ValidationError, store_operation
from cronara.models.user import User
from cronara.schemas.profile import ProfileResponse, ProfileUpdate
from cronara.services.onboarding_service import MISSING_CONTACT, MISSING_PRINCIPAL


class ProfileService:
    """Service for profile operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, principal_id: str) -> ProfileResponse:
        """Get name, email and phone for a principal."""
        if not principal_id:
            raise ValidationError(MISSING_PRINCIPAL)

        with store_operation("No pudimos obtener el perfil", principal_id=principal_id):
            result = await self.db.execute(
                select(User).where(User.user_id == principal_id)
            )
            user = result.scalar_one_or_none()

        if not user:
            raise NotFoundError("No pudimos obtener el perfil")

        return ProfileResponse.model_validate(user)

    async def update(self, data: ProfileUpdate) -> None:
        """
        Update the profile row located by principal id.
        Never creates a row: an unknown principal is a NotFoundError.
        """
        if not data.auth_user_id:
            raise ValidationError(MISSING_PRINCIPAL)
        if not data.full_name or not data.email or not data.phone:
            raise ValidationError(MISSING_CONTACT)

        with store_operation("No pudimos actualizar tu perfil", principal_id=data.auth_user_id):
            result = await self.db.execute(
                update(User)
                .where(User.user_id == data.auth_user_id)
                .values(name=data.full_name, email=data.email, phone=data.phone)
            )
            if result.rowcount == 0:
                await self.db.rollback()
                raise NotFoundError("No pudimos actualizar tu perfil")
            await self.db.commit()
