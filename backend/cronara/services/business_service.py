"""Business settings service - one business per owner."""

from typing import Optional
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cronara.errors import NotFoundError, StoreError, ValidationError, store_operation
from cronara.models.business import Business
from cronara.models.user import User
from cronara.schemas.business import BusinessSettings, BusinessSettingsUpdate
from cronara.services.onboarding_service import MISSING_PRINCIPAL

USER_LOOKUP_FAILED = "No pudimos obtener la información del usuario."
BUSINESS_LOOKUP_FAILED = "No pudimos obtener los datos del negocio."
MISSING_BUSINESS_NAME = "El nombre del negocio es obligatorio"


async def resolve_user_id(db: AsyncSession, principal_id: Optional[str]) -> Optional[int]:
    """Internal user id for a principal, or None when no row exists."""
    if not principal_id:
        raise ValidationError(MISSING_PRINCIPAL)

    with store_operation(USER_LOOKUP_FAILED, principal_id=principal_id):
        result = await db.execute(select(User.id).where(User.user_id == principal_id))
        return result.scalar_one_or_none()


class BusinessSettingsService:
    """
    Service for the settings page.

    `business_id` is the id found by `get` or created by `upsert`. Keeping
    the same instance (or passing the id back in) makes later upserts
    update that row instead of inserting another.
    """

    def __init__(self, db: AsyncSession, business_id: Optional[int] = None):
        self.db = db
        self.business_id = business_id

    async def get_owner_id(self, principal_id: Optional[str]) -> int:
        """User id of the principal. The user row must exist."""
        user_id = await resolve_user_id(self.db, principal_id)
        if user_id is None:
            raise NotFoundError(USER_LOOKUP_FAILED)
        return user_id

    async def get(self, principal_id: Optional[str]) -> BusinessSettings:
        """Business owned by the principal, or empty defaults if none yet."""
        return await self.get_for_owner(await self.get_owner_id(principal_id))

    async def get_for_owner(self, owner_id: int) -> BusinessSettings:
        with store_operation(BUSINESS_LOOKUP_FAILED, owner_id=owner_id):
            result = await self.db.execute(
                select(Business).where(Business.owner_id == owner_id)
            )
            business = result.scalars().first()

        if not business:
            return BusinessSettings()

        self.business_id = business.id
        return BusinessSettings(
            id=business.id,
            name=business.name or "",
            description=business.description or "",
            logo_url=business.logo_url or "",
        )

    async def upsert(self, owner_id: int, data: BusinessSettingsUpdate) -> int:
        """Update the known business or insert a new one. Returns the business id."""
        if not data.business_name:
            raise ValidationError(MISSING_BUSINESS_NAME)

        fields = {
            "owner_id": owner_id,
            "name": data.business_name,
            "description": data.description,
            "logo_url": data.logo_url,
        }

        if self.business_id is not None:
            with store_operation("No pudimos actualizar el negocio", business_id=self.business_id):
                result = await self.db.execute(
                    update(Business)
                    .where(Business.id == self.business_id, Business.owner_id == owner_id)
                    .values(**fields)
                )
                if result.rowcount == 0:
                    await self.db.rollback()
                    raise NotFoundError(BUSINESS_LOOKUP_FAILED)
                await self.db.commit()
            return self.business_id

        business = Business(**fields)
        try:
            with store_operation("No pudimos registrar el negocio", owner_id=owner_id):
                self.db.add(business)
                await self.db.commit()
        except StoreError:
            await self.db.rollback()
            raise

        self.business_id = business.id
        return business.id
