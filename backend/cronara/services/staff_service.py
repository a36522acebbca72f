"""Staff service - the roster of a business."""

from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cronara.errors import StoreError, store_operation
from cronara.models.business import Business
from cronara.models.staff import Staff
from cronara.schemas.staff import StaffCreate
from cronara.services.business_service import resolve_user_id


class StaffService:
    """Service for staff operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_business_id(self, principal_id: Optional[str]) -> Optional[int]:
        """Business owned by the principal, or None when there is none."""
        user_id = await resolve_user_id(self.db, principal_id)
        if user_id is None:
            return None

        with store_operation("No pudimos consultar el negocio", owner_id=user_id):
            result = await self.db.execute(
                select(Business.id).where(Business.owner_id == user_id)
            )
            return result.scalars().first()

    async def list(self, business_id: int) -> List[Staff]:
        """Staff of a business, oldest first."""
        with store_operation("No pudimos obtener el equipo", business_id=business_id):
            result = await self.db.execute(
                select(Staff)
                .where(Staff.business_id == business_id)
                .order_by(Staff.created_at.asc(), Staff.id.asc())
            )
            return list(result.scalars().all())

    async def add(self, business_id: int, data: StaffCreate) -> Staff:
        """Add a person to the roster."""
        member = Staff(
            business_id=business_id,
            name=data.full_name,
            email=str(data.email),
            cargo=data.role,
            phone=data.phone,
        )
        try:
            with store_operation("No pudimos agregar al empleado", business_id=business_id):
                self.db.add(member)
                await self.db.commit()
        except StoreError:
            await self.db.rollback()
            raise
        return member
