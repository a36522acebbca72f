"""Tests for the staff roster."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from cronara.schemas.onboarding import OnboardingRequest
from cronara.schemas.staff import StaffCreate
from cronara.services.onboarding_service import OnboardingService
from cronara.services.staff_service import StaffService


def staff_form(name: str, role: str = "Recepcionista") -> StaffCreate:
    return StaffCreate(fullName=name, email="equipo@clinica.mx", role=role, phone="55 1234 5678")


@pytest_asyncio.fixture
async def business_id(db: AsyncSession) -> int:
    await OnboardingService(db).reconcile(
        OnboardingRequest(
            authUserId="owner-1",
            role="owner",
            fullName="Laura",
            email="laura@clinica.mx",
            phone="555",
            businessName="Clínica Norte",
        )
    )
    return await StaffService(db).get_business_id("owner-1")


@pytest.mark.asyncio
async def test_list_is_ordered_by_creation(db: AsyncSession, business_id: int) -> None:
    service = StaffService(db)
    await service.add(business_id, staff_form("Laura Martínez"))
    await service.add(business_id, staff_form("Pedro Ruiz", role="Médico"))

    members = await service.list(business_id)

    assert [m.name for m in members] == ["Laura Martínez", "Pedro Ruiz"]
    assert members[1].cargo == "Médico"
    assert members[0].phone == "+525512345678"


@pytest.mark.asyncio
async def test_business_id_is_none_without_business(db: AsyncSession) -> None:
    await OnboardingService(db).reconcile(
        OnboardingRequest(
            authUserId="u1", role="client", fullName="Ana", email="ana@x.com", phone="555"
        )
    )

    assert await StaffService(db).get_business_id("u1") is None
    assert await StaffService(db).get_business_id("unknown") is None


@pytest.mark.asyncio
async def test_list_of_other_business_is_empty(db: AsyncSession, business_id: int) -> None:
    await StaffService(db).add(business_id, staff_form("Laura Martínez"))

    assert await StaffService(db).list(business_id + 1) == []


def test_staff_phone_needs_eight_digits() -> None:
    with pytest.raises(ValueError):
        StaffCreate(fullName="Pedro", email="pedro@clinica.mx", role="Médico", phone="555 12")
