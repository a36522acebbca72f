"""Staff roster schemas."""

from typing import List, Optional
from pydantic import EmailStr, Field, field_validator

from cronara.config import get_settings
from cronara.schemas.common import CamelModel, clean_text, count_digits, normalize_phone

settings = get_settings()


class StaffCreate(CamelModel):
    """Add-staff form submission."""

    auth_user_id: Optional[str] = Field(None, max_length=255)
    full_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    role: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., max_length=30)

    @field_validator("auth_user_id")
    @classmethod
    def strip_blank(cls, v: Optional[str]) -> Optional[str]:
        return clean_text(v)

    @field_validator("full_name", "role")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Este campo es obligatorio")
        return v

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        if count_digits(v) < settings.STAFF_PHONE_MIN_DIGITS:
            raise ValueError(
                f"Debe tener al menos {settings.STAFF_PHONE_MIN_DIGITS} dígitos"
            )
        return normalize_phone(v)


class StaffResponse(CamelModel):
    """Roster entry."""

    id: int
    name: str
    cargo: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class StaffListResponse(CamelModel):
    staff: List[StaffResponse] = []


class StaffCreatedResponse(CamelModel):
    staff: StaffResponse
