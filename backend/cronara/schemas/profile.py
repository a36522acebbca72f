"""Profile schemas."""

from typing import Optional
from pydantic import Field, field_validator

from cronara.schemas.common import CamelModel, clean_text, normalize_phone


class ProfileUpdate(CamelModel):
    """Editable profile fields."""

    auth_user_id: Optional[str] = Field(None, max_length=255)
    full_name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=30)

    @field_validator("auth_user_id", "full_name", "email")
    @classmethod
    def strip_blank(cls, v: Optional[str]) -> Optional[str]:
        return clean_text(v)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return normalize_phone(v)


class ProfileResponse(CamelModel):
    """Profile as shown on the profile page."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class ProfileEnvelope(CamelModel):
    profile: ProfileResponse
