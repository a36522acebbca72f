"""Onboarding request schema."""

from typing import Optional
from pydantic import Field, field_validator

from cronara.models.user import UserRole
from cronara.schemas.common import CamelModel, clean_text, normalize_phone


class OnboardingRequest(CamelModel):
    """
    Onboarding form submission.

    Required fields are checked by OnboardingService so a missing one is
    reported with the product's own message instead of a schema error.
    """

    auth_user_id: Optional[str] = Field(None, max_length=255)
    role: Optional[UserRole] = None
    full_name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=30)
    business_name: Optional[str] = Field(None, max_length=255)
    business_description: Optional[str] = None

    @field_validator(
        "auth_user_id", "full_name", "email", "business_name", "business_description"
    )
    @classmethod
    def strip_blank(cls, v: Optional[str]) -> Optional[str]:
        return clean_text(v)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return normalize_phone(v)


class SuccessResponse(CamelModel):
    """Plain acknowledgement."""

    success: bool = True
