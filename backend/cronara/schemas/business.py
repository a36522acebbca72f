"""Business settings schemas."""

from typing import Optional
from pydantic import Field, field_validator

from cronara.schemas.common import CamelModel, clean_text


class BusinessSettingsUpdate(CamelModel):
    """Settings form submission."""

    auth_user_id: Optional[str] = Field(None, max_length=255)
    business_id: Optional[int] = None  # Returned by a previous GET or PUT
    business_name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    logo_url: Optional[str] = Field(None, max_length=500)

    @field_validator("auth_user_id", "business_name", "description", "logo_url")
    @classmethod
    def strip_blank(cls, v: Optional[str]) -> Optional[str]:
        return clean_text(v)


class BusinessSettings(CamelModel):
    """Business fields shown on the settings page. Empty when none exists yet."""

    id: Optional[int] = None
    name: str = ""
    description: str = ""
    logo_url: str = ""


class BusinessSettingsEnvelope(CamelModel):
    owner_id: int
    business: BusinessSettings


class BusinessSaved(CamelModel):
    success: bool = True
    business_id: int
