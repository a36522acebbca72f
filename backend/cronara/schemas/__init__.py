"""Pydantic schemas for API request/response validation."""

from cronara.schemas.onboarding import OnboardingRequest, SuccessResponse
from cronara.schemas.profile import ProfileUpdate, ProfileResponse, ProfileEnvelope
from cronara.schemas.business import (
    BusinessSettingsUpdate,
    BusinessSettings,
    BusinessSettingsEnvelope,
    BusinessSaved,
)
from cronara.schemas.staff import (
    StaffCreate,
    StaffResponse,
    StaffListResponse,
    StaffCreatedResponse,
)

__all__ = [
    # Onboarding
    "OnboardingRequest",
    "SuccessResponse",
    # Profile
    "ProfileUpdate",
    "ProfileResponse",
    "ProfileEnvelope",
    # Business
    "BusinessSettingsUpdate",
    "BusinessSettings",
    "BusinessSettingsEnvelope",
    "BusinessSaved",
    # Staff
    "StaffCreate",
    "StaffResponse",
    "StaffListResponse",
    "StaffCreatedResponse",
]
