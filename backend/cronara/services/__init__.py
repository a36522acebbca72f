"""Business logic services."""

from cronara.services.onboarding_service import OnboardingService
from cronara.services.profile_service import ProfileService
from cronara.services.business_service import BusinessSettingsService
from cronara.services.staff_service import StaffService

__all__ = [
    "OnboardingService",
    "ProfileService",
    "BusinessSettingsService",
    "StaffService",
]
