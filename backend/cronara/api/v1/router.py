"""Main router for the API."""

from fastapi import APIRouter

from cronara.api.v1 import onboarding, profile, business, staff

api_router = APIRouter()

# =============================================================================
# Account setup
# =============================================================================
api_router.include_router(
    onboarding.router,
    prefix="/onboarding",
    tags=["Onboarding"]
)

api_router.include_router(
    profile.router,
    prefix="/profile",
    tags=["Profile"]
)

# =============================================================================
# Owner Dashboard
# =============================================================================
api_router.include_router(
    business.router,
    prefix="/business",
    tags=["Business Settings"]
)

api_router.include_router(
    staff.router,
    prefix="/staff",
    tags=["Staff"]
)
