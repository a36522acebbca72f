"""SQLAlchemy models."""

from cronara.models.user import User, UserRole, Owner, Client
from cronara.models.business import Business
from cronara.models.staff import Staff

__all__ = [
    "User",
    "UserRole",
    "Owner",
    "Client",
    "Business",
    "Staff",
]
