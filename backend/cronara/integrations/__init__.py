"""External service integrations."""

from cronara.integrations.identity_client import IdentityClient

__all__ = [
    "IdentityClient",
]
