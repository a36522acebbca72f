"""API dependencies for dependency injection and principal verification."""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
import structlog

from cronara.config import get_settings
from cronara.errors import AuthError
from cronara.integrations.identity_client import IdentityClient

settings = get_settings()
logger = structlog.get_logger(__name__)
optional_bearer = HTTPBearer(auto_error=False)


# =============================================================================
# Identity Provider
# =============================================================================

def get_identity_client() -> IdentityClient:
    """Identity provider client for the current request."""
    return IdentityClient()


# =============================================================================
# Access Token Utilities
# =============================================================================

def decode_token(token: str, secret: Optional[str] = None) -> dict:
    """Decode and validate an access token issued by the identity provider."""
    try:
        return jwt.decode(
            token,
            secret or settings.SUPABASE_JWT_SECRET,
            algorithms=["HS256"],
            audience=settings.SUPABASE_JWT_AUDIENCE,
        )
    except JWTError:
        raise AuthError("No pudimos validar tu sesión")


def ensure_principal(
    principal_id: Optional[str],
    credentials: Optional[HTTPAuthorizationCredentials],
) -> None:
    """
    Require the bearer token to belong to `principal_id`.
    Skipped when no JWT secret is configured (development).

    Also binds `principal_id` to the logging context of this request.
    """
    structlog.contextvars.clear_contextvars()
    if principal_id:
        structlog.contextvars.bind_contextvars(principal_id=principal_id)

    if not settings.SUPABASE_JWT_SECRET or not principal_id:
        return

    if credentials is None:
        raise AuthError("Inicia sesión para continuar")

    payload = decode_token(credentials.credentials)
    if payload.get("sub") != principal_id:
        logger.warning("principal_mismatch", principal_id=principal_id, token_sub=payload.get("sub"))
        raise AuthError("La sesión no corresponde al usuario")

