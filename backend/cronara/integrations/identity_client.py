"""Identity provider admin API (hosted auth) for principal metadata."""

from typing import Optional
import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from cronara.config import get_settings
from cronara.models.user import UserRole

settings = get_settings()
logger = structlog.get_logger(__name__)


class IdentityClient:
    """Client for the identity provider's admin endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        service_key: Optional[str] = None,
        max_attempts: Optional[int] = None,
        backoff_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url if base_url is not None else settings.SUPABASE_URL).rstrip("/")
        self.service_key = service_key if service_key is not None else settings.SUPABASE_SERVICE_ROLE_KEY
        self.max_attempts = max_attempts or settings.IDENTITY_MAX_ATTEMPTS
        self.backoff_seconds = (
            backoff_seconds if backoff_seconds is not None
            else settings.IDENTITY_RETRY_BACKOFF_SECONDS
        )
        self.transport = transport

    @property
    def dev_mode(self) -> bool:
        return not (self.base_url and self.service_key)

    async def _request(
        self,
        method: str,
        endpoint: str,
        data: Optional[dict] = None,
    ) -> dict:
        """Make an authenticated admin request, retrying transport and HTTP errors."""
        if self.dev_mode:
            return {"dev_mode": True}

        async with httpx.AsyncClient(transport=self.transport) as client:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(multiplier=self.backoff_seconds, max=10),
                retry=retry_if_exception_type(httpx.HTTPError),
                reraise=True,
            ):
                with attempt:
                    if attempt.retry_state.attempt_number > 1:
                        logger.info(
                            "identity_request_retry",
                            endpoint=endpoint,
                            attempt=attempt.retry_state.attempt_number,
                        )
                    response = await client.request(
                        method=method,
                        url=f"{self.base_url}/auth/v1{endpoint}",
                        headers={
                            "apikey": self.service_key,
                            "Authorization": f"Bearer {self.service_key}",
                            "Content-Type": "application/json",
                        },
                        json=data,
                        timeout=settings.IDENTITY_TIMEOUT_SECONDS,
                    )
                    response.raise_for_status()
                    return response.json() if response.content else {}

    async def update_user_metadata(self, principal_id: str, metadata: dict) -> dict:
        """Merge `metadata` into the principal's user metadata."""
        if self.dev_mode:
            logger.info("identity_dev_mode_metadata", principal_id=principal_id, metadata=metadata)
        return await self._request(
            "PUT",
            f"/admin/users/{principal_id}",
            {"user_metadata": metadata},
        )

    async def mark_onboarding_completed(self, principal_id: str, role: UserRole) -> bool:
        """
        Flag the principal as onboarded with the chosen role.
        Returns False instead of raising when every attempt fails.
        """
        try:
            await self.update_user_metadata(
                principal_id,
                {"onboarding_completed": True, "role": UserRole(role).value},
            )
        except (httpx.HTTPError, ValueError) as exc:
            # ValueError: a 2xx answer whose body is not JSON
            logger.warning(
                "identity_metadata_write_failed",
                principal_id=principal_id,
                error=str(exc),
            )
            return False
        return True
