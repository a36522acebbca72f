"""
Metadata sync worker.
Re-sends onboarding metadata to the identity provider for users whose
last onboarding submission was never acknowledged by it.
Runs every 5 minutes.
"""

import asyncio
from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
import structlog

from cronara.database import create_engine, create_session_factory, close_db
from cronara.errors import StoreError
from cronara.integrations.identity_client import IdentityClient
from cronara.logging_config import configure_logging
from cronara.models.user import User, UserRole
from cronara.services.onboarding_service import OnboardingService

logger = structlog.get_logger(__name__)


async def sync_pending_metadata(
    session_factory: async_sessionmaker[AsyncSession],
    identity: Optional[IdentityClient] = None,
    batch_size: int = 100,
) -> dict:
    """
    Main metadata sync job.
    Finds users with a role and no metadata acknowledgement and retries them.
    """
    identity = identity or IdentityClient()

    async with session_factory() as db:
        result = await db.execute(
            select(User.user_id, User.role)
            .where(User.role.is_not(None), User.metadata_synced_at.is_(None))
            .order_by(User.id)
            .limit(batch_size)
        )
        pending = result.all()

        service = OnboardingService(db)
        total_synced = 0

        for principal_id, role in pending:
            with structlog.contextvars.bound_contextvars(principal_id=principal_id):
                if not await identity.mark_onboarding_completed(principal_id, UserRole(role)):
                    logger.warning("metadata_sync_failed")
                    continue

                try:
                    await service.mark_metadata_synced(principal_id)
                except StoreError as e:
                    # Stays pending for the next run
                    logger.warning("metadata_sync_stamp_failed", error=e.message)
                    continue

                total_synced += 1
                logger.info("metadata_sync_succeeded")

    return {
        "attempted": len(pending),
        "synced": total_synced,
    }


async def main() -> dict:
    configure_logging()
    engine = create_engine()
    try:
        return await sync_pending_metadata(create_session_factory(engine))
    finally:
        await close_db(engine)


# Entry point for running as standalone script
if __name__ == "__main__":
    result = asyncio.run(main())
    logger.info("metadata_sync_finished", **result)
