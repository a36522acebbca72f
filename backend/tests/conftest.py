"""Pytest configuration and shared fixtures for tests."""

from collections.abc import AsyncGenerator
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from cronara.api.deps import get_identity_client
from cronara.database import Base, create_session_factory
from cronara.main import app
from cronara.models.user import UserRole
import cronara.models  # noqa: F401


class FakeIdentityClient:
    """Records metadata writes instead of calling the identity provider."""

    def __init__(self, succeed: bool = True, error: Optional[Exception] = None):
        self.succeed = succeed
        self.error = error
        self.calls: list[tuple[str, UserRole]] = []

    async def mark_onboarding_completed(self, principal_id: str, role: UserRole) -> bool:
        if self.error is not None:
            raise self.error
        self.calls.append((principal_id, UserRole(role)))
        return self.succeed


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create a sqlite-backed session factory with every table."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = create_session_factory(engine)
    try:
        yield factory
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def db(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """A session on the sqlite store."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def identity() -> FakeIdentityClient:
    return FakeIdentityClient()


@pytest_asyncio.fixture
async def api_client(
    session_factory: async_sessionmaker[AsyncSession],
    identity: FakeIdentityClient,
) -> AsyncGenerator[AsyncClient, None]:
    """API client on the sqlite store with the identity provider faked."""
    app.state.session_factory = session_factory
    app.dependency_overrides[get_identity_client] = lambda: identity
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def mock_db_session_failing() -> AsyncMock:
    """Create a mock database session that fails on execute.

    Returns:
        AsyncMock configured to raise a store error on execute.
    """
    session = AsyncMock()
    session.add = MagicMock()
    session.execute.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
    return session
