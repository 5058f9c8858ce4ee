"""
Pytest fixtures - in-memory DB, API client, fake geo gateways, authenticated users.
No network: the geocoder and distance gateway are replaced through dependency overrides.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from farm_registry.core.dependencies import get_distance_gateway, get_geocoder
from farm_registry.db.base import Base
from farm_registry.db.models import User
from farm_registry.db.session import get_db
from farm_registry.main import app
from tests.factories import FakeDistanceGateway, FakeGeocoder, create_user, issue_token

# One shared in-memory SQLite connection per test
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as s:
        yield s


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder()


@pytest.fixture
def distance_gateway() -> FakeDistanceGateway:
    return FakeDistanceGateway()


@pytest_asyncio.fixture
async def client(session: AsyncSession, geocoder: FakeGeocoder, distance_gateway: FakeDistanceGateway):
    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_geocoder] = lambda: geocoder
    app.dependency_overrides[get_distance_gateway] = lambda: distance_gateway
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_user(session: AsyncSession) -> User:
    return await create_user(session, "test@example.com")


@pytest_asyncio.fixture
async def other_user(session: AsyncSession) -> User:
    return await create_user(session, "other@example.com", address="Debrecen")


@pytest_asyncio.fixture
async def auth_headers(session: AsyncSession, test_user: User) -> dict:
    token = await issue_token(session, test_user)
    return {"Authorization": f"Bearer {token}"}
