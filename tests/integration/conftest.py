"""Integration-test fixtures.

Every test gets a fresh in-memory store behind the real FastAPI app: the
session-factory dependency is overridden, so requests go through routers,
auth dependencies and services exactly as in production.
"""

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from src.bl_common.database import StoreSessionFactory, get_session_factory
from src.bl_common.store import InMemoryStore
from src.bl_gateway.user.service import UserService
from src.main import app
from tests.api_helpers import ADMIN_EMAIL, ADMIN_PASSWORD, login


@pytest.fixture
def session_factory(store: InMemoryStore) -> StoreSessionFactory:
    return StoreSessionFactory(store)


@pytest.fixture
async def client(session_factory: StoreSessionFactory) -> AsyncIterator[AsyncClient]:
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def admin_headers(
    client: AsyncClient, session_factory: StoreSessionFactory
) -> dict[str, str]:
    async with session_factory() as session:
        await UserService().seed_admin(session, ADMIN_EMAIL, ADMIN_PASSWORD)
    return await login(client, ADMIN_EMAIL, ADMIN_PASSWORD)
