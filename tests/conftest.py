"""Shared test fixtures.

Settings are read at import time, so the environment is prepared before
anything from src is imported: an in-memory store and a throwaway JWT secret.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-do-not-use-in-production")
os.environ["STORE_BACKEND"] = "memory"
os.environ.pop("ADMIN_SEED_EMAIL", None)
os.environ.pop("SUPPORT_API_KEY", None)

from collections.abc import AsyncIterator  # noqa: E402

import pytest  # noqa: E402

from src.bl_common.database import StoreSession  # noqa: E402
from src.bl_common.store import InMemoryStore  # noqa: E402


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
async def session(store: InMemoryStore) -> AsyncIterator[StoreSession]:
    s = StoreSession(store)
    yield s
    await s.close()
