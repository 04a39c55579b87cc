"""Store sessions: the unit of work every service operation runs in.

A StoreSession reads through to the store and stages writes; ``commit``
flushes all staged collections with one ``set_many`` call, ``rollback``
drops them. StoreSessionFactory hands out one session at a time under a
single asyncio.Lock, so ledger and settlement operations never interleave
their read-modify-write cycles.
"""

import asyncio
import copy
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends

from config.settings import settings
from src.bl_common.enums import Collection
from src.bl_common.redis_client import get_redis
from src.bl_common.store import InMemoryStore, KeyValueStore, Record, RedisStore


class StoreSession:
    def __init__(self, store: KeyValueStore, lock: asyncio.Lock | None = None) -> None:
        self._store = store
        self._lock = lock
        self._closed = False
        self._staged: dict[str, list[Record]] = {}

    async def get(self, collection: Collection) -> list[Record]:
        """Read a collection, seeing this session's own uncommitted writes."""
        key = collection.value
        if key in self._staged:
            return copy.deepcopy(self._staged[key])
        return await self._store.get(key)

    def stage(self, collection: Collection, records: list[Record]) -> None:
        self._staged[collection.value] = copy.deepcopy(records)

    @property
    def has_pending_writes(self) -> bool:
        return bool(self._staged)

    async def commit(self) -> None:
        if self._staged and self.closed:
            raise RuntimeError("Cannot commit a closed StoreSession")
        if self._staged:
            await self._store.set_many(self._staged)
        self._staged = {}

    async def rollback(self) -> None:
        self._staged = {}

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        """Drop staged writes and release the writer lock. Reads still work afterwards."""
        await self.rollback()
        self._closed = True
        if self._lock is not None:
            lock, self._lock = self._lock, None
            lock.release()


class StoreSessionFactory:
    """Single-writer session source shared by the API and the periodic scan."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def __call__(self) -> AsyncIterator[StoreSession]:
        await self._lock.acquire()
        session = StoreSession(self.store, self._lock)
        try:
            yield session
        finally:
            # Anything not explicitly committed is discarded
            await session.close()


def create_store() -> KeyValueStore:
    if settings.STORE_BACKEND == "memory":
        return InMemoryStore()
    return RedisStore(get_redis, prefix=settings.REDIS_KEY_PREFIX)


store: KeyValueStore = create_store()

session_factory = StoreSessionFactory(store)


def get_session_factory() -> StoreSessionFactory:
    """FastAPI dependency: the process-wide session factory (overridden in tests)."""
    return session_factory


async def get_store_session(
    factory: Annotated[StoreSessionFactory, Depends(get_session_factory)],
) -> AsyncGenerator[StoreSession, None]:
    """FastAPI dependency: yields a StoreSession, holds the writer lock for the request."""
    async with factory() as session:
        yield session
