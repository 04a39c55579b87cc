"""Key-value store backends.

The store is a durable map from collection name to one flat, ordered list
of JSON records. It has no partial writes and no schema versioning; callers
replace a whole collection at a time. ``set_many`` replaces several
collections in one all-or-nothing step.
"""

import copy
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

import redis.asyncio as aioredis

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class KeyValueStore(Protocol):
    async def get(self, collection: str) -> list[Record]: ...

    async def set(self, collection: str, records: list[Record]) -> None: ...

    async def set_many(self, changes: dict[str, list[Record]]) -> None: ...

    async def ping(self) -> None: ...


class InMemoryStore:
    """Process-local store. Returns deep copies so callers never alias state."""

    def __init__(self, initial: dict[str, list[Record]] | None = None) -> None:
        self._data: dict[str, list[Record]] = copy.deepcopy(initial or {})

    async def get(self, collection: str) -> list[Record]:
        return copy.deepcopy(self._data.get(collection, []))

    async def set(self, collection: str, records: list[Record]) -> None:
        self._data[collection] = copy.deepcopy(records)

    async def set_many(self, changes: dict[str, list[Record]]) -> None:
        for collection, records in changes.items():
            self._data[collection] = copy.deepcopy(records)

    async def ping(self) -> None:
        return None


class RedisStore:
    """One Redis string key per collection, value is the JSON-encoded list."""

    def __init__(
        self,
        client_factory: Callable[[], Awaitable[aioredis.Redis]],
        prefix: str = "bl:",
    ) -> None:
        self._client_factory = client_factory
        self._prefix = prefix

    def _key(self, collection: str) -> str:
        return f"{self._prefix}{collection}"

    async def get(self, collection: str) -> list[Record]:
        client = await self._client_factory()
        raw = await client.get(self._key(collection))
        if not raw:
            return []
        records: list[Record] = json.loads(raw)
        return records

    async def set(self, collection: str, records: list[Record]) -> None:
        client = await self._client_factory()
        await client.set(self._key(collection), json.dumps(records))

    async def set_many(self, changes: dict[str, list[Record]]) -> None:
        if not changes:
            return
        client = await self._client_factory()
        # MULTI/EXEC: every collection is replaced or none is
        async with client.pipeline(transaction=True) as pipe:
            for collection, records in changes.items():
                pipe.set(self._key(collection), json.dumps(records))
            await pipe.execute()
        logger.debug("Committed collections: %s", ", ".join(sorted(changes)))

    async def ping(self) -> None:
        client = await self._client_factory()
        await client.ping()
