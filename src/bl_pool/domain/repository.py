"""Repository Protocols for pools and bets."""

from typing import Protocol

from src.bl_common.database import StoreSession
from src.bl_pool.domain.models import Bet, Pool


class PoolRepositoryProtocol(Protocol):
    async def get_pool(self, session: StoreSession, pool_id: str) -> Pool | None: ...

    async def list_pools(self, session: StoreSession) -> list[Pool]: ...

    async def add_pool(self, session: StoreSession, pool: Pool) -> None: ...

    async def mark_finished(
        self, session: StoreSession, pool_id: str, winner_option: str
    ) -> None: ...


class BetRepositoryProtocol(Protocol):
    async def list_bets(
        self,
        session: StoreSession,
        pool_id: str | None = None,
        user_id: str | None = None,
    ) -> list[Bet]: ...

    async def add_bet(self, session: StoreSession, bet: Bet) -> None: ...
