"""PoolRepository / BetRepository over the pools and bets collections.

Pools are written in full only on creation. Afterwards ``mark_finished`` is
the single write path and touches nothing but status and winnerOption, which
keeps name, dates, stake and options immutable.
"""

from typing import Any

from src.bl_common.database import StoreSession
from src.bl_common.datetime_utils import format_datetime, parse_datetime
from src.bl_common.enums import Collection, PoolStatus
from src.bl_common.errors import PoolNotFoundError
from src.bl_pool.domain.models import Bet, Pool


def _record_to_pool(record: dict[str, Any]) -> Pool:
    return Pool(
        id=record["id"],
        creator_id=record["creatorId"],
        name=record["name"],
        modality=record["modality"],
        date_time=parse_datetime(record["dateTime"]),
        event_date_time=parse_datetime(record["eventDateTime"]),
        bet_amount=record["betAmount"],
        options=list(record["options"]),
        status=record["status"],
        created_at=parse_datetime(record["createdAt"]),
        winner_option=record.get("winnerOption"),
    )


def _pool_to_record(pool: Pool) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": pool.id,
        "creatorId": pool.creator_id,
        "name": pool.name,
        "modality": pool.modality,
        "dateTime": format_datetime(pool.date_time),
        "eventDateTime": format_datetime(pool.event_date_time),
        "betAmount": pool.bet_amount,
        "options": list(pool.options),
        "status": pool.status,
        "createdAt": format_datetime(pool.created_at),
    }
    if pool.winner_option is not None:
        record["winnerOption"] = pool.winner_option
    return record


def _record_to_bet(record: dict[str, Any]) -> Bet:
    return Bet(
        id=record["id"],
        pool_id=record["poolId"],
        user_id=record["userId"],
        option_selected=record["optionSelected"],
        amount=record["amount"],
        timestamp=parse_datetime(record["timestamp"]),
    )


def _bet_to_record(bet: Bet) -> dict[str, Any]:
    return {
        "id": bet.id,
        "poolId": bet.pool_id,
        "userId": bet.user_id,
        "optionSelected": bet.option_selected,
        "amount": bet.amount,
        "timestamp": format_datetime(bet.timestamp),
    }


class PoolRepository:
    async def get_pool(self, session: StoreSession, pool_id: str) -> Pool | None:
        for record in await session.get(Collection.POOLS):
            if record["id"] == pool_id:
                return _record_to_pool(record)
        return None

    async def list_pools(self, session: StoreSession) -> list[Pool]:
        return [_record_to_pool(r) for r in await session.get(Collection.POOLS)]

    async def add_pool(self, session: StoreSession, pool: Pool) -> None:
        records = await session.get(Collection.POOLS)
        records.append(_pool_to_record(pool))
        session.stage(Collection.POOLS, records)

    async def mark_finished(
        self, session: StoreSession, pool_id: str, winner_option: str
    ) -> None:
        records = await session.get(Collection.POOLS)
        for record in records:
            if record["id"] == pool_id:
                record["status"] = PoolStatus.FINISHED.value
                record["winnerOption"] = winner_option
                break
        else:
            raise PoolNotFoundError(pool_id)
        session.stage(Collection.POOLS, records)


class BetRepository:
    async def list_bets(
        self,
        session: StoreSession,
        pool_id: str | None = None,
        user_id: str | None = None,
    ) -> list[Bet]:
        return [
            _record_to_bet(r)
            for r in await session.get(Collection.BETS)
            if (pool_id is None or r["poolId"] == pool_id)
            and (user_id is None or r["userId"] == user_id)
        ]

    async def add_bet(self, session: StoreSession, bet: Bet) -> None:
        records = await session.get(Collection.BETS)
        records.append(_bet_to_record(bet))
        session.stage(Collection.BETS, records)
