"""PoolService: pool lifecycle: create, read (derived status), bet, settle.

Every read of the pool collection goes through ``_read_pools``: statuses are
derived from ``now`` (never persisted) and overdue pools get a CRITICAL
alert. place_bet and settle each commit exactly once, so the balance debit
or prize credits, their ledger entries and the bet/pool change land together.
"""

import logging
from datetime import datetime

from src.bl_account.application.service import LedgerService
from src.bl_account.domain.models import User
from src.bl_account.domain.repository import UserRepositoryProtocol
from src.bl_account.infrastructure.persistence import UserRepository
from src.bl_alert.application.service import AlertService
from src.bl_common.database import StoreSession
from src.bl_common.datetime_utils import ensure_utc, utc_now
from src.bl_common.enums import AlertType, PoolStatus
from src.bl_common.errors import (
    DuplicateBetError,
    ForbiddenError,
    InvalidAmountError,
    InvalidInputError,
    InvalidOptionError,
    PoolClosedError,
    PoolNotFoundError,
    PoolNotSettleableError,
    UserNotFoundError,
)
from src.bl_common.id_generator import generate_id
from src.bl_pool.domain.models import Bet, Pool, SettlementPlan
from src.bl_pool.domain.repository import BetRepositoryProtocol, PoolRepositoryProtocol
from src.bl_pool.domain.settlement import plan_settlement
from src.bl_pool.domain.status import (
    derive_status,
    is_overdue,
    overdue_message,
    with_derived_status,
)
from src.bl_pool.infrastructure.persistence import BetRepository, PoolRepository

logger = logging.getLogger(__name__)


class PoolService:
    def __init__(
        self,
        pools: PoolRepositoryProtocol | None = None,
        bets: BetRepositoryProtocol | None = None,
        users: UserRepositoryProtocol | None = None,
        ledger: LedgerService | None = None,
        alerts: AlertService | None = None,
    ) -> None:
        self._pools: PoolRepositoryProtocol = pools or PoolRepository()
        self._bets: BetRepositoryProtocol = bets or BetRepository()
        self._users: UserRepositoryProtocol = users or UserRepository()
        self._ledger = ledger or LedgerService(users=self._users)
        self._alerts = alerts or AlertService()

    # ------------------------------------------------------------------
    # Read boundary
    # ------------------------------------------------------------------

    async def _read_pools(self, session: StoreSession, now: datetime) -> list[Pool]:
        pools = [with_derived_status(p, now) for p in await self._pools.list_pools(session)]
        await self._raise_overdue_alerts(session, pools, now)
        return pools

    async def _read_pool(self, session: StoreSession, pool_id: str, now: datetime) -> Pool:
        pool = next((p for p in await self._read_pools(session, now) if p.id == pool_id), None)
        if pool is None:
            raise PoolNotFoundError(pool_id)
        return pool

    async def _raise_overdue_alerts(
        self, session: StoreSession, pools: list[Pool], now: datetime
    ) -> int:
        raised = 0
        for pool in pools:
            if not is_overdue(pool, now):
                continue
            alert = await self._alerts.ensure_alert(
                session, pool.id, overdue_message(pool), AlertType.CRITICAL
            )
            if alert is not None:
                raised += 1
        if raised:
            await session.commit()
        return raised

    async def list_pools(
        self,
        session: StoreSession,
        now: datetime | None = None,
        status: str | None = None,
        modality: str | None = None,
    ) -> list[Pool]:
        """Pools with derived status, newest first."""
        pools = await self._read_pools(session, now or utc_now())
        pools = [
            p
            for p in reversed(pools)
            if (status is None or p.status == status)
            and (modality is None or p.modality == modality)
        ]
        pools.sort(key=lambda p: p.created_at, reverse=True)
        return pools

    async def get_pool_detail(
        self, session: StoreSession, pool_id: str, now: datetime | None = None
    ) -> tuple[Pool, list[Bet]]:
        pool = await self._read_pool(session, pool_id, now or utc_now())
        bets = await self._bets.list_bets(session, pool_id=pool_id)
        return pool, bets

    async def list_user_bets(
        self, session: StoreSession, user_id: str, now: datetime | None = None
    ) -> list[tuple[Bet, Pool]]:
        """The user's bets (newest first) paired with their pool's derived view."""
        pools = {p.id: p for p in await self._read_pools(session, now or utc_now())}
        bets = list(reversed(await self._bets.list_bets(session, user_id=user_id)))
        bets.sort(key=lambda b: b.timestamp, reverse=True)
        return [(b, pools[b.pool_id]) for b in bets if b.pool_id in pools]

    async def run_system_scan(
        self, session: StoreSession, now: datetime | None = None
    ) -> int:
        """Derive-and-alert pass over every pool. Returns how many alerts were raised."""
        now = now or utc_now()
        pools = [with_derived_status(p, now) for p in await self._pools.list_pools(session)]
        return await self._raise_overdue_alerts(session, pools, now)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create_pool(
        self,
        session: StoreSession,
        creator_id: str,
        name: str,
        modality: str,
        date_time: datetime,
        event_date_time: datetime,
        bet_amount: int,
        options: list[str],
        now: datetime | None = None,
    ) -> Pool:
        now = now or utc_now()
        date_time = ensure_utc(date_time)
        event_date_time = ensure_utc(event_date_time)
        labels = [o.strip() for o in options]

        if bet_amount <= 0:
            raise InvalidAmountError(bet_amount)
        if not name.strip():
            raise InvalidInputError("Pool name is required")
        if len(labels) != 2 or not all(labels) or labels[0] == labels[1]:
            raise InvalidInputError("A pool needs exactly two distinct options")
        if date_time <= now:
            raise InvalidInputError("Betting deadline must be in the future")
        if event_date_time < date_time:
            raise InvalidInputError("Event time cannot be earlier than the betting deadline")

        try:
            if await self._users.get_user(session, creator_id) is None:
                raise UserNotFoundError(creator_id)
            pool = Pool(
                id=generate_id("pool"),
                creator_id=creator_id,
                name=name.strip(),
                modality=modality.strip(),
                date_time=date_time,
                event_date_time=event_date_time,
                bet_amount=bet_amount,
                options=labels,
                status=PoolStatus.OPEN.value,
                created_at=now,
            )
            await self._pools.add_pool(session, pool)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        logger.info("Pool created: pool=%s creator=%s stake=%d", pool.id, creator_id, bet_amount)
        return pool

    async def place_bet(
        self,
        session: StoreSession,
        user_id: str,
        pool_id: str,
        option: str,
        now: datetime | None = None,
    ) -> Bet:
        now = now or utc_now()
        try:
            pool = await self._read_pool(session, pool_id, now)
            user = await self._users.get_user(session, user_id)
            if user is None:
                raise UserNotFoundError(user_id)
            if derive_status(pool, now) != PoolStatus.OPEN:
                raise PoolClosedError(pool_id)
            if option not in pool.options:
                raise InvalidOptionError(option)
            existing = await self._bets.list_bets(session, pool_id=pool_id, user_id=user_id)
            if existing:
                raise DuplicateBetError(pool_id)

            await self._ledger.debit_stake(session, user, pool.bet_amount, pool.id)
            bet = Bet(
                id=generate_id("bet"),
                pool_id=pool.id,
                user_id=user.id,
                option_selected=option,
                amount=pool.bet_amount,
                timestamp=now,
            )
            await self._bets.add_bet(session, bet)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        logger.info("Bet placed: pool=%s user=%s option=%s", pool_id, user_id, option)
        return bet

    async def settle(
        self,
        session: StoreSession,
        actor: User,
        pool_id: str,
        winner_option: str,
        now: datetime | None = None,
    ) -> SettlementPlan | None:
        """Pay the winners and finish the pool. Returns None when already FINISHED."""
        now = now or utc_now()
        try:
            pool = await self._read_pool(session, pool_id, now)
            status = derive_status(pool, now)
            if status == PoolStatus.FINISHED:
                return None
            if actor.id != pool.creator_id and not actor.is_admin:
                raise ForbiddenError("Only the pool creator or an admin can settle a pool")
            if winner_option not in pool.options:
                raise InvalidOptionError(winner_option)
            if status != PoolStatus.AWAITING_RESULT:
                raise PoolNotSettleableError(pool_id, status.value)

            bets = await self._bets.list_bets(session, pool_id=pool_id)
            plan = plan_settlement(pool.id, bets, winner_option)
            for payout in plan.payouts:
                await self._ledger.credit_prize(session, payout.user_id, payout.amount, pool.id)
            await self._pools.mark_finished(session, pool.id, winner_option)
            await self._alerts.clear_for_reference(session, pool.id)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        logger.info(
            "Pool settled: pool=%s winner=%s total=%d fee=%d winners=%d each=%d retained=%d",
            pool_id,
            winner_option,
            plan.total_collected,
            plan.fee,
            plan.winner_count,
            plan.individual_prize,
            plan.retained,
        )
        return plan
