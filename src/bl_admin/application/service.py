"""AdminService: dashboard metrics, payment config, user directory."""

import logging
from datetime import datetime

from src.bl_account.domain.models import User
from src.bl_account.domain.repository import (
    TransactionRepositoryProtocol,
    UserRepositoryProtocol,
)
from src.bl_account.infrastructure.persistence import TransactionRepository, UserRepository
from src.bl_admin.domain.models import AppConfig, DashboardMetrics
from src.bl_admin.infrastructure.persistence import ConfigRepository
from src.bl_alert.application.service import AlertService
from src.bl_common.database import StoreSession
from src.bl_common.datetime_utils import utc_now
from src.bl_common.enums import AlertType, PoolStatus, TransactionStatus, TransactionType
from src.bl_pool.application.service import PoolService
from src.bl_pool.domain.repository import BetRepositoryProtocol
from src.bl_pool.infrastructure.persistence import BetRepository

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(
        self,
        users: UserRepositoryProtocol | None = None,
        transactions: TransactionRepositoryProtocol | None = None,
        config: ConfigRepository | None = None,
        pools: PoolService | None = None,
        bets: BetRepositoryProtocol | None = None,
        alerts: AlertService | None = None,
    ) -> None:
        self._users: UserRepositoryProtocol = users or UserRepository()
        self._transactions: TransactionRepositoryProtocol = (
            transactions or TransactionRepository()
        )
        self._config = config or ConfigRepository()
        self._bets: BetRepositoryProtocol = bets or BetRepository()
        self._alerts = alerts or AlertService()
        self._pools = pools or PoolService(users=self._users, alerts=self._alerts)

    async def get_metrics(
        self, session: StoreSession, now: datetime | None = None
    ) -> DashboardMetrics:
        pools = await self._pools.list_pools(session, now or utc_now())
        live_ids = {p.id for p in pools if p.status != PoolStatus.FINISHED.value}
        bets = await self._bets.list_bets(session)
        pending = await self._transactions.list_transactions(
            session, user_id=None, tx_type=None, status=TransactionStatus.PENDING.value
        )
        alerts = await self._alerts.list_alerts(session)
        return DashboardMetrics(
            total_users=len(await self._users.list_users(session)),
            open_pools=sum(1 for p in pools if p.status == PoolStatus.OPEN.value),
            total_in_game=sum(b.amount for b in bets if b.pool_id in live_ids),
            pending_withdrawals=sum(
                1 for t in pending if t.type == TransactionType.WITHDRAWAL.value
            ),
            pending_deposits=sum(1 for t in pending if t.type == TransactionType.DEPOSIT.value),
            alert_count=len(alerts),
            has_critical=any(a.type == AlertType.CRITICAL.value for a in alerts),
        )

    async def list_users(self, session: StoreSession) -> list[User]:
        users = await self._users.list_users(session)
        return sorted(users, key=lambda u: u.created_at, reverse=True)

    async def get_config(self, session: StoreSession) -> AppConfig:
        return await self._config.get_config(session)

    async def save_config(
        self, session: StoreSession, payment_key: str, qr_image_ref: str = ""
    ) -> AppConfig:
        config = AppConfig(payment_key=payment_key.strip(), qr_image_ref=qr_image_ref.strip())
        try:
            await self._config.save_config(session, config)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        logger.info("Payment config updated")
        return config
