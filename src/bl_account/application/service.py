"""LedgerService: every balance mutation goes through here.

Public operations (request_deposit, request_withdrawal, approve, reject,
override_balances) own their unit of work: they commit the caller's
StoreSession on success and roll it back on any error, so no partial
application is ever visible.

debit_stake / credit_prize only stage changes; the pool engine calls them
inside its own unit of work and commits once.
"""

import logging

from src.bl_account.domain.models import Transaction, User
from src.bl_account.domain.repository import (
    TransactionRepositoryProtocol,
    UserRepositoryProtocol,
)
from src.bl_account.infrastructure.persistence import TransactionRepository, UserRepository
from src.bl_common.database import StoreSession
from src.bl_common.datetime_utils import utc_now
from src.bl_common.enums import TransactionStatus, TransactionType
from src.bl_common.errors import (
    InsufficientFundsError,
    InternalError,
    InvalidAmountError,
    InvalidInputError,
    TransactionNotFoundError,
    UserNotFoundError,
)
from src.bl_common.id_generator import generate_id

logger = logging.getLogger(__name__)


class LedgerService:
    def __init__(
        self,
        users: UserRepositoryProtocol | None = None,
        transactions: TransactionRepositoryProtocol | None = None,
    ) -> None:
        self._users: UserRepositoryProtocol = users or UserRepository()
        self._transactions: TransactionRepositoryProtocol = (
            transactions or TransactionRepository()
        )

    async def _require_user(self, session: StoreSession, user_id: str) -> User:
        user = await self._users.get_user(session, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def _new_transaction(
        self,
        user_id: str,
        tx_type: TransactionType,
        amount: int,
        status: TransactionStatus,
        **extra: str | None,
    ) -> Transaction:
        return Transaction(
            id=generate_id("tx"),
            user_id=user_id,
            type=tx_type.value,
            amount=amount,
            status=status.value,
            timestamp=utc_now(),
            **extra,
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_balance(self, session: StoreSession, user_id: str) -> User:
        return await self._require_user(session, user_id)

    async def list_transactions(
        self,
        session: StoreSession,
        user_id: str | None = None,
        tx_type: str | None = None,
        status: str | None = None,
    ) -> list[Transaction]:
        return await self._transactions.list_transactions(session, user_id, tx_type, status)

    # ------------------------------------------------------------------
    # Manual movements (reviewed by an admin)
    # ------------------------------------------------------------------

    async def request_deposit(
        self,
        session: StoreSession,
        user_id: str,
        amount: int,
        receipt_ref: str | None,
    ) -> Transaction:
        """Record a PENDING deposit. Balance is credited only on approval."""
        if amount <= 0:
            raise InvalidAmountError(amount)
        try:
            user = await self._require_user(session, user_id)
            tx = self._new_transaction(
                user.id,
                TransactionType.DEPOSIT,
                amount,
                TransactionStatus.PENDING,
                receipt_ref=receipt_ref,
            )
            await self._transactions.add_transaction(session, tx)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        logger.info("Deposit requested: tx=%s user=%s amount=%d", tx.id, user_id, amount)
        return tx

    async def request_withdrawal(
        self, session: StoreSession, user_id: str, amount: int
    ) -> Transaction:
        """Reserve funds now: withdrawable_balance is debited at request time."""
        if amount <= 0:
            raise InvalidAmountError(amount)
        try:
            user = await self._require_user(session, user_id)
            if user.withdrawable_balance < amount:
                raise InsufficientFundsError(amount, user.withdrawable_balance)
            user.withdrawable_balance -= amount
            await self._users.save_user(session, user)
            tx = self._new_transaction(
                user.id, TransactionType.WITHDRAWAL, amount, TransactionStatus.PENDING
            )
            await self._transactions.add_transaction(session, tx)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        logger.info("Withdrawal requested: tx=%s user=%s amount=%d", tx.id, user_id, amount)
        return tx

    async def approve(self, session: StoreSession, tx_id: str) -> Transaction:
        """Approve a PENDING deposit/withdrawal. Idempotent for any other status."""
        try:
            tx = await self._transactions.get_transaction(session, tx_id)
            if tx is None:
                raise TransactionNotFoundError(tx_id)
            if tx.status != TransactionStatus.PENDING.value:
                return tx
            user = await self._require_user(session, tx.user_id)
            if tx.type == TransactionType.DEPOSIT.value:
                user.balance += tx.amount
                await self._users.save_user(session, user)
            # WITHDRAWAL: funds already left withdrawable_balance at request time
            tx.status = TransactionStatus.APPROVED.value
            await self._transactions.save_transaction(session, tx)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        logger.info("Transaction approved: tx=%s type=%s amount=%d", tx.id, tx.type, tx.amount)
        return tx

    async def reject(self, session: StoreSession, tx_id: str) -> Transaction:
        """Reject a PENDING deposit/withdrawal, refunding a reserved withdrawal."""
        try:
            tx = await self._transactions.get_transaction(session, tx_id)
            if tx is None:
                raise TransactionNotFoundError(tx_id)
            if tx.status != TransactionStatus.PENDING.value:
                return tx
            if tx.type == TransactionType.WITHDRAWAL.value:
                user = await self._require_user(session, tx.user_id)
                user.withdrawable_balance += tx.amount
                await self._users.save_user(session, user)
            tx.status = TransactionStatus.REJECTED.value
            await self._transactions.save_transaction(session, tx)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        logger.info("Transaction rejected: tx=%s type=%s amount=%d", tx.id, tx.type, tx.amount)
        return tx

    async def override_balances(
        self,
        session: StoreSession,
        user_id: str,
        new_balance: int,
        new_withdrawable: int,
    ) -> User:
        """Admin correction. Each changed balance leaves an ADJUSTMENT entry (signed delta)."""
        if new_balance < 0 or new_withdrawable < 0:
            raise InvalidInputError("Balances cannot be negative")
        try:
            user = await self._require_user(session, user_id)
            deltas = (
                ("balance", new_balance - user.balance),
                ("withdrawableBalance", new_withdrawable - user.withdrawable_balance),
            )
            for field_name, delta in deltas:
                if delta == 0:
                    continue
                await self._transactions.add_transaction(
                    session,
                    self._new_transaction(
                        user.id,
                        TransactionType.ADJUSTMENT,
                        delta,
                        TransactionStatus.APPROVED,
                        description=field_name,
                    ),
                )
            user.balance = new_balance
            user.withdrawable_balance = new_withdrawable
            await self._users.save_user(session, user)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        logger.info(
            "Balances overridden: user=%s balance=%d withdrawable=%d",
            user_id,
            new_balance,
            new_withdrawable,
        )
        return user

    # ------------------------------------------------------------------
    # Pool movements, staged only, committed by the pool engine
    # ------------------------------------------------------------------

    async def debit_stake(
        self, session: StoreSession, user: User, amount: int, pool_id: str
    ) -> Transaction:
        if user.balance < amount:
            raise InsufficientFundsError(amount, user.balance)
        user.balance -= amount
        await self._users.save_user(session, user)
        tx = self._new_transaction(
            user.id,
            TransactionType.BET,
            amount,
            TransactionStatus.APPROVED,
            reference_id=pool_id,
        )
        await self._transactions.add_transaction(session, tx)
        return tx

    async def credit_prize(
        self, session: StoreSession, user_id: str, amount: int, pool_id: str
    ) -> Transaction:
        user = await self._users.get_user(session, user_id)
        if user is None:
            raise InternalError(f"Winning bet references unknown user {user_id}")
        user.withdrawable_balance += amount
        await self._users.save_user(session, user)
        tx = self._new_transaction(
            user.id,
            TransactionType.PRIZE,
            amount,
            TransactionStatus.APPROVED,
            reference_id=pool_id,
        )
        await self._transactions.add_transaction(session, tx)
        return tx
