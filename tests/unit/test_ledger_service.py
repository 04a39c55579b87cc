"""Unit tests for LedgerService against an in-memory store."""

import pytest

from src.bl_account.application.service import LedgerService
from src.bl_account.domain.models import User
from src.bl_account.infrastructure.persistence import UserRepository
from src.bl_common.database import StoreSession
from src.bl_common.enums import Collection, TransactionStatus, TransactionType
from src.bl_common.errors import (
    InsufficientFundsError,
    InternalError,
    InvalidAmountError,
    InvalidInputError,
    TransactionNotFoundError,
    UserNotFoundError,
)
from src.bl_common.store import InMemoryStore
from tests.factories import make_user, seed_users


@pytest.fixture
def ledger() -> LedgerService:
    return LedgerService()


async def _user(session: StoreSession, user_id: str = "user_alice") -> User:
    user = await UserRepository().get_user(session, user_id)
    assert user is not None
    return user


class TestDeposit:
    async def test_request_is_pending_and_balance_untouched(
        self, ledger: LedgerService, session: StoreSession
    ) -> None:
        await seed_users(session, make_user())
        tx = await ledger.request_deposit(session, "user_alice", 5000, "receipt-1")

        assert tx.type == TransactionType.DEPOSIT.value
        assert tx.status == TransactionStatus.PENDING.value
        assert tx.receipt_ref == "receipt-1"
        assert (await _user(session)).balance == 0

    async def test_approve_credits_balance(
        self, ledger: LedgerService, session: StoreSession
    ) -> None:
        await seed_users(session, make_user())
        tx = await ledger.request_deposit(session, "user_alice", 5000, "receipt-1")

        approved = await ledger.approve(session, tx.id)

        assert approved.status == TransactionStatus.APPROVED.value
        user = await _user(session)
        assert user.balance == 5000
        assert user.withdrawable_balance == 0

    async def test_reject_leaves_balance(
        self, ledger: LedgerService, session: StoreSession
    ) -> None:
        await seed_users(session, make_user())
        tx = await ledger.request_deposit(session, "user_alice", 5000, "receipt-1")

        rejected = await ledger.reject(session, tx.id)

        assert rejected.status == TransactionStatus.REJECTED.value
        assert (await _user(session)).balance == 0

    async def test_approve_twice_is_noop(
        self, ledger: LedgerService, session: StoreSession
    ) -> None:
        await seed_users(session, make_user())
        tx = await ledger.request_deposit(session, "user_alice", 5000, "receipt-1")
        await ledger.approve(session, tx.id)
        await ledger.approve(session, tx.id)
        await ledger.reject(session, tx.id)

        assert (await _user(session)).balance == 5000

    @pytest.mark.parametrize("amount", [0, -100])
    async def test_non_positive_amount_rejected(
        self, ledger: LedgerService, session: StoreSession, amount: int
    ) -> None:
        await seed_users(session, make_user())
        with pytest.raises(InvalidAmountError):
            await ledger.request_deposit(session, "user_alice", amount, "r")

    async def test_unknown_user(self, ledger: LedgerService, session: StoreSession) -> None:
        with pytest.raises(UserNotFoundError):
            await ledger.request_deposit(session, "user_ghost", 100, "r")


class TestWithdrawal:
    async def test_request_reserves_funds(
        self, ledger: LedgerService, session: StoreSession
    ) -> None:
        await seed_users(session, make_user(withdrawable=3000))
        tx = await ledger.request_withdrawal(session, "user_alice", 2000)

        assert tx.status == TransactionStatus.PENDING.value
        assert (await _user(session)).withdrawable_balance == 1000

    async def test_insufficient_withdrawable(
        self, ledger: LedgerService, session: StoreSession, store: InMemoryStore
    ) -> None:
        # Wagering balance never counts towards withdrawals
        await seed_users(session, make_user(balance=10_000, withdrawable=500))

        with pytest.raises(InsufficientFundsError):
            await ledger.request_withdrawal(session, "user_alice", 1000)

        assert await store.get(Collection.TRANSACTIONS.value) == []
        assert (await _user(session)).withdrawable_balance == 500

    async def test_reject_restores_reservation(
        self, ledger: LedgerService, session: StoreSession
    ) -> None:
        await seed_users(session, make_user(withdrawable=3000))
        tx = await ledger.request_withdrawal(session, "user_alice", 2000)

        await ledger.reject(session, tx.id)

        assert (await _user(session)).withdrawable_balance == 3000

    async def test_approve_keeps_funds_out(
        self, ledger: LedgerService, session: StoreSession
    ) -> None:
        await seed_users(session, make_user(withdrawable=3000))
        tx = await ledger.request_withdrawal(session, "user_alice", 2000)

        await ledger.approve(session, tx.id)

        user = await _user(session)
        assert user.withdrawable_balance == 1000
        assert user.balance == 0


class TestReview:
    async def test_unknown_transaction(
        self, ledger: LedgerService, session: StoreSession
    ) -> None:
        with pytest.raises(TransactionNotFoundError):
            await ledger.approve(session, "tx_missing")
        with pytest.raises(TransactionNotFoundError):
            await ledger.reject(session, "tx_missing")

    async def test_list_filters_and_orders_newest_first(
        self, ledger: LedgerService, session: StoreSession
    ) -> None:
        await seed_users(session, make_user(withdrawable=1000), make_user("user_bob"))
        first = await ledger.request_deposit(session, "user_alice", 100, "r1")
        second = await ledger.request_withdrawal(session, "user_alice", 500)
        await ledger.request_deposit(session, "user_bob", 100, "r2")

        mine = await ledger.list_transactions(session, "user_alice")
        assert [t.id for t in mine] == [second.id, first.id]

        deposits = await ledger.list_transactions(
            session, tx_type=TransactionType.DEPOSIT.value
        )
        assert len(deposits) == 2


class TestOverride:
    async def test_emits_signed_adjustments(
        self, ledger: LedgerService, session: StoreSession
    ) -> None:
        await seed_users(session, make_user(balance=1000, withdrawable=2000))

        user = await ledger.override_balances(session, "user_alice", 1500, 500)

        assert (user.balance, user.withdrawable_balance) == (1500, 500)
        adjustments = await ledger.list_transactions(
            session, "user_alice", TransactionType.ADJUSTMENT.value
        )
        by_field = {t.description: t.amount for t in adjustments}
        assert by_field == {"balance": 500, "withdrawableBalance": -1500}
        assert all(t.status == TransactionStatus.APPROVED.value for t in adjustments)

    async def test_unchanged_balance_leaves_no_entry(
        self, ledger: LedgerService, session: StoreSession
    ) -> None:
        await seed_users(session, make_user(balance=1000))
        await ledger.override_balances(session, "user_alice", 1000, 0)
        assert await ledger.list_transactions(session, "user_alice") == []

    async def test_negative_rejected(self, ledger: LedgerService, session: StoreSession) -> None:
        await seed_users(session, make_user())
        with pytest.raises(InvalidInputError):
            await ledger.override_balances(session, "user_alice", -1, 0)


class TestPoolMovements:
    async def test_prize_credits_withdrawable_only(
        self, ledger: LedgerService, session: StoreSession
    ) -> None:
        await seed_users(session, make_user(balance=200))
        tx = await ledger.credit_prize(session, "user_alice", 1350, "pool_final")
        await session.commit()

        user = await ledger.get_balance(session, "user_alice")
        assert (user.balance, user.withdrawable_balance) == (200, 1350)
        assert tx.type == TransactionType.PRIZE.value
        assert tx.reference_id == "pool_final"

    async def test_prize_for_missing_account_is_internal_error(
        self, ledger: LedgerService, session: StoreSession
    ) -> None:
        with pytest.raises(InternalError) as exc_info:
            await ledger.credit_prize(session, "user_ghost", 900, "pool_final")
        assert exc_info.value.http_status == 500
