"""UserRepository / TransactionRepository over the users and transactions collections.

Records keep the camelCase at-rest schema; the mappers below are the only
place that knows it. Writes are staged on the caller's StoreSession, the
CALLER (application service) commits.
"""

from typing import Any

from src.bl_account.domain.models import Transaction, User
from src.bl_common.database import StoreSession
from src.bl_common.datetime_utils import format_datetime, parse_datetime
from src.bl_common.enums import Collection

# ---------------------------------------------------------------------------
# Record mappers
# ---------------------------------------------------------------------------


def _record_to_user(record: dict[str, Any]) -> User:
    return User(
        id=record["id"],
        name=record["name"],
        email=record["email"],
        password_hash=record["passwordHash"],
        whatsapp=record.get("whatsapp", ""),
        role=record["role"],
        balance=record["balance"],
        withdrawable_balance=record["withdrawableBalance"],
        created_at=parse_datetime(record["createdAt"]),
    )


def _user_to_record(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "passwordHash": user.password_hash,
        "whatsapp": user.whatsapp,
        "role": user.role,
        "balance": user.balance,
        "withdrawableBalance": user.withdrawable_balance,
        "createdAt": format_datetime(user.created_at),
    }


def _record_to_transaction(record: dict[str, Any]) -> Transaction:
    return Transaction(
        id=record["id"],
        user_id=record["userId"],
        type=record["type"],
        amount=record["amount"],
        status=record["status"],
        timestamp=parse_datetime(record["timestamp"]),
        receipt_ref=record.get("receiptRef"),
        reference_id=record.get("referenceId"),
        description=record.get("description"),
    )


def _transaction_to_record(tx: Transaction) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": tx.id,
        "userId": tx.user_id,
        "type": tx.type,
        "amount": tx.amount,
        "status": tx.status,
        "timestamp": format_datetime(tx.timestamp),
    }
    if tx.receipt_ref is not None:
        record["receiptRef"] = tx.receipt_ref
    if tx.reference_id is not None:
        record["referenceId"] = tx.reference_id
    if tx.description is not None:
        record["description"] = tx.description
    return record


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


class UserRepository:
    async def get_user(self, session: StoreSession, user_id: str) -> User | None:
        for record in await session.get(Collection.USERS):
            if record["id"] == user_id:
                return _record_to_user(record)
        return None

    async def get_user_by_email(self, session: StoreSession, email: str) -> User | None:
        wanted = email.strip().lower()
        for record in await session.get(Collection.USERS):
            if record["email"].lower() == wanted:
                return _record_to_user(record)
        return None

    async def list_users(self, session: StoreSession) -> list[User]:
        return [_record_to_user(r) for r in await session.get(Collection.USERS)]

    async def add_user(self, session: StoreSession, user: User) -> None:
        records = await session.get(Collection.USERS)
        records.append(_user_to_record(user))
        session.stage(Collection.USERS, records)

    async def save_user(self, session: StoreSession, user: User) -> None:
        records = await session.get(Collection.USERS)
        for i, record in enumerate(records):
            if record["id"] == user.id:
                records[i] = _user_to_record(user)
                break
        else:
            records.append(_user_to_record(user))
        session.stage(Collection.USERS, records)


class TransactionRepository:
    async def get_transaction(
        self, session: StoreSession, tx_id: str
    ) -> Transaction | None:
        for record in await session.get(Collection.TRANSACTIONS):
            if record["id"] == tx_id:
                return _record_to_transaction(record)
        return None

    async def add_transaction(self, session: StoreSession, tx: Transaction) -> None:
        records = await session.get(Collection.TRANSACTIONS)
        records.append(_transaction_to_record(tx))
        session.stage(Collection.TRANSACTIONS, records)

    async def save_transaction(self, session: StoreSession, tx: Transaction) -> None:
        records = await session.get(Collection.TRANSACTIONS)
        for i, record in enumerate(records):
            if record["id"] == tx.id:
                records[i] = _transaction_to_record(tx)
                break
        else:
            records.append(_transaction_to_record(tx))
        session.stage(Collection.TRANSACTIONS, records)

    async def list_transactions(
        self,
        session: StoreSession,
        user_id: str | None,
        tx_type: str | None,
        status: str | None,
    ) -> list[Transaction]:
        """Filtered transactions, newest first."""
        # Reversed first so equal timestamps keep latest-appended first
        txs = [
            _record_to_transaction(r)
            for r in reversed(await session.get(Collection.TRANSACTIONS))
            if (user_id is None or r["userId"] == user_id)
            and (tx_type is None or r["type"] == tx_type)
            and (status is None or r["status"] == status)
        ]
        txs.sort(key=lambda t: t.timestamp, reverse=True)
        return txs
