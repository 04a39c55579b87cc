"""Repository Protocols: dependency inversion for testability.

Unit tests inject a mock that conforms to these Protocols.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from src.bl_account.domain.models import Transaction, User
from src.bl_common.database import StoreSession


class UserRepositoryProtocol(Protocol):
    async def get_user(self, session: StoreSession, user_id: str) -> User | None: ...

    async def get_user_by_email(self, session: StoreSession, email: str) -> User | None: ...

    async def list_users(self, session: StoreSession) -> list[User]: ...

    async def add_user(self, session: StoreSession, user: User) -> None: ...

    async def save_user(self, session: StoreSession, user: User) -> None: ...


class TransactionRepositoryProtocol(Protocol):
    async def get_transaction(
        self, session: StoreSession, tx_id: str
    ) -> Transaction | None: ...

    async def add_transaction(self, session: StoreSession, tx: Transaction) -> None: ...

    async def save_transaction(self, session: StoreSession, tx: Transaction) -> None: ...

    async def list_transactions(
        self,
        session: StoreSession,
        user_id: str | None,
        tx_type: str | None,
        status: str | None,
    ) -> list[Transaction]: ...
