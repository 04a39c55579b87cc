"""Domain models for bl_account: pure dataclasses, no storage dependency."""

from dataclasses import dataclass
from datetime import datetime

from src.bl_common.enums import UserRole

# Placeholder stored for seeded accounts that never registered a contact
WHATSAPP_PLACEHOLDER = "(00) 00000-0000"


@dataclass
class User:
    id: str
    name: str
    email: str
    password_hash: str
    whatsapp: str
    role: str                    # UserRole value
    balance: int                 # cents, wagering funds
    withdrawable_balance: int    # cents, prize funds eligible for cash-out
    created_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @property
    def profile_complete(self) -> bool:
        return bool(self.whatsapp) and self.whatsapp != WHATSAPP_PLACEHOLDER


@dataclass
class Transaction:
    id: str
    user_id: str
    type: str                        # TransactionType value
    amount: int                      # cents; signed only for ADJUSTMENT
    status: str                      # TransactionStatus value
    timestamp: datetime
    receipt_ref: str | None = None
    reference_id: str | None = None  # pool id for BET / PRIZE
    description: str | None = None
