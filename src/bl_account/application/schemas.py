"""Pydantic schemas for the bl_account API (and the admin ledger views)."""

from pydantic import BaseModel, Field

from src.bl_account.domain.models import Transaction, User
from src.bl_admin.domain.models import AppConfig
from src.bl_common.cents import cents_to_display

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class DepositRequest(BaseModel):
    amount_cents: int = Field(..., gt=0, description="Amount to deposit in cents")
    receipt_ref: str = Field(..., min_length=1, description="Reference to the payment receipt")


class WithdrawRequest(BaseModel):
    amount_cents: int = Field(..., gt=0, description="Amount to withdraw in cents")


class BalanceOverrideRequest(BaseModel):
    balance_cents: int = Field(..., ge=0)
    withdrawable_balance_cents: int = Field(..., ge=0)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BalanceResponse(BaseModel):
    user_id: str
    balance_cents: int
    balance_display: str
    withdrawable_balance_cents: int
    withdrawable_balance_display: str

    @classmethod
    def from_domain(cls, user: User) -> "BalanceResponse":
        return cls(
            user_id=user.id,
            balance_cents=user.balance,
            balance_display=cents_to_display(user.balance),
            withdrawable_balance_cents=user.withdrawable_balance,
            withdrawable_balance_display=cents_to_display(user.withdrawable_balance),
        )


class TransactionItem(BaseModel):
    id: str
    user_id: str
    type: str
    status: str
    amount_cents: int
    amount_display: str
    receipt_ref: str | None = None
    reference_id: str | None = None
    description: str | None = None
    timestamp: str

    @classmethod
    def from_domain(cls, tx: Transaction) -> "TransactionItem":
        return cls(
            id=tx.id,
            user_id=tx.user_id,
            type=tx.type,
            status=tx.status,
            amount_cents=tx.amount,
            amount_display=cents_to_display(tx.amount),
            receipt_ref=tx.receipt_ref,
            reference_id=tx.reference_id,
            description=tx.description,
            timestamp=tx.timestamp.isoformat(),
        )


class TransactionListResponse(BaseModel):
    items: list[TransactionItem]


class PaymentConfigResponse(BaseModel):
    payment_key: str
    qr_image_ref: str

    @classmethod
    def from_domain(cls, config: AppConfig) -> "PaymentConfigResponse":
        return cls(payment_key=config.payment_key, qr_image_ref=config.qr_image_ref)
