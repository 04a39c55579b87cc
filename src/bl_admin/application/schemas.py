"""Pydantic schemas for the admin dashboard API."""

from pydantic import BaseModel, Field

from src.bl_account.domain.models import User
from src.bl_admin.domain.models import DashboardMetrics
from src.bl_alert.domain.models import SystemAlert
from src.bl_common.cents import cents_to_display


class ConfigUpdateRequest(BaseModel):
    payment_key: str = Field(..., min_length=1, max_length=200)
    qr_image_ref: str = Field("", max_length=2048)


class MetricsResponse(BaseModel):
    total_users: int
    open_pools: int
    total_in_game_cents: int
    total_in_game_display: str
    pending_withdrawals: int
    pending_deposits: int
    alert_count: int
    has_critical: bool

    @classmethod
    def from_domain(cls, m: DashboardMetrics) -> "MetricsResponse":
        return cls(
            total_users=m.total_users,
            open_pools=m.open_pools,
            total_in_game_cents=m.total_in_game,
            total_in_game_display=cents_to_display(m.total_in_game),
            pending_withdrawals=m.pending_withdrawals,
            pending_deposits=m.pending_deposits,
            alert_count=m.alert_count,
            has_critical=m.has_critical,
        )


class AdminUserItem(BaseModel):
    user_id: str
    name: str
    email: str
    whatsapp: str
    role: str
    balance_cents: int
    withdrawable_balance_cents: int
    created_at: str

    @classmethod
    def from_domain(cls, user: User) -> "AdminUserItem":
        return cls(
            user_id=user.id,
            name=user.name,
            email=user.email,
            whatsapp=user.whatsapp,
            role=user.role,
            balance_cents=user.balance,
            withdrawable_balance_cents=user.withdrawable_balance,
            created_at=user.created_at.isoformat(),
        )


class AlertItem(BaseModel):
    id: str
    type: str
    message: str
    timestamp: str
    reference_id: str | None = None
    fixed: bool | None = None

    @classmethod
    def from_domain(cls, alert: SystemAlert) -> "AlertItem":
        return cls(
            id=alert.id,
            type=alert.type,
            message=alert.message,
            timestamp=alert.timestamp.isoformat(),
            reference_id=alert.reference_id,
            fixed=alert.fixed,
        )
