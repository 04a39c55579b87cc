"""Domain models for bl_admin."""

from dataclasses import dataclass


@dataclass
class AppConfig:
    """Payment instructions shown to users on the deposit screen."""

    payment_key: str
    qr_image_ref: str = ""


@dataclass
class DashboardMetrics:
    total_users: int
    open_pools: int
    total_in_game: int          # cents staked in pools that are not FINISHED
    pending_withdrawals: int
    pending_deposits: int
    alert_count: int
    has_critical: bool
