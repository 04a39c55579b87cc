"""Domain models for bl_pool: pure dataclasses, no business logic."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Pool:
    id: str
    creator_id: str
    name: str
    modality: str
    date_time: datetime          # betting deadline
    event_date_time: datetime    # real-world event time
    bet_amount: int              # cents, identical stake for every participant
    options: list[str]           # exactly two outcome labels
    status: str                  # PoolStatus value (stored; see derive_status)
    created_at: datetime
    winner_option: str | None = None


@dataclass
class Bet:
    id: str
    pool_id: str
    user_id: str
    option_selected: str
    amount: int                  # cents, copied from pool.bet_amount
    timestamp: datetime


@dataclass(frozen=True)
class Payout:
    user_id: str
    amount: int


@dataclass
class SettlementPlan:
    """Outcome of splitting a pool's collected stakes among its winners."""

    pool_id: str
    winner_option: str
    total_collected: int
    fee: int
    prize_pool: int
    winner_count: int
    individual_prize: int
    payouts: list[Payout] = field(default_factory=list)

    @property
    def total_paid(self) -> int:
        return sum(p.amount for p in self.payouts)

    @property
    def retained(self) -> int:
        """Everything not paid out: the fee, rounding dust, or the whole pot when nobody won."""
        return self.total_collected - self.total_paid
