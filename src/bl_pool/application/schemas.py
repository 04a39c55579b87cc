"""Pydantic schemas for the bl_pool API."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.bl_common.cents import cents_to_display
from src.bl_pool.domain.models import Bet, Pool, SettlementPlan
from src.bl_pool.domain.settlement import projected_prize_pool

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreatePoolRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    modality: str = Field(..., min_length=1, max_length=60)
    date_time: datetime = Field(..., description="Betting deadline")
    event_date_time: datetime = Field(..., description="When the real-world event happens")
    bet_amount_cents: int = Field(..., gt=0, description="Stake per participant in cents")
    options: list[str] = Field(..., min_length=2, max_length=2)


class BetRequest(BaseModel):
    option: str = Field(..., min_length=1)


class SettleRequest(BaseModel):
    winner_option: str = Field(..., min_length=1)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PoolItem(BaseModel):
    id: str
    creator_id: str
    name: str
    modality: str
    date_time: str
    event_date_time: str
    bet_amount_cents: int
    bet_amount_display: str
    options: list[str]
    status: str
    winner_option: str | None = None
    created_at: str

    @classmethod
    def from_domain(cls, pool: Pool) -> "PoolItem":
        return cls(
            id=pool.id,
            creator_id=pool.creator_id,
            name=pool.name,
            modality=pool.modality,
            date_time=pool.date_time.isoformat(),
            event_date_time=pool.event_date_time.isoformat(),
            bet_amount_cents=pool.bet_amount,
            bet_amount_display=cents_to_display(pool.bet_amount),
            options=list(pool.options),
            status=pool.status,
            winner_option=pool.winner_option,
            created_at=pool.created_at.isoformat(),
        )


class PoolListResponse(BaseModel):
    items: list[PoolItem]


class BetItem(BaseModel):
    id: str
    pool_id: str
    user_id: str
    option_selected: str
    amount_cents: int
    timestamp: str

    @classmethod
    def from_domain(cls, bet: Bet) -> "BetItem":
        return cls(
            id=bet.id,
            pool_id=bet.pool_id,
            user_id=bet.user_id,
            option_selected=bet.option_selected,
            amount_cents=bet.amount,
            timestamp=bet.timestamp.isoformat(),
        )


class PoolDetail(BaseModel):
    pool: PoolItem
    bets: list[BetItem]
    bets_per_option: dict[str, int]
    total_collected_cents: int
    projected_prize_pool_cents: int
    projected_prize_pool_display: str

    @classmethod
    def from_domain(cls, pool: Pool, bets: list[Bet]) -> "PoolDetail":
        total = sum(b.amount for b in bets)
        projected = projected_prize_pool(total)
        return cls(
            pool=PoolItem.from_domain(pool),
            bets=[BetItem.from_domain(b) for b in bets],
            bets_per_option={
                o: sum(1 for b in bets if b.option_selected == o) for o in pool.options
            },
            total_collected_cents=total,
            projected_prize_pool_cents=projected,
            projected_prize_pool_display=cents_to_display(projected),
        )


class MyBetItem(BaseModel):
    bet: BetItem
    pool: PoolItem
    won: bool | None = None  # None until the pool is finished


class MyBetListResponse(BaseModel):
    items: list[MyBetItem]


class SettlementResponse(BaseModel):
    pool_id: str
    winner_option: str
    already_finished: bool = False
    total_collected_cents: int = 0
    fee_cents: int = 0
    prize_pool_cents: int = 0
    winner_count: int = 0
    individual_prize_cents: int = 0
    retained_cents: int = 0

    @classmethod
    def from_plan(cls, plan: SettlementPlan) -> "SettlementResponse":
        return cls(
            pool_id=plan.pool_id,
            winner_option=plan.winner_option,
            total_collected_cents=plan.total_collected,
            fee_cents=plan.fee,
            prize_pool_cents=plan.prize_pool,
            winner_count=plan.winner_count,
            individual_prize_cents=plan.individual_prize,
            retained_cents=plan.retained,
        )
