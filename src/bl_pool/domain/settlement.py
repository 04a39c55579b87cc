"""Pool settlement math: pure, no storage.

total       = sum of stakes
fee         = ceil(total * PLATFORM_FEE_BPS / 10000)
prize_pool  = total - fee
individual  = prize_pool // winners   (equal split, stakes are uniform)

Integer cents: the division remainder (< winner count) stays with the
platform together with the fee. With no winners nothing is paid out and the
platform retains the whole pot.
"""

from collections.abc import Sequence

from src.bl_common.cents import calculate_fee
from src.bl_pool.domain.models import Bet, Payout, SettlementPlan

PLATFORM_FEE_BPS: int = 1000  # 10%


def projected_prize_pool(total_collected: int, fee_bps: int = PLATFORM_FEE_BPS) -> int:
    return total_collected - calculate_fee(total_collected, fee_bps)


def plan_settlement(
    pool_id: str,
    bets: Sequence[Bet],
    winner_option: str,
    fee_bps: int = PLATFORM_FEE_BPS,
) -> SettlementPlan:
    total = sum(b.amount for b in bets)
    fee = calculate_fee(total, fee_bps)
    prize_pool = total - fee
    winners = [b for b in bets if b.option_selected == winner_option]

    individual = prize_pool // len(winners) if winners else 0
    return SettlementPlan(
        pool_id=pool_id,
        winner_option=winner_option,
        total_collected=total,
        fee=fee,
        prize_pool=prize_pool,
        winner_count=len(winners),
        individual_prize=individual,
        payouts=[Payout(user_id=b.user_id, amount=individual) for b in winners],
    )
