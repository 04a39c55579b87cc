"""Integer arithmetic utilities for cents-based balances.

All stakes, prizes and balances use int (cents). No float, no Decimal.
"""


def cents_to_display(cents: int) -> str:
    """Convert cents to display string: 1350 -> 'R$ 13.50', -1200 -> '-R$ 12.00'."""
    if cents < 0:
        abs_cents = -cents
        return f"-R$ {abs_cents // 100:,}.{abs_cents % 100:02d}"
    return f"R$ {cents // 100:,}.{cents % 100:02d}"


def calculate_fee(amount: int, fee_rate_bps: int) -> int:
    """Calculate fee with ceiling division (platform never loses).

    fee = ceil(amount * fee_rate_bps / 10000)
    """
    if amount == 0 or fee_rate_bps == 0:
        return 0
    return (amount * fee_rate_bps + 9999) // 10000
