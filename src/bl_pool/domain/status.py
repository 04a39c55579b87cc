"""Pool status derivation.

Stored status is authoritative only for FINISHED. OPEN pools read as
AWAITING_RESULT once the betting deadline passes; the derived value is a
view and is never written back.
"""

import dataclasses
from datetime import datetime, timedelta

from src.bl_common.enums import PoolStatus
from src.bl_pool.domain.models import Pool

# How long past the event a pool may wait for a result before it is flagged
OVERDUE_GRACE = timedelta(hours=1)


def derive_status(pool: Pool, now: datetime) -> PoolStatus:
    if pool.status == PoolStatus.OPEN.value and now >= pool.date_time:
        return PoolStatus.AWAITING_RESULT
    return PoolStatus(pool.status)


def with_derived_status(pool: Pool, now: datetime) -> Pool:
    """Copy of the pool carrying its derived status; the input is left untouched."""
    return dataclasses.replace(
        pool, status=derive_status(pool, now).value, options=list(pool.options)
    )


def is_overdue(pool: Pool, now: datetime) -> bool:
    return (
        derive_status(pool, now) == PoolStatus.AWAITING_RESULT
        and now >= pool.event_date_time + OVERDUE_GRACE
    )


def overdue_message(pool: Pool) -> str:
    return f'REVIEW POOL: "{pool.name}" has not been settled.'
