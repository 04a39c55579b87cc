"""Domain models for bl_alert."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class SystemAlert:
    id: str
    type: str                        # AlertType value
    message: str
    timestamp: datetime
    reference_id: str | None = None  # dedup key, the pool id for overdue alerts
    fixed: bool | None = None
