"""AlertRepository over the alerts collection (newest first)."""

from typing import Any

from src.bl_alert.domain.models import SystemAlert
from src.bl_common.database import StoreSession
from src.bl_common.datetime_utils import format_datetime, parse_datetime
from src.bl_common.enums import Collection


def _record_to_alert(record: dict[str, Any]) -> SystemAlert:
    return SystemAlert(
        id=record["id"],
        type=record["type"],
        message=record["message"],
        timestamp=parse_datetime(record["timestamp"]),
        reference_id=record.get("referenceId"),
        fixed=record.get("fixed"),
    )


def _alert_to_record(alert: SystemAlert) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": alert.id,
        "type": alert.type,
        "message": alert.message,
        "timestamp": format_datetime(alert.timestamp),
    }
    if alert.reference_id is not None:
        record["referenceId"] = alert.reference_id
    if alert.fixed is not None:
        record["fixed"] = alert.fixed
    return record


class AlertRepository:
    async def list_alerts(self, session: StoreSession) -> list[SystemAlert]:
        return [_record_to_alert(r) for r in await session.get(Collection.ALERTS)]

    async def has_reference(self, session: StoreSession, reference_id: str) -> bool:
        return any(
            r.get("referenceId") == reference_id for r in await session.get(Collection.ALERTS)
        )

    async def prepend_alert(self, session: StoreSession, alert: SystemAlert) -> None:
        records = await session.get(Collection.ALERTS)
        records.insert(0, _alert_to_record(alert))
        session.stage(Collection.ALERTS, records)

    async def delete_where(
        self,
        session: StoreSession,
        alert_id: str | None = None,
        reference_id: str | None = None,
    ) -> int:
        """Delete alerts matching the id or the reference; returns how many went."""
        records = await session.get(Collection.ALERTS)
        kept = [
            r
            for r in records
            if not (
                (alert_id is not None and r["id"] == alert_id)
                or (reference_id is not None and r.get("referenceId") == reference_id)
            )
        ]
        removed = len(records) - len(kept)
        if removed:
            session.stage(Collection.ALERTS, kept)
        return removed
