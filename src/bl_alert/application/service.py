"""AlertService: operational alerts deduplicated by reference id.

ensure_alert / clear_for_reference stage changes inside the caller's unit
of work; dismiss owns its own commit.
"""

import logging

from src.bl_alert.domain.models import SystemAlert
from src.bl_alert.infrastructure.persistence import AlertRepository
from src.bl_common.database import StoreSession
from src.bl_common.datetime_utils import utc_now
from src.bl_common.enums import AlertType
from src.bl_common.errors import AlertNotFoundError
from src.bl_common.id_generator import generate_id

logger = logging.getLogger(__name__)


class AlertService:
    def __init__(self, repo: AlertRepository | None = None) -> None:
        self._repo = repo or AlertRepository()

    async def list_alerts(self, session: StoreSession) -> list[SystemAlert]:
        return await self._repo.list_alerts(session)

    async def ensure_alert(
        self,
        session: StoreSession,
        reference_id: str,
        message: str,
        alert_type: AlertType = AlertType.CRITICAL,
    ) -> SystemAlert | None:
        """Stage an alert unless one already exists for reference_id. Returns the new alert."""
        if await self._repo.has_reference(session, reference_id):
            return None
        alert = SystemAlert(
            id=generate_id("alert"),
            type=alert_type.value,
            message=message,
            timestamp=utc_now(),
            reference_id=reference_id,
        )
        await self._repo.prepend_alert(session, alert)
        logger.warning("Alert raised: ref=%s type=%s %s", reference_id, alert.type, message)
        return alert

    async def clear_for_reference(self, session: StoreSession, reference_id: str) -> int:
        return await self._repo.delete_where(session, reference_id=reference_id)

    async def dismiss(self, session: StoreSession, alert_id: str) -> None:
        """Delete one alert. The next scan recreates it if its condition still holds."""
        try:
            removed = await self._repo.delete_where(session, alert_id=alert_id)
            if removed == 0:
                raise AlertNotFoundError(alert_id)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        logger.info("Alert dismissed: %s", alert_id)
