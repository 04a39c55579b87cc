"""ConfigRepository: the config collection holds at most one record."""

from typing import Any

from config.settings import settings
from src.bl_admin.domain.models import AppConfig
from src.bl_common.database import StoreSession
from src.bl_common.enums import Collection


def _record_to_config(record: dict[str, Any]) -> AppConfig:
    return AppConfig(
        payment_key=record.get("paymentKey", settings.DEFAULT_PAYMENT_KEY),
        qr_image_ref=record.get("qrImageRef", ""),
    )


def _config_to_record(config: AppConfig) -> dict[str, Any]:
    return {"paymentKey": config.payment_key, "qrImageRef": config.qr_image_ref}


class ConfigRepository:
    async def get_config(self, session: StoreSession) -> AppConfig:
        records = await session.get(Collection.CONFIG)
        if not records:
            return AppConfig(payment_key=settings.DEFAULT_PAYMENT_KEY)
        return _record_to_config(records[0])

    async def save_config(self, session: StoreSession, config: AppConfig) -> None:
        session.stage(Collection.CONFIG, [_config_to_record(config)])
