"""Login sessions: one record per login in the sessions collection."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from src.bl_common.database import StoreSession
from src.bl_common.datetime_utils import format_datetime, parse_datetime
from src.bl_common.enums import Collection


@dataclass
class LoginSession:
    id: str
    user_id: str
    created_at: datetime


def _record_to_session(record: dict[str, Any]) -> LoginSession:
    return LoginSession(
        id=record["id"],
        user_id=record["userId"],
        created_at=parse_datetime(record["createdAt"]),
    )


class SessionRepository:
    async def get_session(self, session: StoreSession, session_id: str) -> LoginSession | None:
        for record in await session.get(Collection.SESSIONS):
            if record["id"] == session_id:
                return _record_to_session(record)
        return None

    async def add_session(self, session: StoreSession, login: LoginSession) -> None:
        records = await session.get(Collection.SESSIONS)
        records.append(
            {
                "id": login.id,
                "userId": login.user_id,
                "createdAt": format_datetime(login.created_at),
            }
        )
        session.stage(Collection.SESSIONS, records)

    async def delete_session(self, session: StoreSession, session_id: str) -> bool:
        records = await session.get(Collection.SESSIONS)
        kept = [r for r in records if r["id"] != session_id]
        if len(kept) == len(records):
            return False
        session.stage(Collection.SESSIONS, kept)
        return True
