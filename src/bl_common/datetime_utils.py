"""UTC datetime utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_datetime(raw: str) -> datetime:
    """Parse an ISO-8601 record value into an aware UTC datetime."""
    return ensure_utc(datetime.fromisoformat(raw))


def format_datetime(value: datetime) -> str:
    return ensure_utc(value).isoformat()
