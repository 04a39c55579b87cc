"""Tests for bl_common.datetime_utils and id_generator."""

from datetime import UTC, datetime, timedelta, timezone

from src.bl_common.datetime_utils import ensure_utc, format_datetime, parse_datetime
from src.bl_common.id_generator import generate_id


def test_naive_datetime_is_treated_as_utc() -> None:
    value = ensure_utc(datetime(2026, 1, 1, 10, 0))
    assert value.tzinfo is not None
    assert value.hour == 10


def test_aware_datetime_is_converted_to_utc() -> None:
    brt = timezone(timedelta(hours=-3))
    value = ensure_utc(datetime(2026, 1, 1, 10, 0, tzinfo=brt))
    assert value == datetime(2026, 1, 1, 13, 0, tzinfo=UTC)


def test_format_then_parse_preserves_instant() -> None:
    original = datetime(2026, 5, 17, 20, 30, tzinfo=UTC)
    assert parse_datetime(format_datetime(original)) == original


def test_generate_id_prefix_and_uniqueness() -> None:
    ids = {generate_id("pool") for _ in range(100)}
    assert len(ids) == 100
    assert all(i.startswith("pool_") for i in ids)
