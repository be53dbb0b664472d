from __future__ import annotations

from datetime import datetime

import pytest

from src.kintai_system.kintai_system.common.datetime_utils import parse_iso_datetime
from src.kintai_system.kintai_system.core.exceptions import ValidationError


def test_utc_timestamp_is_converted_to_local_zone():
    assert parse_iso_datetime("2024-01-15T00:00:00Z", "Asia/Tokyo") == datetime(2024, 1, 15, 9, 0)
    assert parse_iso_datetime("2024-01-15T00:00:00+00:00", "Asia/Tokyo") == datetime(2024, 1, 15, 9, 0)


def test_offset_crossing_midnight_moves_the_date():
    assert parse_iso_datetime("2024-01-15T20:30:00-05:00", "Asia/Tokyo") == datetime(2024, 1, 16, 10, 30)


def test_naive_timestamp_is_kept_as_wall_clock():
    assert parse_iso_datetime("2024-01-15T09:00:00", "Asia/Tokyo") == datetime(2024, 1, 15, 9, 0)


def test_empty_is_none():
    assert parse_iso_datetime(None) is None
    assert parse_iso_datetime("") is None


@pytest.mark.parametrize("value", ["not a time", "2024-13-01T00:00:00", 1705276800])
def test_invalid_timestamps_are_rejected(value):
    with pytest.raises(ValidationError):
        parse_iso_datetime(value, "Asia/Tokyo")
