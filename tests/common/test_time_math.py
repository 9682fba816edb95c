from datetime import date, time

import pytest

from src.punch_ledger.punch_ledger.common.datetime_utils import normalize_date, normalize_time
from src.punch_ledger.punch_ledger.common.time_math import (
    absolute_minute,
    format_minute,
    minutes_of,
    overlap_minutes,
    split_by_day,
    to_days,
    to_hours,
)


def test_minutes_of_drops_seconds():
    assert minutes_of(time(7, 12, 59)) == 432
    assert minutes_of("7:5") == 425


def test_overlap_is_never_negative():
    assert overlap_minutes(0, 60, 120, 180) == 0
    assert overlap_minutes(0, 120, 60, 180) == 60


def test_overlap_unrolls_midnight_crossing():
    # 23:00-01:00 against 23:30-24:00
    assert overlap_minutes(1380, 60, 1410, 1440) == 30


def test_to_hours_rounds_half_up():
    assert to_hours(468) == 7.8
    # 1/60 h = 0.0167
    assert to_hours(1) == 0.02
    assert to_hours(0) == 0.0


def test_to_days_uses_eight_hour_days():
    assert to_days(960) == 2.0
    assert to_days(240) == 0.5


def test_split_by_day_cuts_at_midnight():
    day = date(2026, 1, 5)
    pieces = list(split_by_day(absolute_minute(day, 1380), absolute_minute(day, 1440 + 90)))
    assert pieces == [(day, 1380, 1440), (date(2026, 1, 6), 0, 90)]


def test_format_minute():
    assert format_minute(0) == "00:00"
    assert format_minute(435) == "07:15"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2026-01-16", date(2026, 1, 16)),
        ("2026-01-16 00:00:00", date(2026, 1, 16)),
        ("2026-01-16T08:00:00", date(2026, 1, 16)),
    ],
)
def test_normalize_date_accepts_timestamps(raw, expected):
    assert normalize_date(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("07:00", time(7, 0)),
        ("7:5:3", time(7, 5, 3)),
        ("2026-01-16T15:30:00", time(15, 30)),
        ("2026-01-16 15:30:00.123", time(15, 30)),
    ],
)
def test_normalize_time_is_lenient(raw, expected):
    assert normalize_time(raw) == expected


def test_normalize_time_rejects_garbage():
    with pytest.raises(ValueError):
        normalize_time("soon")
