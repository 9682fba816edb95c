"""Minute-of-day arithmetic.

Everything is kept in integer minutes; conversion to hours happens once,
at the final aggregation step, so rounding never compounds.
"""

from __future__ import annotations

from datetime import date, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterator, Union

from ..core.constants import HOURS_PER_VACATION_DAY, MINUTES_PER_DAY
from .datetime_utils import normalize_time

_CENTS = Decimal("0.01")


def minutes_of(value: Union[time, str]) -> int:
    """Minute-of-day for a clock value; seconds are dropped."""
    t = normalize_time(value)
    return t.hour * 60 + t.minute


def overlap_minutes(a_start: int, a_end: int, b_start: int, b_end: int) -> int:
    """Overlap of two minute ranges, never negative.

    A range whose end is before its start crosses midnight and is unrolled
    by adding a full day to its end.
    """

    if a_end < a_start:
        a_end += MINUTES_PER_DAY
    if b_end < b_start:
        b_end += MINUTES_PER_DAY
    return max(0, min(a_end, b_end) - max(a_start, b_start))


def to_hours(minutes: int) -> float:
    return float((Decimal(minutes) / Decimal(60)).quantize(_CENTS, rounding=ROUND_HALF_UP))


def to_days(minutes: int, hours_per_day: int = HOURS_PER_VACATION_DAY) -> float:
    return float((Decimal(minutes) / Decimal(60 * hours_per_day)).quantize(_CENTS, rounding=ROUND_HALF_UP))


def absolute_minute(day: date, minute: int) -> int:
    """Minutes since the proleptic epoch; makes cross-day ordering trivial."""
    return day.toordinal() * MINUTES_PER_DAY + minute


def from_absolute(value: int) -> tuple[date, int]:
    ordinal, minute = divmod(value, MINUTES_PER_DAY)
    return date.fromordinal(ordinal), minute


def format_minute(minute: int) -> str:
    minute %= MINUTES_PER_DAY
    return f"{minute // 60:02d}:{minute % 60:02d}"


def split_by_day(start_abs: int, end_abs: int) -> Iterator[tuple[date, int, int]]:
    """Cut an absolute span into (day, start_minute, end_minute) pieces,
    each piece within 0..1440 of its own day.
    """

    cursor = start_abs
    while cursor < end_abs:
        day, minute = from_absolute(cursor)
        piece_end = min(end_abs, absolute_minute(day + timedelta(days=1), 0))
        yield day, minute, minute + (piece_end - cursor)
        cursor = piece_end
