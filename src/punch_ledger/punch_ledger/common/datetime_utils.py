from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator, Union

DateLike = Union[date, datetime, str]
TimeLike = Union[time, datetime, str]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def normalize_date(value: DateLike) -> date:
    """Accept a date, a datetime or an ISO string with an optional time part.

    Upstream systems send "2026-01-16", "2026-01-16 00:00:00" or
    "2026-01-16T00:00:00" interchangeably.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid date: {value!r}")

    raw = value.strip().replace("T", " ").split(" ")[0]
    parts = raw.split("-")
    if len(parts) != 3:
        raise ValueError(f"Invalid date: {value!r}")
    year, month, day = (int(p) for p in parts)
    return date(year, month, day)


def normalize_time(value: TimeLike) -> time:
    """Normalize clock values: missing seconds, missing leading zeros,
    or a full timestamp whose time part is what we want.
    """

    if isinstance(value, datetime):
        return value.time().replace(microsecond=0)
    if isinstance(value, time):
        return value.replace(microsecond=0)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid time: {value!r}")

    raw = value.strip()
    if "T" in raw:
        raw = raw.split("T", 1)[1]
    elif " " in raw:
        raw = raw.split(" ")[-1]
    raw = raw.split(".")[0].rstrip("Z")

    parts = raw.split(":")
    if len(parts) < 2:
        raise ValueError(f"Invalid time: {value!r}")
    hours = int(parts[0])
    minutes = int(parts[1])
    seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
    return time(hour=hours, minute=minutes, second=seconds)


def daterange(start: date, end: date) -> Iterator[date]:
    """Inclusive day walk. Bounded by the number of days in the range."""

    for offset in range((end - start).days + 1):
        yield start + timedelta(days=offset)


def year_start(day: date) -> date:
    return date(day.year, 1, 1)
