from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Optional, Union

from ..common.time_math import format_minute


@dataclass(frozen=True)
class LateArrival:
    tag: ClassVar[str] = "late_arrival"

    work_date: date
    expected_start: int
    actual_start: int
    minutes: int


@dataclass(frozen=True)
class Gap:
    """Unexplained clock-off span inside a scheduled shift."""

    tag: ClassVar[str] = "gap"

    work_date: date
    start_minute: int
    end_minute: int
    end_next_day: bool = False

    @property
    def start(self) -> str:
        return format_minute(self.start_minute)

    @property
    def end(self) -> str:
        suffix = " (+1)" if self.end_next_day else ""
        return f"{format_minute(self.end_minute)}{suffix}"


@dataclass(frozen=True)
class WorkdayDeviation:
    tag: ClassVar[str] = "workday_deviation"

    work_date: date
    actual_hours: float
    first_punch: Optional[int] = None
    last_punch: Optional[int] = None


@dataclass(frozen=True)
class MissingClockOut:
    tag: ClassVar[str] = "missing_clock_out"

    work_date: date
    minute: int


@dataclass(frozen=True)
class AbsentDay:
    tag: ClassVar[str] = "absent_day"

    work_date: date


Finding = Union[LateArrival, Gap, WorkdayDeviation, MissingClockOut, AbsentDay]
