from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.time_math import absolute_minute, from_absolute, to_hours
from ..core.enums import AbsenceCategory, IntervalKind


@dataclass(frozen=True)
class Interval:
    """A reconciled [start, end) span. The end may fall on the next day."""

    start_date: date
    start_minute: int
    end_date: date
    end_minute: int
    kind: IntervalKind
    category: Optional[AbsenceCategory] = None

    @classmethod
    def from_absolute(
        cls,
        start_abs: int,
        end_abs: int,
        kind: IntervalKind,
        category: Optional[AbsenceCategory] = None,
    ) -> "Interval":
        start_date, start_minute = from_absolute(start_abs)
        end_date, end_minute = from_absolute(max(start_abs, end_abs))
        return cls(start_date, start_minute, end_date, end_minute, kind, category)

    @property
    def start_abs(self) -> int:
        return absolute_minute(self.start_date, self.start_minute)

    @property
    def end_abs(self) -> int:
        return absolute_minute(self.end_date, self.end_minute)

    @property
    def duration_minutes(self) -> int:
        return max(0, self.end_abs - self.start_abs)

    @property
    def duration_hours(self) -> float:
        return to_hours(self.duration_minutes)

    @property
    def ends_next_day(self) -> bool:
        return self.end_date > self.start_date

    def overlap(self, start_abs: int, end_abs: int) -> int:
        return max(0, min(self.end_abs, end_abs) - max(self.start_abs, start_abs))

    def covers(self, start_abs: int, end_abs: int) -> bool:
        return self.start_abs <= start_abs and self.end_abs >= end_abs


@dataclass(frozen=True)
class PairingResult:
    """Everything the pairing pass derives from one employee's stream."""

    intervals: tuple[Interval, ...]
    stray_gaps: tuple[Interval, ...] = ()
    missing_clock_outs: tuple = ()
    pairs: tuple[tuple[int, int], ...] = ()

    def of_kind(self, kind: IntervalKind) -> list[Interval]:
        return [i for i in self.intervals if i.kind == kind]

    @property
    def work(self) -> list[Interval]:
        return self.of_kind(IntervalKind.WORK)

    @property
    def justified(self) -> list[Interval]:
        return self.of_kind(IntervalKind.JUSTIFIED)

    @property
    def breaks(self) -> list[Interval]:
        return self.of_kind(IntervalKind.BREAK)
