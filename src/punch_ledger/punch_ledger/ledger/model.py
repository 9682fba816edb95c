from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Mapping, Optional, Sequence

from ..absences.model import AnnualCredit
from ..anomalies.model import AbsentDay, Gap, LateArrival, MissingClockOut, WorkdayDeviation
from ..buckets.model import BucketHours
from ..calendar.period import DateRange
from ..core.constants import MINUTES_PER_DAY
from ..core.enums import AbsenceCategory, DayType
from ..punches.model import DataQualityIssue


@dataclass(frozen=True)
class LedgerRequest:
    """One batch computation: who, when, and the calendar context."""

    employee_ids: Sequence[int]
    start: Optional[date]
    end: Optional[date]
    end_minute: int = MINUTES_PER_DAY
    holidays: frozenset[date] = frozenset()
    overrides: Mapping[int, Mapping[date, DayType]] = field(default_factory=dict)


@dataclass(frozen=True)
class ShiftChange:
    work_date: date
    shift_code: str


@dataclass(frozen=True)
class EmployeeLedger:
    employee_id: int
    period: DateRange
    hours: BucketHours
    absences: Mapping[AbsenceCategory, float]
    absences_ytd: Mapping[AbsenceCategory, float]
    credits: tuple[AnnualCredit, ...]
    short_break_count: int
    short_break_hours: float
    presence_hours: float
    justified_hours: float
    total_hours: float
    late_arrivals: tuple[LateArrival, ...] = ()
    gaps: tuple[Gap, ...] = ()
    deviations: tuple[WorkdayDeviation, ...] = ()
    missing_clock_outs: tuple[MissingClockOut, ...] = ()
    absent_days: tuple[AbsentDay, ...] = ()
    assigned_shift: Optional[str] = None
    shift_changes: tuple[ShiftChange, ...] = ()
    vacation_conflicts: tuple[date, ...] = ()

    @property
    def delay_count(self) -> int:
        return len(self.late_arrivals)

    @property
    def delay_minutes(self) -> int:
        return sum(a.minutes for a in self.late_arrivals)


@dataclass(frozen=True)
class LedgerBatch:
    ledgers: tuple[EmployeeLedger, ...]
    errors: Mapping[int, str] = field(default_factory=dict)
    issues: tuple[DataQualityIssue, ...] = ()

    def for_employee(self, employee_id: int) -> Optional[EmployeeLedger]:
        return next((l for l in self.ledgers if l.employee_id == employee_id), None)
