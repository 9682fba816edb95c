from __future__ import annotations

from datetime import date
from typing import Sequence

from ..calendar.festive import FestiveCalendar
from ..calendar.period import DateRange
from ..core.enums import AbsenceCategory
from ..intervals.model import Interval
from ..punches.stream import PunchStream
from ..shifts.resolver import ShiftResolver
from .detector import AnomalyReport
from .model import AbsentDay

# Leave that on its own explains a missing day.
EXCUSING_CATEGORIES = frozenset(
    {
        AbsenceCategory.MEDICAL,
        AbsenceCategory.WORK_ACCIDENT_LEAVE,
        AbsenceCategory.COMMON_ILLNESS_LEAVE,
    }
)


class AbsentDayScanner:
    """Flag scheduled weekdays with no trace of the employee at all."""

    def __init__(self, calendar: FestiveCalendar, resolver: ShiftResolver):
        self._calendar = calendar
        self._resolver = resolver

    def scan(
        self,
        employee_id: int,
        stream: PunchStream,
        justified: Sequence[Interval],
        report: AnomalyReport,
        period: DateRange,
    ) -> tuple[AbsentDay, ...]:
        flagged = {g.work_date for g in report.gaps}
        flagged.update(d.work_date for d in report.deviations)
        flagged.update(m.work_date for m in report.missing_clock_outs)

        excused: set[date] = set()
        for interval in justified:
            if interval.category in EXCUSING_CATEGORIES:
                excused.add(interval.start_date)
                if interval.end_minute > 0:
                    excused.add(interval.end_date)

        absent = []
        for day in period.days():
            if day.weekday() >= 5 or self._calendar.is_festive(day):
                continue
            window = self._resolver.resolve(employee_id, day, stream.on(day))
            if not period.observable(day, window.start_minute):
                continue
            if stream.has_activity(day) or day in flagged or day in excused:
                continue
            if self._calendar.is_vacation(day):
                continue
            absent.append(AbsentDay(work_date=day))
        return tuple(absent)
