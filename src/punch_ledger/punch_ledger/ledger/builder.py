from __future__ import annotations

import logging
from collections import Counter
from datetime import date, timedelta
from typing import Iterable, Mapping, Optional, Sequence

from ..absences.accumulator import AbsenceAccumulator
from ..anomalies.absent_days import AbsentDayScanner
from ..anomalies.detector import AnomalyDetector
from ..buckets.allocator import BucketAllocator
from ..buckets.factory import BucketStrategyFactory
from ..buckets.model import BucketMinutes
from ..calendar.festive import FestiveCalendar
from ..calendar.period import DateRange
from ..common.time_math import to_hours
from ..core.enums import Bucket, DayType, IntervalKind, PunchKind
from ..core.settings import EngineSettings
from ..intervals.model import Interval
from ..intervals.pairer import IntervalPairer
from ..punches.model import PunchRecord
from ..punches.stream import PunchStream
from ..shifts.model import ShiftWindow
from ..shifts.resolver import ShiftResolver
from ..shifts.table import DEFAULT_SHIFT_TABLE
from .model import EmployeeLedger, ShiftChange

logger = logging.getLogger(__name__)


class EmployeeLedgerBuilder:
    """Run the whole pipeline for one employee.

    pair -> allocate / accumulate -> detect -> scan absent days.
    Each build gets its own ShiftResolver, so no cache outlives the run.
    """

    def __init__(
        self,
        settings: EngineSettings,
        *,
        shift_table: Sequence[ShiftWindow] = DEFAULT_SHIFT_TABLE,
        holidays: Optional[Iterable[date]] = None,
        factory: Optional[BucketStrategyFactory] = None,
    ):
        self._settings = settings
        self._table = tuple(shift_table)
        self._holidays = frozenset(settings.holidays if holidays is None else holidays)
        self._factory = factory or BucketStrategyFactory()

    def build(
        self,
        employee_id: int,
        punches: Iterable[PunchRecord],
        period: DateRange,
        *,
        overrides: Optional[Mapping[date, DayType]] = None,
    ) -> EmployeeLedger:
        punches = [p for p in punches if p.employee_id == employee_id]
        admitted = [p for p in punches if p.is_exit or period.admits_entry(p.work_date, p.minute)]
        if len(admitted) != len(punches):
            logger.debug(
                "Employee %s: %d entries after the cut-off ignored", employee_id, len(punches) - len(admitted)
            )

        calendar = self._calendar_for(punches, overrides or {})
        resolver = ShiftResolver(self._table, early_arrival_penalty=self._settings.early_arrival_penalty)
        stream = PunchStream(admitted)

        pairing = IntervalPairer(resolver, grace_minutes=self._settings.grace_minutes).pair(employee_id, stream)
        in_period = [i for i in pairing.intervals if period.contains(i.start_date)]
        year_to_date = period.year_to_date()
        in_year = [i for i in pairing.intervals if year_to_date.contains(i.start_date)]

        accumulator = AbsenceAccumulator(calendar)
        totals = accumulator.accumulate(in_period)
        totals_ytd = accumulator.accumulate(in_year)

        buckets = self._allocate(employee_id, in_period, calendar, resolver)
        buckets.add(Bucket.FESTIVE, totals.festive_break_minutes)

        report = AnomalyDetector(resolver, calendar, grace_minutes=self._settings.grace_minutes).detect(
            employee_id, stream, pairing, period
        )
        absent = AbsentDayScanner(calendar, resolver).scan(employee_id, stream, pairing.justified, report, period)

        presence_minutes = sum(i.duration_minutes for i in in_period if i.kind == IntervalKind.WORK)
        justified_minutes = totals.justified_minutes
        assigned, changes = self._shift_summary(employee_id, stream, period, resolver)

        logger.debug(
            "Employee %s: %d intervals, %d late arrivals, %d gaps",
            employee_id,
            len(in_period),
            len(report.late_arrivals),
            len(report.gaps),
        )
        return EmployeeLedger(
            employee_id=employee_id,
            period=period,
            hours=buckets.to_hours(),
            absences=totals.values(),
            absences_ytd=totals_ytd.values(),
            credits=AbsenceAccumulator.credits(totals_ytd, self._settings.entitlements),
            short_break_count=totals.short_break_count,
            short_break_hours=totals.short_break_hours,
            presence_hours=to_hours(presence_minutes),
            justified_hours=to_hours(justified_minutes),
            total_hours=to_hours(presence_minutes + justified_minutes + totals.short_break_minutes),
            late_arrivals=report.late_arrivals,
            gaps=report.gaps,
            deviations=report.deviations,
            missing_clock_outs=report.missing_clock_outs,
            absent_days=absent,
            assigned_shift=assigned,
            shift_changes=changes,
            vacation_conflicts=self._vacation_conflicts(stream, period, calendar),
        )

    def _calendar_for(self, punches: Sequence[PunchRecord], overrides: Mapping[date, DayType]) -> FestiveCalendar:
        holidays = set(self._holidays)
        holidays.update(p.work_date for p in punches if p.day_type == DayType.HOLIDAY)
        vacation = frozenset(p.work_date for p in punches if p.day_type == DayType.VACATION)
        return FestiveCalendar(
            holidays=frozenset(holidays),
            overrides={d: DayType.from_flag(t) for d, t in overrides.items()},
            vacation_flags=vacation,
        )

    def _allocate(
        self,
        employee_id: int,
        intervals: Sequence[Interval],
        calendar: FestiveCalendar,
        resolver: ShiftResolver,
    ) -> BucketMinutes:
        allocator = BucketAllocator(calendar, factory=self._factory)
        totals = BucketMinutes()
        for interval in intervals:
            window = resolver.cached(employee_id, interval.start_date) or resolver.resolve(
                employee_id, interval.start_date, ()
            )
            previous = resolver.cached(employee_id, interval.start_date - timedelta(days=1))
            totals.merge(allocator.allocate(interval, window, previous_window=previous))
        return totals

    @staticmethod
    def _shift_summary(
        employee_id: int, stream: PunchStream, period: DateRange, resolver: ShiftResolver
    ) -> tuple[Optional[str], tuple[ShiftChange, ...]]:
        worked: list[tuple[date, ShiftWindow]] = []
        for day in stream.days():
            if not period.contains(day) or not any(p.is_entry for p in stream.on(day)):
                continue
            window = resolver.resolve(employee_id, day, stream.on(day))
            if not window.is_virtual:
                worked.append((day, window))
        if not worked:
            return None, ()

        dominant, _ = Counter(w.code for _, w in worked).most_common(1)[0]
        changes = tuple(ShiftChange(day, w.code) for day, w in worked if w.code != dominant)
        return dominant, changes

    @staticmethod
    def _vacation_conflicts(stream: PunchStream, period: DateRange, calendar: FestiveCalendar) -> tuple[date, ...]:
        return tuple(
            day
            for day in stream.days()
            if period.contains(day)
            and calendar.is_vacation(day)
            and any(p.kind == PunchKind.ORDINARY_ENTRY for p in stream.on(day))
        )
