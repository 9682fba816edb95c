from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from ..calendar.festive import FestiveCalendar
from ..calendar.period import DateRange
from ..common.time_math import absolute_minute, from_absolute, to_hours
from ..core.constants import (
    CLOSING_HOUR_MINUTES,
    DEFAULT_GRACE_MINUTES,
    MAX_GAP_MINUTES,
    MIN_GAP_MINUTES,
    OVERRUN_BAND_END_MINUTE,
    STANDARD_WORKDAY_MINUTES,
    WORKDAY_TOLERANCE_MINUTES,
)
from ..core.enums import IntervalKind, PunchKind, ShiftFamily
from ..intervals.model import Interval, PairingResult
from ..punches.stream import PunchStream
from ..shifts.resolver import ShiftResolver
from .model import Gap, LateArrival, MissingClockOut, WorkdayDeviation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnomalyReport:
    late_arrivals: tuple[LateArrival, ...] = ()
    gaps: tuple[Gap, ...] = ()
    deviations: tuple[WorkdayDeviation, ...] = ()
    missing_clock_outs: tuple[MissingClockOut, ...] = ()

    @property
    def delay_minutes(self) -> int:
        return sum(a.minutes for a in self.late_arrivals)


def _gap(start_abs: int, end_abs: int) -> Gap:
    start_day, start_minute = from_absolute(start_abs)
    end_day, end_minute = from_absolute(end_abs)
    return Gap(start_day, start_minute, end_minute, end_next_day=end_day > start_day)


def _covered(justified: Sequence[Interval], start_abs: int, end_abs: int) -> bool:
    return any(j.covers(start_abs, end_abs) for j in justified)


class AnomalyDetector:
    """Late arrivals, gaps, workday deviations and missing clock-outs.

    Everything is recomputed from the punch stream and the pairing result;
    nothing is carried over between runs.
    """

    def __init__(
        self,
        resolver: ShiftResolver,
        calendar: FestiveCalendar,
        *,
        grace_minutes: int = DEFAULT_GRACE_MINUTES,
    ):
        self._resolver = resolver
        self._calendar = calendar
        self._grace = int(grace_minutes)

    def detect(
        self, employee_id: int, stream: PunchStream, pairing: PairingResult, period: DateRange
    ) -> AnomalyReport:
        justified = pairing.justified
        late, gaps = self._late_arrivals(employee_id, stream, justified, period)
        gaps.extend(self._exit_gaps(employee_id, stream, pairing, justified, period))
        gaps.extend(self._stray_gaps(pairing.stray_gaps, justified, period))
        gaps = _dedupe(gaps)

        deviations = self._deviations(stream, pairing, gaps, period)
        logger.debug("Employee %s: %d gaps, %d deviations", employee_id, len(gaps), len(deviations))
        missing = tuple(m for m in pairing.missing_clock_outs if period.contains(m.work_date))
        return AnomalyReport(
            late_arrivals=tuple(late),
            gaps=tuple(gaps),
            deviations=tuple(deviations),
            missing_clock_outs=missing,
        )

    def _late_arrivals(
        self, employee_id: int, stream: PunchStream, justified: Sequence[Interval], period: DateRange
    ) -> tuple[list[LateArrival], list[Gap]]:
        late: list[LateArrival] = []
        gaps: list[Gap] = []
        for day in stream.days():
            if not period.contains(day) or not self._calendar.is_working_day(day):
                continue
            window = self._resolver.resolve(employee_id, day, stream.on(day))
            if window.is_virtual:
                continue
            first = next((p for p in stream.on(day) if p.is_entry), None)
            if first is None:
                continue

            delay = first.minute - window.start_minute
            if delay <= self._grace:
                continue

            delay_start = absolute_minute(day, window.start_minute)
            delay_end = first.absolute
            residual = delay - sum(j.overlap(delay_start, delay_end) for j in justified)
            if residual < self._grace:
                continue

            late.append(
                LateArrival(
                    work_date=day,
                    expected_start=window.start_minute,
                    actual_start=first.minute,
                    minutes=residual,
                )
            )

            gap_start = delay_start
            covering = next((j for j in justified if j.start_abs <= gap_start < j.end_abs), None)
            if covering is not None:
                gap_start = covering.end_abs
            if gap_start < delay_end:
                gaps.append(_gap(gap_start, delay_end))
        return late, gaps

    def _exit_gaps(
        self,
        employee_id: int,
        stream: PunchStream,
        pairing: PairingResult,
        justified: Sequence[Interval],
        period: DateRange,
    ) -> list[Gap]:
        gaps: list[Gap] = []
        for i, j in pairing.pairs:
            entry, exit_ = stream[i], stream[j]
            if exit_.kind == PunchKind.SHORT_BREAK_EXIT:
                continue
            day = entry.work_date
            if not period.contains(day) or not self._calendar.is_working_day(day):
                continue
            window = self._resolver.resolve(employee_id, day, stream.on(day))
            if window.is_virtual:
                continue

            shift_start, shift_end = window.span_on(day)
            exit_abs = exit_.absolute
            if exit_abs < shift_start:
                continue

            k = stream.find_next(j, lambda p: p.is_entry)
            return_abs: Optional[int] = stream[k].absolute if k is not None else None

            if return_abs is not None and return_abs - exit_abs < MAX_GAP_MINUTES:
                if exit_abs >= shift_end - MIN_GAP_MINUTES:
                    continue
                if return_abs - exit_abs <= MIN_GAP_MINUTES:
                    continue
                if not _covered(justified, exit_abs, return_abs):
                    gaps.append(_gap(exit_abs, return_abs))
                continue

            remaining = shift_end - exit_abs
            if remaining <= CLOSING_HOUR_MINUTES or remaining >= MAX_GAP_MINUTES:
                continue
            if window.family == ShiftFamily.EVENING and exit_.minute < OVERRUN_BAND_END_MINUTE:
                continue
            if not _covered(justified, exit_abs, shift_end):
                gaps.append(_gap(exit_abs, shift_end))
        return gaps

    def _stray_gaps(
        self, stray: Iterable[Interval], justified: Sequence[Interval], period: DateRange
    ) -> list[Gap]:
        gaps = []
        for g in stray:
            if not period.contains(g.start_date) or not self._calendar.is_working_day(g.start_date):
                continue
            if g.duration_minutes <= MIN_GAP_MINUTES or _covered(justified, g.start_abs, g.end_abs):
                continue
            gaps.append(_gap(g.start_abs, g.end_abs))
        return gaps

    def _deviations(
        self, stream: PunchStream, pairing: PairingResult, gaps: Sequence[Gap], period: DateRange
    ) -> list[WorkdayDeviation]:
        worked: dict[int, int] = defaultdict(int)
        breaks: dict[int, int] = defaultdict(int)
        justified_days: set[int] = set()
        for interval in pairing.intervals:
            ordinal = interval.start_date.toordinal()
            if interval.kind == IntervalKind.WORK:
                worked[ordinal] += interval.duration_minutes
            elif interval.kind == IntervalKind.BREAK:
                breaks[ordinal] += interval.duration_minutes
            elif interval.kind == IntervalKind.JUSTIFIED:
                justified_days.add(ordinal)
        justified_days.update(
            p.work_date.toordinal() for p in stream.records if p.kind == PunchKind.JUSTIFIED_EXIT
        )
        gap_days = {g.work_date.toordinal() for g in gaps}

        deviations = []
        for ordinal in sorted(worked):
            day = date.fromordinal(ordinal)
            if not period.contains(day) or not self._calendar.is_working_day(day):
                continue
            effective = worked[ordinal] + breaks[ordinal]
            if effective >= STANDARD_WORKDAY_MINUTES - WORKDAY_TOLERANCE_MINUTES:
                continue
            if ordinal in justified_days:
                continue
            if breaks[ordinal] > 0 and ordinal not in gap_days:
                continue

            day_punches = stream.on(day)
            first = next((p.minute for p in day_punches if p.is_entry), None)
            last = next((p.minute for p in reversed(day_punches) if p.is_exit), None)
            deviations.append(
                WorkdayDeviation(
                    work_date=day,
                    actual_hours=to_hours(worked[ordinal]),
                    first_punch=first,
                    last_punch=last,
                )
            )
        return deviations


def _dedupe(gaps: list[Gap]) -> list[Gap]:
    seen: set = set()
    unique = []
    for g in sorted(gaps, key=lambda g: (g.work_date, g.start_minute, g.end_minute)):
        key = (g.work_date, g.start_minute)
        if key in seen:
            continue
        seen.add(key)
        unique.append(g)
    return unique
