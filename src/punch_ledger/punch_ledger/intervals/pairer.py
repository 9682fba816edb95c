from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..common.time_math import absolute_minute
from ..core.constants import (
    DEFAULT_GRACE_MINUTES,
    MAX_SHORT_BREAK_MINUTES,
    MINUTES_PER_DAY,
    RANGE_ANCHOR_TOLERANCE_MINUTES,
    SCAN_BUDGET_FACTOR,
)
from ..core.enums import AbsenceCategory, IntervalKind, PunchKind
from ..core.exceptions import IterationLimitExceeded
from ..anomalies.model import MissingClockOut
from ..punches.model import PunchRecord
from ..punches.stream import PunchStream
from ..shifts.model import ShiftWindow
from ..shifts.resolver import ShiftResolver
from ..shifts.table import MORNING
from .model import Interval, PairingResult

logger = logging.getLogger(__name__)


def _is_entry(p: PunchRecord) -> bool:
    return p.is_entry


def _is_exit(p: PunchRecord) -> bool:
    return p.is_exit


@dataclass
class _Collected:
    work: list[Interval] = field(default_factory=list)
    justified: list[Interval] = field(default_factory=list)
    breaks: list[Interval] = field(default_factory=list)
    stray_gaps: list[Interval] = field(default_factory=list)
    missing: list[MissingClockOut] = field(default_factory=list)
    pairs: list[tuple[int, int]] = field(default_factory=list)


class IntervalPairer:
    """Walk a sorted punch stream and emit typed intervals.

    The cursor only moves forward: every handler returns the next index,
    so a consumed pair is never looked at twice.
    """

    def __init__(self, resolver: ShiftResolver, *, grace_minutes: int = DEFAULT_GRACE_MINUTES):
        self._resolver = resolver
        self._grace = int(grace_minutes)

    def pair(self, employee_id: int, stream: PunchStream) -> PairingResult:
        for day in stream.days():
            self._resolver.resolve(employee_id, day, stream.on(day))

        out = _Collected()
        budget = len(stream) * SCAN_BUDGET_FACTOR + 1
        cursor = 0
        for _ in range(budget):
            if cursor >= len(stream):
                break
            cursor = self._step(employee_id, stream, cursor, out)
        else:
            raise IterationLimitExceeded("IntervalPairer", budget)

        cutters = out.justified + out.breaks
        work = [piece for w in out.work for piece in _carve(w, cutters)]
        intervals = sorted(work + out.justified + out.breaks, key=lambda i: (i.start_abs, i.end_abs))
        return PairingResult(
            intervals=tuple(intervals),
            stray_gaps=tuple(out.stray_gaps),
            missing_clock_outs=tuple(out.missing),
            pairs=tuple(out.pairs),
        )

    def _window(self, employee_id: int, stream: PunchStream, p: PunchRecord) -> ShiftWindow:
        return self._resolver.resolve(employee_id, p.work_date, stream.on(p.work_date))

    def _step(self, employee_id: int, stream: PunchStream, i: int, out: _Collected) -> int:
        p = stream[i]
        if p.is_entry:
            return self._pair_entry(employee_id, stream, i, out)

        if p.kind == PunchKind.JUSTIFIED_EXIT:
            absence = self._standalone_absence(employee_id, stream, i)
            if absence is not None:
                out.justified.append(absence)
        elif p.kind == PunchKind.SHORT_BREAK_EXIT:
            taj = self._break_after(stream, i, self._window(employee_id, stream, p), p)
            if taj is not None:
                out.breaks.append(taj)
        else:
            k = stream.find_next(i, _is_entry, same_day=True)
            if k is not None and stream[k].absolute > p.absolute:
                out.stray_gaps.append(Interval.from_absolute(p.absolute, stream[k].absolute, IntervalKind.GAP))
        return i + 1

    def _pair_entry(self, employee_id: int, stream: PunchStream, i: int, out: _Collected) -> int:
        entry = stream[i]
        window = self._window(employee_id, stream, entry)
        j = stream.find_next(i, _is_exit, stop=_is_entry)

        if j is None:
            if not self._closed_by_justification(stream, i, window):
                out.missing.append(MissingClockOut(work_date=entry.work_date, minute=entry.minute))
            return i + 1

        exit_ = stream[j]
        out.pairs.append((i, j))
        start_abs, end_abs = entry.absolute, exit_.absolute
        anchored = _anchored_range(entry, exit_)
        if anchored is not None:
            start_abs, end_abs = anchored

        if end_abs <= start_abs:
            logger.debug("Zero-length pair for employee %s on %s", employee_id, entry.work_date)
            return j + 1

        if exit_.kind == PunchKind.JUSTIFIED_EXIT:
            out.justified.append(Interval.from_absolute(start_abs, end_abs, IntervalKind.JUSTIFIED, exit_.category))
        elif exit_.kind == PunchKind.SHORT_BREAK_EXIT and anchored is not None:
            out.breaks.append(
                Interval.from_absolute(start_abs, end_abs, IntervalKind.BREAK, AbsenceCategory.SHORT_BREAK)
            )
        else:
            start_abs = self._courtesy_start(entry, start_abs, window)
            out.work.append(Interval.from_absolute(start_abs, end_abs, IntervalKind.WORK))
            if exit_.kind == PunchKind.SHORT_BREAK_EXIT:
                taj = self._break_after(stream, j, window, entry)
                if taj is not None:
                    out.breaks.append(taj)
        return j + 1

    def _courtesy_start(self, entry: PunchRecord, start_abs: int, window: ShiftWindow) -> int:
        """Arrivals within the grace period count from the shift start."""

        if window.is_virtual:
            return start_abs
        shift_start = absolute_minute(entry.work_date, window.start_minute)
        if shift_start < start_abs <= shift_start + self._grace:
            return shift_start
        return start_abs

    def _closed_by_justification(self, stream: PunchStream, i: int, window: ShiftWindow) -> bool:
        entry = stream[i]
        if window.is_virtual:
            return False
        _, shift_end = window.span_on(entry.work_date)

        def closes_shift(p: PunchRecord) -> bool:
            if p.kind != PunchKind.JUSTIFIED_EXIT or not p.has_range:
                return False
            end = absolute_minute(p.work_date, p.range_end)
            if p.range_end < p.range_start:
                end += MINUTES_PER_DAY
            return abs(end - shift_end) <= RANGE_ANCHOR_TOLERANCE_MINUTES

        return stream.find_next(i, closes_shift, same_day=True) is not None

    def _standalone_absence(self, employee_id: int, stream: PunchStream, i: int) -> Optional[Interval]:
        """A justified exit with no entry before it: an absence period on its own."""

        p = stream[i]
        window = self._window(employee_id, stream, p)
        if window.is_virtual:
            window = MORNING
        shift_start, shift_end = window.span_on(p.work_date)

        if p.has_range:
            start = absolute_minute(p.work_date, p.range_start)
            end = absolute_minute(p.work_date, p.range_end)
            if end < start:
                end += MINUTES_PER_DAY
        elif p.minute == 0:
            start, end = shift_start, shift_end
        else:
            start = p.absolute
            k = stream.find_next(i, _is_entry, same_day=True)
            end = stream[k].absolute if k is not None else shift_end

        start, end = max(start, shift_start), min(end, shift_end)
        if end <= start:
            return None
        return Interval.from_absolute(start, end, IntervalKind.JUSTIFIED, p.category)

    def _break_after(
        self, stream: PunchStream, j: int, window: ShiftWindow, anchor: PunchRecord
    ) -> Optional[Interval]:
        """Short break from the exit to the return, or to the shift end."""

        exit_ = stream[j]
        if j + 1 < len(stream) and stream[j + 1].is_entry:
            end = stream[j + 1].absolute
        elif window.is_virtual:
            return None
        else:
            end = window.span_on(anchor.work_date)[1]

        duration = end - exit_.absolute
        if 0 < duration < MAX_SHORT_BREAK_MINUTES:
            return Interval.from_absolute(exit_.absolute, end, IntervalKind.BREAK, AbsenceCategory.SHORT_BREAK)
        return None


def _anchored_range(entry: PunchRecord, exit_: PunchRecord) -> Optional[tuple[int, int]]:
    """Explicit range on the exit, if it sits on both punch times (±1 min)."""

    if not exit_.has_range:
        return None
    tolerance = RANGE_ANCHOR_TOLERANCE_MINUTES
    if abs(entry.minute - exit_.range_start) > tolerance or abs(exit_.minute - exit_.range_end) > tolerance:
        return None
    start = absolute_minute(entry.work_date, exit_.range_start)
    end = absolute_minute(entry.work_date, exit_.range_end)
    if end < start:
        end += MINUTES_PER_DAY
    return start, end


def _carve(work: Interval, cutters: list[Interval]) -> list[Interval]:
    """Remove justified/break spans from a work interval."""

    pieces = [(work.start_abs, work.end_abs)]
    for c in cutters:
        if c.end_abs <= work.start_abs or c.start_abs >= work.end_abs:
            continue
        remaining = []
        for s, e in pieces:
            if c.end_abs <= s or c.start_abs >= e:
                remaining.append((s, e))
                continue
            if s < c.start_abs:
                remaining.append((s, c.start_abs))
            if c.end_abs < e:
                remaining.append((c.end_abs, e))
        pieces = remaining
    return [Interval.from_absolute(s, e, IntervalKind.WORK) for s, e in pieces if e > s]
