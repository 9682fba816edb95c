from __future__ import annotations

from collections import Counter
from typing import Iterable, Mapping

from ..calendar.festive import FestiveCalendar
from ..core.enums import AbsenceCategory, IntervalKind
from ..intervals.model import Interval
from .model import AbsenceTotals, AnnualCredit


class AbsenceAccumulator:
    """Route Justified and Break durations into category totals."""

    def __init__(self, calendar: FestiveCalendar):
        self._calendar = calendar

    def accumulate(self, intervals: Iterable[Interval]) -> AbsenceTotals:
        minutes: Counter = Counter()
        breaks = 0
        break_minutes = 0
        festive_break_minutes = 0

        for interval in intervals:
            if interval.kind == IntervalKind.JUSTIFIED:
                minutes[interval.category or AbsenceCategory.OTHER] += interval.duration_minutes
            elif interval.kind == IntervalKind.BREAK:
                breaks += 1
                break_minutes += interval.duration_minutes
                if self._calendar.is_festive(interval.start_date):
                    festive_break_minutes += interval.duration_minutes

        return AbsenceTotals(
            minutes=dict(minutes),
            short_break_count=breaks,
            short_break_minutes=break_minutes,
            festive_break_minutes=festive_break_minutes,
        )

    @staticmethod
    def credits(
        year_to_date: AbsenceTotals, entitlements: Mapping[AbsenceCategory, float]
    ) -> tuple[AnnualCredit, ...]:
        return tuple(
            AnnualCredit(
                category=category,
                entitlement=float(entitlement),
                consumed_ytd=year_to_date.value(category),
            )
            for category, entitlement in sorted(entitlements.items(), key=lambda kv: kv[0].value)
        )
