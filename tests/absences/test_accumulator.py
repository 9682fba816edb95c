from src.punch_ledger.punch_ledger.absences.accumulator import AbsenceAccumulator
from src.punch_ledger.punch_ledger.absences.model import AbsenceTotals
from src.punch_ledger.punch_ledger.calendar.festive import FestiveCalendar
from src.punch_ledger.punch_ledger.common.time_math import absolute_minute
from src.punch_ledger.punch_ledger.core.enums import AbsenceCategory, IntervalKind
from src.punch_ledger.punch_ledger.intervals.model import Interval

from tests.helpers import MONDAY, SATURDAY


def _interval(day, start, end, kind, category=None):
    return Interval.from_absolute(absolute_minute(day, start), absolute_minute(day, end), kind, category)


def test_justified_minutes_go_to_their_category():
    totals = AbsenceAccumulator(FestiveCalendar()).accumulate(
        [
            _interval(MONDAY, 420, 720, IntervalKind.JUSTIFIED, AbsenceCategory.MEDICAL),
            _interval(MONDAY, 780, 900, IntervalKind.WORK),
            _interval(MONDAY, 720, 780, IntervalKind.JUSTIFIED, AbsenceCategory.UNION),
        ]
    )

    assert totals.value(AbsenceCategory.MEDICAL) == 5.0
    assert totals.value(AbsenceCategory.UNION) == 1.0
    assert totals.justified_minutes == 360


def test_vacation_is_counted_in_days():
    totals = AbsenceAccumulator(FestiveCalendar()).accumulate(
        [
            _interval(MONDAY, 420, 900, IntervalKind.JUSTIFIED, AbsenceCategory.VACATION),
            _interval(MONDAY, 0, 240, IntervalKind.JUSTIFIED, AbsenceCategory.VACATION_PRIOR_YEAR),
        ]
    )

    assert totals.value(AbsenceCategory.VACATION) == 1.0
    assert totals.value(AbsenceCategory.VACATION_PRIOR_YEAR) == 0.5


def test_short_breaks_are_counted_apart():
    totals = AbsenceAccumulator(FestiveCalendar()).accumulate(
        [
            _interval(MONDAY, 600, 620, IntervalKind.BREAK, AbsenceCategory.SHORT_BREAK),
            _interval(SATURDAY, 600, 630, IntervalKind.BREAK, AbsenceCategory.SHORT_BREAK),
        ]
    )

    assert totals.short_break_count == 2
    assert totals.short_break_minutes == 50
    assert totals.festive_break_minutes == 30
    assert totals.justified_minutes == 0
    assert AbsenceCategory.SHORT_BREAK not in totals.values()


def test_each_interval_feeds_one_category():
    intervals = [
        _interval(MONDAY, 420, 480, IntervalKind.JUSTIFIED, c)
        for c in (AbsenceCategory.MEDICAL, AbsenceCategory.UNION, AbsenceCategory.FAMILY_LAW)
    ]
    totals = AbsenceAccumulator(FestiveCalendar()).accumulate(intervals)

    assert sum(totals.minutes.values()) == sum(i.duration_minutes for i in intervals)
    assert all(m == 60 for m in totals.minutes.values())


def test_credits_may_go_negative():
    ytd = AbsenceTotals(minutes={AbsenceCategory.MEDICAL: 20 * 60, AbsenceCategory.VACATION: 2 * 480})
    entitlements = {AbsenceCategory.MEDICAL: 16.0, AbsenceCategory.VACATION: 22.0}

    credits = {c.category: c for c in AbsenceAccumulator.credits(ytd, entitlements)}

    assert credits[AbsenceCategory.MEDICAL].remaining == -4.0
    assert credits[AbsenceCategory.VACATION].consumed_ytd == 2.0
    assert credits[AbsenceCategory.VACATION].remaining == 20.0
    for c in credits.values():
        assert c.remaining == round(c.entitlement - c.consumed_ytd, 2)
