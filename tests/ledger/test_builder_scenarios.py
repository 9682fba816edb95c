from datetime import date, timedelta

from src.punch_ledger.punch_ledger.buckets.model import BucketHours
from src.punch_ledger.punch_ledger.calendar.period import DateRange
from src.punch_ledger.punch_ledger.core.enums import AbsenceCategory, DayType
from src.punch_ledger.punch_ledger.core.settings import EngineSettings
from src.punch_ledger.punch_ledger.ledger.builder import EmployeeLedgerBuilder
from src.punch_ledger.punch_ledger.ledger.model import ShiftChange

from tests.helpers import MONDAY, SATURDAY, make_punch


def _build(*punches, period=None, overrides=None, holidays=None):
    period = period or DateRange(start=MONDAY, end=MONDAY)
    builder = EmployeeLedgerBuilder(EngineSettings(), holidays=holidays)
    return builder.build(1, punches, period, overrides=overrides)


def test_scenario_a_full_morning_shift():
    ledger = _build(
        make_punch(MONDAY, "07:00", entry=True),
        make_punch(MONDAY, "15:00", entry=False),
    )

    assert ledger.hours == BucketHours(day=8.0)
    assert ledger.late_arrivals == ()
    assert ledger.gaps == ()
    assert ledger.deviations == ()
    assert ledger.missing_clock_outs == ()
    assert ledger.absent_days == ()
    assert ledger.presence_hours == 8.0
    assert ledger.assigned_shift == "M"


def test_scenario_b_late_arrival():
    ledger = _build(
        make_punch(MONDAY, "07:12", entry=True),
        make_punch(MONDAY, "15:00", entry=False),
    )

    assert ledger.hours.day == 7.8
    assert ledger.hours.total == 7.8
    assert [a.minutes for a in ledger.late_arrivals] == [12]
    assert [(g.start, g.end) for g in ledger.gaps] == [("07:00", "07:12")]
    assert ledger.delay_count == 1
    assert ledger.delay_minutes == 12


def test_scenario_c_medical_justification():
    ledger = _build(
        make_punch(MONDAY, "07:00", entry=True),
        make_punch(MONDAY, "12:00", entry=False, code=2),
        make_punch(MONDAY, "13:00", entry=True),
        make_punch(MONDAY, "15:00", entry=False),
    )

    assert ledger.absences[AbsenceCategory.MEDICAL] == 5.0
    assert ledger.hours.day == 2.0
    assert ledger.deviations == ()
    assert ledger.justified_hours == 5.0
    assert ledger.total_hours == 7.0


def test_scenario_d_evening_overrun():
    ledger = _build(
        make_punch(MONDAY, "15:00", entry=True),
        make_punch(MONDAY, "23:30", entry=False),
    )

    assert ledger.hours.evening == 8.0
    assert ledger.hours.night == 0.5
    assert ledger.hours.day == 0.0
    assert ledger.gaps == ()


def test_scenario_e_saturday_is_festive():
    ledger = _build(
        make_punch(SATURDAY, "08:00", entry=True),
        make_punch(SATURDAY, "12:00", entry=False),
        period=DateRange(start=SATURDAY, end=SATURDAY),
    )

    assert ledger.hours == BucketHours(festive=4.0)


def test_scenario_f_absent_weekday():
    ledger = _build()

    assert [a.work_date for a in ledger.absent_days] == [MONDAY]
    assert ledger.hours.total == 0.0


def test_festive_short_break_is_credited_to_festive():
    ledger = _build(
        make_punch(SATURDAY, "08:00", entry=True),
        make_punch(SATURDAY, "10:00", entry=False, code=14),
        make_punch(SATURDAY, "10:30", entry=True),
        make_punch(SATURDAY, "12:00", entry=False),
        period=DateRange(start=SATURDAY, end=SATURDAY),
    )

    assert ledger.short_break_count == 1
    assert ledger.short_break_hours == 0.5
    assert ledger.hours.festive == 4.0


def test_punch_holiday_flag_makes_day_festive():
    ledger = _build(
        make_punch(MONDAY, "07:00", entry=True, day_type=DayType.HOLIDAY),
        make_punch(MONDAY, "15:00", entry=False),
    )

    assert ledger.hours == BucketHours(festive=8.0)


def test_year_to_date_credits_include_earlier_months():
    january = date(2026, 1, 12)
    march = date(2026, 3, 2)
    ledger = _build(
        make_punch(january, "00:00", entry=False, code=5),
        make_punch(march, "00:00", entry=False, code=5),
        period=DateRange(start=march, end=march),
    )
    credits = {c.category: c for c in ledger.credits}

    assert ledger.absences[AbsenceCategory.VACATION] == 1.0
    assert ledger.absences_ytd[AbsenceCategory.VACATION] == 2.0
    assert credits[AbsenceCategory.VACATION].remaining == 20.0


def test_entries_after_cut_off_are_ignored():
    tuesday = MONDAY + timedelta(days=1)
    ledger = _build(
        *[make_punch(d, t, entry=e) for d in (MONDAY, tuesday) for t, e in (("07:00", True), ("15:00", False))],
        period=DateRange(start=MONDAY, end=tuesday, end_minute=400),
    )

    assert ledger.hours.day == 8.0
    assert ledger.absent_days == ()


def test_shift_changes_and_vacation_conflicts():
    tuesday = MONDAY + timedelta(days=1)
    wednesday = MONDAY + timedelta(days=2)
    ledger = _build(
        make_punch(MONDAY, "07:00", entry=True),
        make_punch(MONDAY, "15:00", entry=False),
        make_punch(tuesday, "07:00", entry=True),
        make_punch(tuesday, "15:00", entry=False),
        make_punch(wednesday, "15:00", entry=True),
        make_punch(wednesday, "23:00", entry=False),
        period=DateRange(start=MONDAY, end=wednesday),
        overrides={tuesday: DayType.VACATION},
    )

    assert ledger.assigned_shift == "M"
    assert ledger.shift_changes == (ShiftChange(wednesday, "T"),)
    assert ledger.vacation_conflicts == (tuesday,)


def test_build_is_idempotent():
    punches = [
        make_punch(MONDAY, "07:12", entry=True),
        make_punch(MONDAY, "12:00", entry=False, code=4),
        make_punch(MONDAY, "13:00", entry=True),
        make_punch(MONDAY + timedelta(days=1), "00:20", entry=False),
    ]
    period = DateRange(start=MONDAY, end=MONDAY + timedelta(days=4))

    assert _build(*punches, period=period) == _build(*punches, period=period)


def test_credit_arithmetic_holds_for_every_category():
    ledger = _build(
        make_punch(MONDAY, "00:00", entry=False, code=2),
        period=DateRange(start=MONDAY, end=MONDAY + timedelta(days=2)),
    )

    for credit in ledger.credits:
        assert credit.remaining == round(credit.entitlement - credit.consumed_ytd, 2)
    assert {c.category for c in ledger.credits} == {
        AbsenceCategory.MEDICAL,
        AbsenceCategory.VACATION,
        AbsenceCategory.FREE_DISPOSAL,
        AbsenceCategory.FAMILY_LAW,
    }
