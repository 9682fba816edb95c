from __future__ import annotations

from datetime import date

from src.punch_ledger.punch_ledger.common.datetime_utils import normalize_time
from src.punch_ledger.punch_ledger.common.time_math import minutes_of
from src.punch_ledger.punch_ledger.core.enums import DayType
from src.punch_ledger.punch_ledger.punches.model import PunchRecord

# 2026-01-05 is a Monday
MONDAY = date(2026, 1, 5)
SATURDAY = date(2026, 1, 10)


def make_punch(
    day: date,
    clock: str,
    *,
    entry: bool,
    code=None,
    explicit=None,
    day_type: DayType = DayType.NORMAL,
    hint=None,
    employee_id: int = 1,
) -> PunchRecord:
    range_start = range_end = None
    if explicit:
        range_start, range_end = (minutes_of(v) for v in explicit)
    return PunchRecord(
        employee_id=employee_id,
        work_date=day,
        clock=normalize_time(clock),
        is_entry=entry,
        absence_code=code,
        range_start=range_start,
        range_end=range_end,
        day_type=day_type,
        shift_hint=hint,
    )
