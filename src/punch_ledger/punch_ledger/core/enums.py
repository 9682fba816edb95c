from __future__ import annotations

from enum import Enum, IntEnum
from typing import Optional


class DayType(IntEnum):
    """Day type as sent by the calendar or carried on a punch."""

    NORMAL = 0
    HOLIDAY = 1
    VACATION = 2

    @classmethod
    def from_flag(cls, value) -> "DayType":
        try:
            return cls(int(value or 0))
        except (TypeError, ValueError):
            return cls.NORMAL


class PunchKind(str, Enum):
    """Shape of a punch, decided once at ingestion."""

    ORDINARY_ENTRY = "ORDINARY_ENTRY"
    ORDINARY_EXIT = "ORDINARY_EXIT"
    JUSTIFIED_EXIT = "JUSTIFIED_EXIT"
    SHORT_BREAK_EXIT = "SHORT_BREAK_EXIT"


class IntervalKind(str, Enum):
    WORK = "WORK"
    JUSTIFIED = "JUSTIFIED"
    BREAK = "BREAK"
    GAP = "GAP"


class AbsenceCategory(str, Enum):
    """Closed set of absence categories, one per absence code."""

    MEDICAL = "medical"
    OFFICIAL_LEAVE = "official_leave"
    PERSONAL_LEAVE = "personal_leave"
    VACATION = "vacation"
    SPECIALIST_ACCIDENT = "specialist_accident"
    FREE_DISPOSAL = "free_disposal"
    VACATION_PRIOR_YEAR = "vacation_prior_year"
    UNION = "union"
    WORK_ACCIDENT_LEAVE = "work_accident_leave"
    COMMON_ILLNESS_LEAVE = "common_illness_leave"
    FAMILY_LAW = "family_law"
    SHORT_BREAK = "short_break"
    OTHER = "other"

    @property
    def counts_in_days(self) -> bool:
        return self in (AbsenceCategory.VACATION, AbsenceCategory.VACATION_PRIOR_YEAR)

    @classmethod
    def from_code(cls, code: Optional[int]) -> Optional["AbsenceCategory"]:
        """Map an absence code to its category.

        Ordinary punches (None/0/1) have no category; unknown codes fall
        into OTHER so new codes degrade gracefully.
        """

        if code in ORDINARY_CODES:
            return None
        return ABSENCE_CODES.get(int(code), cls.OTHER)


ORDINARY_CODES = frozenset({None, 0, 1})
SHORT_BREAK_CODE = 14

ABSENCE_CODES = {
    2: AbsenceCategory.MEDICAL,
    3: AbsenceCategory.OFFICIAL_LEAVE,
    4: AbsenceCategory.PERSONAL_LEAVE,
    5: AbsenceCategory.VACATION,
    6: AbsenceCategory.SPECIALIST_ACCIDENT,
    7: AbsenceCategory.FREE_DISPOSAL,
    8: AbsenceCategory.VACATION_PRIOR_YEAR,
    9: AbsenceCategory.UNION,
    10: AbsenceCategory.WORK_ACCIDENT_LEAVE,
    11: AbsenceCategory.COMMON_ILLNESS_LEAVE,
    13: AbsenceCategory.FAMILY_LAW,
    SHORT_BREAK_CODE: AbsenceCategory.SHORT_BREAK,
}


class Bucket(str, Enum):
    """Time-of-day / day-type accumulators for worked hours."""

    DAY = "day"
    OVERTIME_1 = "overtime_1"
    EVENING = "evening"
    NIGHT = "night"
    FESTIVE = "festive"


class ShiftFamily(str, Enum):
    """Which bucket table applies to a shift."""

    MORNING = "MORNING"
    EVENING = "EVENING"
