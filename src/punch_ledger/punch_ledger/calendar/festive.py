from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Mapping

from ..core.enums import DayType


@dataclass(frozen=True)
class FestiveCalendar:
    """Festive/vacation predicate for one employee.

    An employee calendar override always wins over the company holiday set
    and over the weekend default.
    """

    holidays: frozenset[date] = frozenset()
    overrides: Mapping[date, DayType] = field(default_factory=dict)
    vacation_flags: frozenset[date] = frozenset()

    @staticmethod
    def is_weekend(day: date) -> bool:
        return day.weekday() >= 5

    def is_festive(self, day: date) -> bool:
        override = self.overrides.get(day)
        if override is not None:
            return override == DayType.HOLIDAY
        return day in self.holidays or self.is_weekend(day)

    def is_vacation(self, day: date) -> bool:
        return self.overrides.get(day) == DayType.VACATION or day in self.vacation_flags

    def is_working_day(self, day: date) -> bool:
        """Scheduled to work: weekends only count when an override says so."""
        return not self.is_festive(day)
