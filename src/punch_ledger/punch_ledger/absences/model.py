from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from ..common.time_math import to_days, to_hours
from ..core.enums import AbsenceCategory


@dataclass(frozen=True)
class AbsenceTotals:
    """Absence minutes per category plus the short-break counters."""

    minutes: Mapping[AbsenceCategory, int] = field(default_factory=dict)
    short_break_count: int = 0
    short_break_minutes: int = 0
    festive_break_minutes: int = 0

    def value(self, category: AbsenceCategory) -> float:
        """Hours, or days for the vacation family."""

        minutes = self.minutes.get(category, 0)
        if category.counts_in_days:
            return to_days(minutes)
        return to_hours(minutes)

    def values(self) -> dict[AbsenceCategory, float]:
        return {
            c: self.value(c)
            for c in AbsenceCategory
            if c != AbsenceCategory.SHORT_BREAK
        }

    @property
    def justified_minutes(self) -> int:
        return sum(self.minutes.values())

    @property
    def short_break_hours(self) -> float:
        return to_hours(self.short_break_minutes)


@dataclass(frozen=True)
class AnnualCredit:
    """Yearly entitlement. Over-consumption is reported, never blocked."""

    category: AbsenceCategory
    entitlement: float
    consumed_ytd: float

    @property
    def remaining(self) -> float:
        return round(self.entitlement - self.consumed_ytd, 2)
