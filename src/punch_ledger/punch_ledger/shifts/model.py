from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..common.time_math import absolute_minute
from ..core.constants import MINUTES_PER_DAY
from ..core.enums import ShiftFamily

EVENING_FAMILY_FROM_MINUTE = 14 * 60


@dataclass(frozen=True)
class ShiftWindow:
    """Theoretical shift window. Virtual windows (start == end) mark
    vacation/free/holiday assignments with no working hours.
    """

    code: str
    name: str
    start_minute: int
    end_minute: int
    aliases: tuple[str, ...] = ()

    @property
    def crosses_midnight(self) -> bool:
        return self.end_minute < self.start_minute

    @property
    def is_virtual(self) -> bool:
        return self.start_minute == self.end_minute

    @property
    def length_minutes(self) -> int:
        if self.is_virtual:
            return 0
        return (self.end_minute - self.start_minute) % MINUTES_PER_DAY

    @property
    def family(self) -> ShiftFamily:
        if not self.is_virtual and self.start_minute >= EVENING_FAMILY_FROM_MINUTE:
            return ShiftFamily.EVENING
        return ShiftFamily.MORNING

    def span_on(self, day: date) -> tuple[int, int]:
        """Absolute [start, end) of this shift when it starts on `day`."""
        start = absolute_minute(day, self.start_minute)
        return start, start + self.length_minutes

    def matches(self, hint: str) -> bool:
        key = hint.strip().upper()
        return key == self.code.upper() or key == self.name.upper() or key in self.aliases
