from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator

from ..common.datetime_utils import daterange, year_start
from ..core.constants import MINUTES_PER_DAY


@dataclass(frozen=True)
class DateRange:
    """Requested analysis period.

    `end_minute` lets a caller stop part-way through the last day; shifts
    starting after it were not observable yet.
    """

    start: date
    end: date
    end_minute: int = MINUTES_PER_DAY

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def days(self) -> Iterator[date]:
        return daterange(self.start, self.end)

    def observable(self, day: date, shift_start_minute: int) -> bool:
        if day < self.end:
            return True
        return day == self.end and shift_start_minute < self.end_minute

    def admits_entry(self, day: date, minute: int) -> bool:
        """Entries after the cut-off on the last day are ignored."""
        return day < self.end or (day == self.end and minute < self.end_minute)

    def extended(self) -> tuple[date, date]:
        """Fetch window: from the start of the year (for credits) or the
        period start, padded by a day on both sides.
        """

        first = min(year_start(self.end), self.start)
        return first - timedelta(days=1), self.end + timedelta(days=1)

    def year_to_date(self) -> "DateRange":
        return DateRange(start=year_start(self.end), end=self.end, end_minute=self.end_minute)
