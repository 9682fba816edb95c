from __future__ import annotations

from typing import Optional

from ..calendar.festive import FestiveCalendar
from ..common.time_math import absolute_minute, overlap_minutes, split_by_day
from ..core.constants import OVERRUN_BAND_END_MINUTE
from ..core.enums import Bucket, IntervalKind, ShiftFamily
from ..intervals.model import Interval
from ..shifts.model import ShiftWindow
from .factory import BucketStrategyFactory
from .model import BucketMinutes


class BucketAllocator:
    """Split Work intervals across time-of-day and day-type buckets."""

    def __init__(self, calendar: FestiveCalendar, *, factory: Optional[BucketStrategyFactory] = None):
        self._calendar = calendar
        self._factory = factory or BucketStrategyFactory()

    def allocate(
        self,
        interval: Interval,
        window: ShiftWindow,
        *,
        previous_window: Optional[ShiftWindow] = None,
    ) -> BucketMinutes:
        totals = BucketMinutes()
        if interval.kind != IntervalKind.WORK:
            return totals

        if self._calendar.is_festive(interval.start_date):
            carried = self._carry_over_minutes(interval, previous_window)
            totals.add(Bucket.NIGHT, carried)
            totals.add(Bucket.FESTIVE, interval.duration_minutes - carried)
            return totals

        strategy = self._factory.for_shift(window)
        for _, start, end in split_by_day(interval.start_abs, interval.end_abs):
            for w in strategy.windows():
                totals.add(w.bucket, overlap_minutes(start, end, w.start_minute, w.end_minute))
        return totals

    @staticmethod
    def _carry_over_minutes(interval: Interval, previous_window: Optional[ShiftWindow]) -> int:
        """Overrun of yesterday's evening shift into 00:00-06:00 stays Night."""

        if previous_window is None or previous_window.family != ShiftFamily.EVENING:
            return 0
        if interval.start_minute >= OVERRUN_BAND_END_MINUTE:
            return 0
        band_end = absolute_minute(interval.start_date, OVERRUN_BAND_END_MINUTE)
        return interval.overlap(interval.start_abs, band_end)
