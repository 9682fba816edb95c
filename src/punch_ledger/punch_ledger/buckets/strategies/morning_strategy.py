from __future__ import annotations

from ...core.enums import Bucket
from .base import BucketStrategy, ClockWindow

_WINDOWS = (
    ClockWindow(Bucket.NIGHT, 0, 7 * 60),
    ClockWindow(Bucket.DAY, 7 * 60, 15 * 60),
    ClockWindow(Bucket.OVERTIME_1, 15 * 60, 20 * 60),
    ClockWindow(Bucket.NIGHT, 20 * 60, 24 * 60),
)


class MorningBucketStrategy(BucketStrategy):
    """Day 07-15, overtime 15-20, night 20-07."""

    def windows(self) -> tuple[ClockWindow, ...]:
        return _WINDOWS
