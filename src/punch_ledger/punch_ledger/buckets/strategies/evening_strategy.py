from __future__ import annotations

from ...core.enums import Bucket
from .base import BucketStrategy, ClockWindow

_WINDOWS = (
    ClockWindow(Bucket.NIGHT, 0, 7 * 60),
    ClockWindow(Bucket.DAY, 7 * 60, 15 * 60),
    ClockWindow(Bucket.EVENING, 15 * 60, 23 * 60),
    ClockWindow(Bucket.NIGHT, 23 * 60, 24 * 60),
)


class EveningBucketStrategy(BucketStrategy):
    """Day 07-15 (early arrivals), evening 15-23, night 23-07."""

    def windows(self) -> tuple[ClockWindow, ...]:
        return _WINDOWS
