from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import ShiftFamily
from ..shifts.model import ShiftWindow
from .strategies.base import BucketStrategy
from .strategies.evening_strategy import EveningBucketStrategy
from .strategies.morning_strategy import MorningBucketStrategy


@dataclass
class BucketStrategyFactory:
    """Factory Pattern: choose the bucket table for a resolved shift."""

    def for_shift(self, window: ShiftWindow) -> BucketStrategy:
        if window.family == ShiftFamily.EVENING:
            return EveningBucketStrategy()
        return MorningBucketStrategy()
