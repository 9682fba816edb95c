from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...core.enums import Bucket


@dataclass(frozen=True)
class ClockWindow:
    """A non-crossing [start, end) slice of the day feeding one bucket."""

    bucket: Bucket
    start_minute: int
    end_minute: int


class BucketStrategy(ABC):
    """Strategy Pattern: how a shift family slices the day into buckets.

    The windows of a strategy must tile 00:00-24:00 exactly once so every
    worked minute lands in exactly one bucket.
    """

    @abstractmethod
    def windows(self) -> tuple[ClockWindow, ...]:
        raise NotImplementedError
