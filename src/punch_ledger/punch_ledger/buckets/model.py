from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from ..common.time_math import to_hours
from ..core.enums import Bucket


@dataclass
class BucketMinutes:
    """Mutable per-employee accumulator; minutes only."""

    minutes: dict[Bucket, int] = field(default_factory=lambda: {b: 0 for b in Bucket})

    def add(self, bucket: Bucket, minutes: int) -> None:
        if minutes:
            self.minutes[bucket] += int(minutes)

    def merge(self, other: "BucketMinutes") -> None:
        for bucket, minutes in other.minutes.items():
            self.add(bucket, minutes)

    @property
    def total(self) -> int:
        return sum(self.minutes.values())

    def to_hours(self) -> "BucketHours":
        return BucketHours.from_minutes(self.minutes)


@dataclass(frozen=True)
class BucketHours:
    day: float = 0.0
    overtime_1: float = 0.0
    evening: float = 0.0
    night: float = 0.0
    festive: float = 0.0

    @classmethod
    def from_minutes(cls, minutes: Mapping[Bucket, int]) -> "BucketHours":
        return cls(**{b.value: to_hours(minutes.get(b, 0)) for b in Bucket})

    @property
    def total(self) -> float:
        return round(self.day + self.overtime_1 + self.evening + self.night + self.festive, 2)
