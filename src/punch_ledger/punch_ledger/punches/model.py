from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Any, Mapping, Optional

from ..common.time_math import absolute_minute
from ..core.enums import (
    ORDINARY_CODES,
    SHORT_BREAK_CODE,
    AbsenceCategory,
    DayType,
    PunchKind,
)


def classify(is_entry: bool, absence_code: Optional[int]) -> PunchKind:
    if is_entry:
        return PunchKind.ORDINARY_ENTRY
    if absence_code in ORDINARY_CODES:
        return PunchKind.ORDINARY_EXIT
    if absence_code == SHORT_BREAK_CODE:
        return PunchKind.SHORT_BREAK_EXIT
    return PunchKind.JUSTIFIED_EXIT


@dataclass(frozen=True)
class PunchRecord:
    """A single clock action, immutable once ingested."""

    employee_id: int
    work_date: date
    clock: time
    is_entry: bool
    absence_code: Optional[int] = None
    range_start: Optional[int] = None
    range_end: Optional[int] = None
    day_type: DayType = DayType.NORMAL
    shift_hint: Optional[str] = None
    kind: PunchKind = field(init=False)
    category: Optional[AbsenceCategory] = field(init=False)

    def __post_init__(self):
        kind = classify(self.is_entry, self.absence_code)
        object.__setattr__(self, "kind", kind)
        category = None if self.is_entry else AbsenceCategory.from_code(self.absence_code)
        object.__setattr__(self, "category", category)

    @property
    def minute(self) -> int:
        return self.clock.hour * 60 + self.clock.minute

    @property
    def absolute(self) -> int:
        return absolute_minute(self.work_date, self.minute)

    @property
    def sort_key(self) -> tuple[date, time]:
        return self.work_date, self.clock

    @property
    def is_exit(self) -> bool:
        return not self.is_entry

    @property
    def has_range(self) -> bool:
        return self.range_start is not None and self.range_end is not None


@dataclass(frozen=True)
class DataQualityIssue:
    """A raw row the engine could not use, kept for human review."""

    row: Mapping[str, Any]
    reason: str
    employee_id: Optional[int] = None
