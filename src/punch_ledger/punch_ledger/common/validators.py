from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..core.exceptions import ValidationError


def require_date_range(start: Optional[date], end: Optional[date]) -> tuple[date, date]:
    if start is None or end is None:
        raise ValidationError("Date range is required")
    if end < start:
        raise ValidationError("Date range end must not be before its start")
    return start, end


def require_roster(employee_ids: Optional[Iterable[int]]) -> tuple[int, ...]:
    roster = tuple(sorted({int(e) for e in (employee_ids or ())}))
    if not roster:
        raise ValidationError("Employee roster is required")
    return roster
