from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from ..common.datetime_utils import normalize_date, normalize_time
from ..common.time_math import minutes_of
from ..core.enums import DayType
from .model import DataQualityIssue, PunchRecord

logger = logging.getLogger(__name__)

_TRUTHY = {True, 1, "1", "true", "True"}
_FALSY = {False, 0, "0", "false", "False"}


def _parse_flag(value: Any) -> bool:
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"Invalid isEntry flag: {value!r}")


def _parse_code(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


def _parse_range_bound(value: Any) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    minute = minutes_of(value)
    # 00:00 is how upstream says "no range".
    return minute or None


def parse_punch(row: Mapping[str, Any]) -> PunchRecord:
    """Build a PunchRecord from the camelCase transport shape.

    Raises ValueError/TypeError/KeyError when the row cannot be normalized.
    """

    if not isinstance(row, Mapping):
        raise TypeError(f"Punch row must be an object, got {type(row).__name__}")

    range_start = _parse_range_bound(row.get("explicitStart"))
    range_end = _parse_range_bound(row.get("explicitEnd"))
    if range_start is None or range_end is None:
        range_start = range_end = None

    hint = row.get("shiftHint")
    return PunchRecord(
        employee_id=int(row["employeeId"]),
        work_date=normalize_date(row["date"]),
        clock=normalize_time(row["time"]),
        is_entry=_parse_flag(row.get("isEntry")),
        absence_code=_parse_code(row.get("absenceCode")),
        range_start=range_start,
        range_end=range_end,
        day_type=DayType.from_flag(row.get("dayTypeFlag")),
        shift_hint=str(hint).strip() if hint is not None and str(hint).strip() else None,
    )


def ingest_rows(rows: Iterable[Mapping[str, Any]]) -> tuple[list[PunchRecord], list[DataQualityIssue]]:
    """Parse every row; bad rows are skipped and reported, never fatal."""

    records: list[PunchRecord] = []
    issues: list[DataQualityIssue] = []
    for row in rows:
        try:
            records.append(parse_punch(row))
        except (KeyError, TypeError, ValueError) as exc:
            employee_id = None
            if isinstance(row, Mapping):
                try:
                    employee_id = int(row.get("employeeId"))
                except (TypeError, ValueError):
                    pass
            reason = f"{type(exc).__name__}: {exc}"
            logger.warning("Skipping punch for employee %s: %s", employee_id, reason)
            raw = dict(row) if isinstance(row, Mapping) else {"value": row}
            issues.append(DataQualityIssue(row=raw, reason=reason, employee_id=employee_id))
    return records, issues
