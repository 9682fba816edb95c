"""Plain-dict views of ledgers for the JSON API."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from ..anomalies.model import Gap
from ..common.time_math import format_minute
from ..punches.model import DataQualityIssue
from ..shifts.model import ShiftWindow
from .model import EmployeeLedger, LedgerBatch


def _minute(value):
    return None if value is None else format_minute(value)


def gap_to_dict(g: Gap) -> dict[str, Any]:
    return {"date": g.work_date.isoformat(), "start": g.start, "end": g.end}


def ledger_to_dict(ledger: EmployeeLedger) -> dict[str, Any]:
    return {
        "employeeId": ledger.employee_id,
        "period": {
            "start": ledger.period.start.isoformat(),
            "end": ledger.period.end.isoformat(),
        },
        "hours": asdict(ledger.hours),
        "absences": {c.value: v for c, v in ledger.absences.items()},
        "absencesYtd": {c.value: v for c, v in ledger.absences_ytd.items()},
        "credits": [
            {
                "category": c.category.value,
                "entitlement": c.entitlement,
                "consumedYtd": c.consumed_ytd,
                "remaining": c.remaining,
            }
            for c in ledger.credits
        ],
        "shortBreaks": {"count": ledger.short_break_count, "hours": ledger.short_break_hours},
        "delays": {"count": ledger.delay_count, "minutes": ledger.delay_minutes},
        "totals": {
            "presence": ledger.presence_hours,
            "justified": ledger.justified_hours,
            "total": ledger.total_hours,
        },
        "assignedShift": ledger.assigned_shift,
        "shiftChanges": [{"date": c.work_date.isoformat(), "shift": c.shift_code} for c in ledger.shift_changes],
        "vacationConflicts": [d.isoformat() for d in ledger.vacation_conflicts],
        "findings": {
            "lateArrivals": [
                {
                    "date": a.work_date.isoformat(),
                    "expectedStart": format_minute(a.expected_start),
                    "actualStart": format_minute(a.actual_start),
                    "minutes": a.minutes,
                }
                for a in ledger.late_arrivals
            ],
            "gaps": [gap_to_dict(g) for g in ledger.gaps],
            "deviations": [
                {
                    "date": d.work_date.isoformat(),
                    "actualHours": d.actual_hours,
                    "firstPunch": _minute(d.first_punch),
                    "lastPunch": _minute(d.last_punch),
                }
                for d in ledger.deviations
            ],
            "missingClockOuts": [
                {"date": m.work_date.isoformat(), "time": format_minute(m.minute)} for m in ledger.missing_clock_outs
            ],
            "absentDays": [a.work_date.isoformat() for a in ledger.absent_days],
        },
    }


def issue_to_dict(issue: DataQualityIssue) -> dict[str, Any]:
    return {"employeeId": issue.employee_id, "reason": issue.reason}


def batch_to_dict(batch: LedgerBatch) -> dict[str, Any]:
    return {
        "success": True,
        "ledgers": [ledger_to_dict(l) for l in batch.ledgers],
        "errors": {str(e): msg for e, msg in batch.errors.items()},
        "issues": [issue_to_dict(i) for i in batch.issues],
    }


def shift_to_dict(window: ShiftWindow) -> dict[str, Any]:
    return {
        "code": window.code,
        "name": window.name,
        "start": format_minute(window.start_minute),
        "end": format_minute(window.end_minute),
        "crossesMidnight": window.crosses_midnight,
        "virtual": window.is_virtual,
    }
