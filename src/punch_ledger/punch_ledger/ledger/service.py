from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Optional, Sequence

from ..calendar.period import DateRange
from ..common.validators import require_date_range, require_roster
from ..core.enums import DayType
from ..core.exceptions import IterationLimitExceeded
from ..core.settings import EngineSettings
from ..punches.model import DataQualityIssue
from ..punches.repository import PunchRepository
from ..shifts.model import ShiftWindow
from ..shifts.table import DEFAULT_SHIFT_TABLE
from .builder import EmployeeLedgerBuilder
from .model import EmployeeLedger, LedgerBatch, LedgerRequest

logger = logging.getLogger(__name__)


class LedgerService:
    def __init__(
        self,
        punches: PunchRepository,
        settings: EngineSettings,
        *,
        shift_table: Sequence[ShiftWindow] = DEFAULT_SHIFT_TABLE,
    ):
        self._punches = punches
        self._settings = settings
        self._table = tuple(shift_table)

    def compute(self, request: LedgerRequest, *, issues: Sequence[DataQualityIssue] = ()) -> LedgerBatch:
        """Compute one ledger per rostered employee.

        Raises ValidationError for a missing roster or date range; anything
        that goes wrong for a single employee is reported in `errors`.
        """

        roster = require_roster(request.employee_ids)
        start, end = require_date_range(request.start, request.end)
        period = DateRange(start=start, end=end, end_minute=request.end_minute)
        fetch_start, fetch_end = period.extended()

        punches = {e: list(self._punches.list_for_employee(e, fetch_start, fetch_end)) for e in roster}
        holidays = self._holidays(request, punches.values())
        builder = EmployeeLedgerBuilder(self._settings, shift_table=self._table, holidays=holidays)

        def run(employee_id: int) -> tuple[int, Optional[EmployeeLedger], Optional[str]]:
            try:
                ledger = builder.build(
                    employee_id,
                    punches[employee_id],
                    period,
                    overrides=request.overrides.get(employee_id, {}),
                )
                return employee_id, ledger, None
            except IterationLimitExceeded as e:
                logger.error("Ledger for employee %s aborted: %s", employee_id, e)
                return employee_id, None, str(e)

        workers = min(self._settings.max_workers, len(roster))
        if workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                results = list(pool.map(run, roster))
        else:
            results = [run(e) for e in roster]

        ledgers = tuple(ledger for _, ledger, _ in results if ledger is not None)
        errors = {e: msg for e, _, msg in results if msg is not None}
        logger.info(
            "Computed %d ledgers for %s..%s (%d errors, %d data issues)",
            len(ledgers),
            start,
            end,
            len(errors),
            len(issues),
        )
        return LedgerBatch(ledgers=ledgers, errors=errors, issues=tuple(issues))

    def _holidays(self, request: LedgerRequest, batches) -> frozenset[date]:
        """Configured holidays, request holidays and any day a punch flags
        as a company holiday, shared by the whole batch.
        """

        holidays = set(self._settings.holidays) | set(request.holidays)
        for records in batches:
            holidays.update(p.work_date for p in records if p.day_type == DayType.HOLIDAY)
        return frozenset(holidays)
