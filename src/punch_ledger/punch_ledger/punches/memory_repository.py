from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable, Sequence

from .model import PunchRecord
from .repository import PunchRepository


class InMemoryPunchRepository(PunchRepository):
    """Punch store backed by a dict of per-employee lists.

    The web layer fills one per request from the posted payload.
    """

    def __init__(self, records: Iterable[PunchRecord] = ()):
        self._by_employee: dict[int, list[PunchRecord]] = defaultdict(list)
        self.add_all(records)

    def add_all(self, records: Iterable[PunchRecord]) -> None:
        for r in records:
            self._by_employee[r.employee_id].append(r)

    def list_for_employee(self, employee_id: int, start: date, end: date) -> Sequence[PunchRecord]:
        return [r for r in self._by_employee.get(employee_id, ()) if start <= r.work_date <= end]
