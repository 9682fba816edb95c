from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import PunchRecord


class PunchRepository(Protocol):
    def list_for_employee(self, employee_id: int, start: date, end: date) -> Sequence[PunchRecord]:
        """Punches dated within [start, end], in any order."""

        raise NotImplementedError
