from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.constants import DEFAULT_EARLY_ARRIVAL_PENALTY
from ..punches.model import PunchRecord
from .model import ShiftWindow
from .table import DEFAULT_SHIFT_TABLE, MORNING


class ShiftResolver:
    """Decide which shift window applies to an employee on a given day.

    One resolver lives for one computation run; its cache is keyed by
    (employee_id, day ordinal) and discarded with it.
    """

    def __init__(
        self,
        table: Sequence[ShiftWindow] = DEFAULT_SHIFT_TABLE,
        *,
        early_arrival_penalty: float = DEFAULT_EARLY_ARRIVAL_PENALTY,
        default: ShiftWindow = MORNING,
    ):
        self._table = tuple(table)
        self._penalty = float(early_arrival_penalty)
        self._default = default
        self._cache: dict[tuple[int, int], ShiftWindow] = {}

    @property
    def table(self) -> tuple[ShiftWindow, ...]:
        return self._table

    def resolve(self, employee_id: int, day: date, day_punches: Sequence[PunchRecord]) -> ShiftWindow:
        key = (employee_id, day.toordinal())
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        window = self._resolve_uncached(day_punches)
        self._cache[key] = window
        return window

    def cached(self, employee_id: int, day: date) -> Optional[ShiftWindow]:
        return self._cache.get((employee_id, day.toordinal()))

    def by_hint(self, hint: Optional[str]) -> Optional[ShiftWindow]:
        if not hint or not hint.strip():
            return None
        for window in self._table:
            if window.matches(hint):
                return window
        return None

    def closest_to(self, minute: int) -> ShiftWindow:
        best = self._default
        best_distance = float("inf")
        for window in self._table:
            if window.is_virtual:
                continue
            distance = abs(minute - window.start_minute)
            if minute < window.start_minute:
                distance *= self._penalty
            if distance < best_distance:
                best, best_distance = window, distance
        return best

    def _resolve_uncached(self, day_punches: Sequence[PunchRecord]) -> ShiftWindow:
        for p in day_punches:
            hinted = self.by_hint(p.shift_hint)
            if hinted is not None:
                return hinted

        first_entry = next((p for p in day_punches if p.is_entry), None)
        if first_entry is None:
            return self._default
        return self.closest_to(first_entry.minute)
