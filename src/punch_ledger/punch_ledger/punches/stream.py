from __future__ import annotations

from datetime import date
from operator import attrgetter
from typing import Callable, Iterable, Optional, Sequence

from ..core.constants import MAX_LOOKAHEAD_STEPS
from .model import PunchRecord


class PunchStream:
    """One employee's punches in chronological order, with a per-day index
    keyed by day ordinal so "same day" / "previous day" checks never parse dates.
    """

    def __init__(self, punches: Iterable[PunchRecord], *, lookahead: int = MAX_LOOKAHEAD_STEPS):
        self.records: tuple[PunchRecord, ...] = tuple(sorted(punches, key=attrgetter("sort_key")))
        self._lookahead = int(lookahead)
        self._by_day: dict[int, list[PunchRecord]] = {}
        for r in self.records:
            self._by_day.setdefault(r.work_date.toordinal(), []).append(r)

    def __len__(self) -> int:
        return len(self.records)

    def __getitem__(self, index: int) -> PunchRecord:
        return self.records[index]

    def on(self, day: date) -> Sequence[PunchRecord]:
        return self._by_day.get(day.toordinal(), ())

    def days(self) -> list[date]:
        return [date.fromordinal(o) for o in sorted(self._by_day)]

    def has_activity(self, day: date) -> bool:
        return day.toordinal() in self._by_day

    def find_next(
        self,
        index: int,
        predicate: Callable[[PunchRecord], bool],
        *,
        stop: Optional[Callable[[PunchRecord], bool]] = None,
        same_day: bool = False,
    ) -> Optional[int]:
        """Index of the first record after `index` matching `predicate`.

        The search gives up after a fixed number of steps, when `stop`
        matches first, or (with same_day) when the calendar day changes.
        """

        origin = self.records[index].work_date
        end = min(len(self.records), index + 1 + self._lookahead)
        for k in range(index + 1, end):
            candidate = self.records[k]
            if same_day and candidate.work_date != origin:
                return None
            if predicate(candidate):
                return k
            if stop is not None and stop(candidate):
                return None
        return None
