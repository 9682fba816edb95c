from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .core.settings import EngineSettings
from .ledger.service import LedgerService
from .punches.memory_repository import InMemoryPunchRepository
from .punches.repository import PunchRepository
from .shifts.model import ShiftWindow
from .shifts.table import DEFAULT_SHIFT_TABLE


@dataclass(frozen=True)
class Container:
    settings: EngineSettings
    shift_table: tuple[ShiftWindow, ...]

    punches_repo: PunchRepository

    ledger_service: LedgerService

    def ledger_service_for(self, punches: PunchRepository) -> LedgerService:
        """Same settings and shift table, different punch source."""
        return LedgerService(punches, self.settings, shift_table=self.shift_table)


def build_container(
    *,
    settings: EngineSettings,
    shift_table: Sequence[ShiftWindow] = DEFAULT_SHIFT_TABLE,
    punches_repo: Optional[PunchRepository] = None,
) -> Container:
    shift_table = tuple(shift_table)
    punches_repo = punches_repo or InMemoryPunchRepository()

    ledger_service = LedgerService(punches_repo, settings, shift_table=shift_table)

    return Container(
        settings=settings,
        shift_table=shift_table,
        punches_repo=punches_repo,
        ledger_service=ledger_service,
    )
