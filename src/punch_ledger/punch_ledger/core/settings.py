from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import ModuleType
from typing import Mapping

from ..common.datetime_utils import parse_iso_date
from .constants import (
    DEFAULT_ANNUAL_ENTITLEMENTS,
    DEFAULT_EARLY_ARRIVAL_PENALTY,
    DEFAULT_GRACE_MINUTES,
)
from .enums import AbsenceCategory

ENTITLEMENT_KEYS = {
    "medical": AbsenceCategory.MEDICAL,
    "vacation": AbsenceCategory.VACATION,
    "free_disposal": AbsenceCategory.FREE_DISPOSAL,
    "family_law": AbsenceCategory.FAMILY_LAW,
}


def entitlements_from_mapping(raw: Mapping[str, float]) -> dict[AbsenceCategory, float]:
    merged = dict(DEFAULT_ANNUAL_ENTITLEMENTS)
    merged.update({k: v for k, v in raw.items() if k in ENTITLEMENT_KEYS})
    return {ENTITLEMENT_KEYS[k]: float(v) for k, v in merged.items()}


@dataclass(frozen=True)
class EngineSettings:
    """Read-only knobs shared by every employee computation."""

    grace_minutes: int = DEFAULT_GRACE_MINUTES
    early_arrival_penalty: float = DEFAULT_EARLY_ARRIVAL_PENALTY
    entitlements: Mapping[AbsenceCategory, float] = field(
        default_factory=lambda: entitlements_from_mapping({})
    )
    holidays: frozenset[date] = frozenset()
    max_workers: int = 1

    @classmethod
    def from_module(cls, settings: ModuleType) -> "EngineSettings":
        raw_holidays = getattr(settings, "HOLIDAYS", "") or ""
        holidays = frozenset(
            parse_iso_date(item.strip()) for item in raw_holidays.split(",") if item.strip()
        )
        return cls(
            grace_minutes=int(getattr(settings, "GRACE_MINUTES", DEFAULT_GRACE_MINUTES)),
            early_arrival_penalty=float(
                getattr(settings, "EARLY_ARRIVAL_PENALTY", DEFAULT_EARLY_ARRIVAL_PENALTY)
            ),
            entitlements=entitlements_from_mapping(getattr(settings, "ANNUAL_ENTITLEMENTS", {})),
            holidays=holidays,
            max_workers=max(1, int(getattr(settings, "MAX_WORKERS", 1))),
        )
