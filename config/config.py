import os


def _number(name: str, default: float) -> float:
    return float(os.environ.get(name, default))


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "punch-ledger-secret"

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Company holidays, comma separated ISO dates (2026-01-01,2026-01-06)
    HOLIDAYS = os.environ.get("HOLIDAYS", "")

    # Yearly entitlements: hours, except vacation which is in days
    ANNUAL_ENTITLEMENTS = {
        "medical": _number("ENTITLEMENT_MEDICAL_HOURS", 16),
        "vacation": _number("ENTITLEMENT_VACATION_DAYS", 22),
        "free_disposal": _number("ENTITLEMENT_FREE_DISPOSAL_HOURS", 8),
        "family_law": _number("ENTITLEMENT_FAMILY_LAW_HOURS", 32),
    }

    GRACE_MINUTES = int(os.environ.get("GRACE_MINUTES", "2"))
    EARLY_ARRIVAL_PENALTY = _number("EARLY_ARRIVAL_PENALTY", 3)

    # Employees computed in parallel; 1 keeps everything on the request thread
    MAX_WORKERS = int(os.environ.get("MAX_WORKERS", "1"))


SECRET_KEY = Config.SECRET_KEY
LOG_LEVEL = Config.LOG_LEVEL
HOLIDAYS = Config.HOLIDAYS
ANNUAL_ENTITLEMENTS = Config.ANNUAL_ENTITLEMENTS
GRACE_MINUTES = Config.GRACE_MINUTES
EARLY_ARRIVAL_PENALTY = Config.EARLY_ARRIVAL_PENALTY
MAX_WORKERS = Config.MAX_WORKERS

DEBUG = bool(int(os.environ.get("DEBUG", "1")))
