"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 1440

DEFAULT_GRACE_MINUTES = 2
# Arriving early to a future shift is judged less likely than arriving late
# to one that already started. Tuned heuristic, pending review by HR.
DEFAULT_EARLY_ARRIVAL_PENALTY = 3

STANDARD_WORKDAY_MINUTES = 8 * 60
WORKDAY_TOLERANCE_MINUTES = 3
HOURS_PER_VACATION_DAY = 8

MIN_GAP_MINUTES = 1
MAX_GAP_MINUTES = 5 * 60
CLOSING_HOUR_MINUTES = 60
OVERRUN_BAND_END_MINUTE = 6 * 60
MAX_SHORT_BREAK_MINUTES = 9 * 60
RANGE_ANCHOR_TOLERANCE_MINUTES = 1

# Bounded scans: inner lookahead cap and outer loop multiplier.
MAX_LOOKAHEAD_STEPS = 64
SCAN_BUDGET_FACTOR = 4

DEFAULT_ANNUAL_ENTITLEMENTS = {
    "medical": 16,
    "vacation": 22,
    "free_disposal": 8,
    "family_law": 32,
}
