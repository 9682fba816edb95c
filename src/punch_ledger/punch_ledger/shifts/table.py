from __future__ import annotations

from .model import ShiftWindow

MORNING = ShiftWindow("M", "Morning", 7 * 60, 15 * 60, aliases=("MAÑANA", "MANANA"))
EVENING = ShiftWindow("T", "Evening", 15 * 60, 23 * 60, aliases=("TN", "TARDE", "TARDE/NOCHE"))
CENTRAL = ShiftWindow("C", "Central", 8 * 60, 17 * 60)
NIGHT = ShiftWindow("N", "Night", 23 * 60, 7 * 60, aliases=("NOCHE",))
VACATION = ShiftWindow("V", "Vacation", 0, 0, aliases=("VACACIONES",))
FREE = ShiftWindow("L", "Free", 0, 0, aliases=("LIBRE",))
HOLIDAY = ShiftWindow("F", "Holiday", 0, 0, aliases=("FESTIVO",))

DEFAULT_SHIFT_TABLE: tuple[ShiftWindow, ...] = (
    MORNING,
    EVENING,
    CENTRAL,
    NIGHT,
    VACATION,
    FREE,
    HOLIDAY,
)
