from src.punch_ledger.punch_ledger.core.enums import ShiftFamily
from src.punch_ledger.punch_ledger.shifts.resolver import ShiftResolver
from src.punch_ledger.punch_ledger.shifts.table import CENTRAL, EVENING, MORNING, NIGHT, VACATION

from tests.helpers import MONDAY, make_punch


def test_hint_wins_over_arrival_time():
    resolver = ShiftResolver()
    punches = [make_punch(MONDAY, "07:00", entry=True, hint="TN")]

    assert resolver.resolve(1, MONDAY, punches) == EVENING


def test_unknown_hint_falls_back_to_arrival():
    resolver = ShiftResolver()
    punches = [make_punch(MONDAY, "15:02", entry=True, hint="???")]

    assert resolver.resolve(1, MONDAY, punches) == EVENING


def test_late_arrival_is_preferred_over_early_arrival():
    resolver = ShiftResolver()
    # 07:40 is 40 late for Morning, 20 early for Central (x3 = 60)
    assert resolver.closest_to(460) == MORNING
    # 07:50: 50 late vs 10 early (x3 = 30)
    assert resolver.closest_to(470) == CENTRAL


def test_penalty_is_configurable():
    resolver = ShiftResolver(early_arrival_penalty=1)
    # 07:35: 35 late for Morning, 25 early for Central
    assert resolver.closest_to(455) == CENTRAL


def test_no_punches_defaults_to_morning():
    assert ShiftResolver().resolve(1, MONDAY, ()) == MORNING


def test_resolution_is_cached_per_employee_day():
    resolver = ShiftResolver()
    resolver.resolve(1, MONDAY, [make_punch(MONDAY, "23:00", entry=True)])

    assert resolver.cached(1, MONDAY) == NIGHT
    assert resolver.resolve(1, MONDAY, ()) == NIGHT
    assert resolver.cached(2, MONDAY) is None


def test_windows():
    assert NIGHT.crosses_midnight
    assert NIGHT.length_minutes == 480
    assert NIGHT.family == ShiftFamily.EVENING
    assert CENTRAL.family == ShiftFamily.MORNING
    assert VACATION.is_virtual
    assert VACATION.family == ShiftFamily.MORNING
