from datetime import timedelta

import pytest

from src.punch_ledger.punch_ledger.buckets.allocator import BucketAllocator
from src.punch_ledger.punch_ledger.buckets.factory import BucketStrategyFactory
from src.punch_ledger.punch_ledger.buckets.strategies.evening_strategy import EveningBucketStrategy
from src.punch_ledger.punch_ledger.buckets.strategies.morning_strategy import MorningBucketStrategy
from src.punch_ledger.punch_ledger.calendar.festive import FestiveCalendar
from src.punch_ledger.punch_ledger.common.time_math import absolute_minute
from src.punch_ledger.punch_ledger.core.enums import Bucket, IntervalKind
from src.punch_ledger.punch_ledger.intervals.model import Interval
from src.punch_ledger.punch_ledger.shifts.table import CENTRAL, EVENING, MORNING, NIGHT

from tests.helpers import MONDAY, SATURDAY


def _work(day, start, end_day, end):
    return Interval.from_absolute(absolute_minute(day, start), absolute_minute(end_day, end), IntervalKind.WORK)


def test_factory_picks_table_by_family():
    factory = BucketStrategyFactory()

    assert isinstance(factory.for_shift(MORNING), MorningBucketStrategy)
    assert isinstance(factory.for_shift(CENTRAL), MorningBucketStrategy)
    assert isinstance(factory.for_shift(EVENING), EveningBucketStrategy)
    assert isinstance(factory.for_shift(NIGHT), EveningBucketStrategy)


def test_morning_shift_with_overtime():
    totals = BucketAllocator(FestiveCalendar()).allocate(_work(MONDAY, 420, MONDAY, 1260), MORNING)

    assert totals.minutes[Bucket.DAY] == 480
    assert totals.minutes[Bucket.OVERTIME_1] == 300
    assert totals.minutes[Bucket.NIGHT] == 60


def test_evening_shift_overrun_goes_to_night():
    totals = BucketAllocator(FestiveCalendar()).allocate(_work(MONDAY, 900, MONDAY, 1410), EVENING)

    assert totals.minutes[Bucket.EVENING] == 480
    assert totals.minutes[Bucket.NIGHT] == 30


def test_midnight_crossing_is_split_per_day():
    tuesday = MONDAY + timedelta(days=1)
    totals = BucketAllocator(FestiveCalendar()).allocate(_work(MONDAY, 1380, tuesday, 480), NIGHT)

    assert totals.minutes[Bucket.NIGHT] == 480
    assert totals.minutes[Bucket.DAY] == 60


def test_festive_day_takes_everything():
    totals = BucketAllocator(FestiveCalendar()).allocate(_work(SATURDAY, 480, SATURDAY, 720), MORNING)

    assert totals.minutes[Bucket.FESTIVE] == 240
    assert totals.total == 240


def test_holiday_set_makes_weekday_festive():
    calendar = FestiveCalendar(holidays=frozenset({MONDAY}))
    totals = BucketAllocator(calendar).allocate(_work(MONDAY, 420, MONDAY, 900), MORNING)

    assert totals.minutes[Bucket.FESTIVE] == 480


def test_evening_overrun_into_weekend_stays_night():
    friday = SATURDAY - timedelta(days=1)
    totals = BucketAllocator(FestiveCalendar()).allocate(
        _work(SATURDAY, 0, SATURDAY, 420), MORNING, previous_window=EVENING
    )

    assert friday.weekday() == 4
    assert totals.minutes[Bucket.NIGHT] == 360
    assert totals.minutes[Bucket.FESTIVE] == 60


def test_no_carry_over_after_morning_shift():
    totals = BucketAllocator(FestiveCalendar()).allocate(
        _work(SATURDAY, 0, SATURDAY, 420), MORNING, previous_window=MORNING
    )

    assert totals.minutes[Bucket.FESTIVE] == 420


def test_non_work_intervals_are_not_bucketed():
    justified = Interval.from_absolute(
        absolute_minute(MONDAY, 420), absolute_minute(MONDAY, 900), IntervalKind.JUSTIFIED
    )

    assert BucketAllocator(FestiveCalendar()).allocate(justified, MORNING).total == 0


@pytest.mark.parametrize("window", [MORNING, EVENING, CENTRAL, NIGHT])
@pytest.mark.parametrize(
    "start, end_offset, end",
    [(0, 0, 1440), (300, 0, 1000), (1200, 1, 300), (1439, 1, 1), (420, 2, 60)],
)
def test_bucket_sum_equals_duration(window, start, end_offset, end):
    interval = _work(MONDAY, start, MONDAY + timedelta(days=end_offset), end)
    totals = BucketAllocator(FestiveCalendar()).allocate(interval, window)

    assert totals.total == interval.duration_minutes
