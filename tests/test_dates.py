from datetime import date, datetime, timedelta, timezone

from src.core.dates import DatesConfig, GameDates, format_countdown


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


def test_epoch_day_is_index_zero() -> None:
    dates = GameDates()
    assert dates.day_index(utc(2025, 10, 17, 12, 0)) == 0
    assert dates.puzzle_number(0) == 1


def test_same_reference_day_gives_same_index() -> None:
    dates = GameDates()
    # 00:00 and 23:59:59 at UTC-5
    start = utc(2025, 10, 20, 5, 0, 0)
    end = utc(2025, 10, 21, 4, 59, 59)
    assert dates.day_index(start) == dates.day_index(end) == 3


def test_crossing_reference_midnight_increments_by_one() -> None:
    dates = GameDates()
    before = utc(2025, 10, 21, 4, 59, 59)
    after = before + timedelta(seconds=1)
    assert dates.day_index(after) == dates.day_index(before) + 1


def test_crossing_several_midnights() -> None:
    dates = GameDates()
    t = utc(2025, 11, 1, 15, 0)
    assert dates.day_index(t + timedelta(days=10)) == dates.day_index(t) + 10


def test_host_zone_does_not_matter() -> None:
    dates = GameDates()
    instant = utc(2025, 10, 18, 3, 0)  # still Oct 17 at UTC-5
    tokyo = instant.astimezone(timezone(timedelta(hours=9)))
    assert dates.day_index(instant) == dates.day_index(tokyo) == 0


def test_naive_timestamps_are_utc() -> None:
    dates = GameDates()
    assert dates.day_index(datetime(2025, 10, 18, 4, 0)) == 0
    assert dates.day_index(datetime(2025, 10, 18, 6, 0)) == 1


def test_test_offset_is_added() -> None:
    dates = GameDates()
    t = utc(2025, 10, 17, 12, 0)
    assert dates.day_index(t, test_offset=3) == 3


def test_dates_before_epoch_are_negative() -> None:
    dates = GameDates()
    assert dates.day_index(utc(2025, 10, 16, 12, 0)) == -1


def test_custom_config() -> None:
    dates = GameDates(DatesConfig(utc_offset_hours=-4, epoch_date=date(2025, 1, 1), base_number=10))
    assert dates.day_index(utc(2025, 1, 1, 4, 0)) == 10
    assert dates.day_index(utc(2025, 1, 2, 3, 59)) == 10
    assert dates.day_index(utc(2025, 1, 2, 4, 0)) == 11


def test_next_rollover_is_reference_midnight() -> None:
    dates = GameDates()
    t = utc(2025, 10, 17, 12, 0)
    nxt = dates.next_rollover(t)
    assert nxt > t
    assert nxt == utc(2025, 10, 18, 5, 0)
    assert dates.day_index(nxt) == dates.day_index(t) + 1
    assert dates.time_until_rollover(t) == timedelta(hours=17)


def test_next_rollover_exactly_at_midnight() -> None:
    dates = GameDates()
    midnight = utc(2025, 10, 18, 5, 0)
    assert dates.next_rollover(midnight) == utc(2025, 10, 19, 5, 0)


def test_format_countdown() -> None:
    assert format_countdown(timedelta(hours=5, minutes=3, seconds=9)) == "05:03:09"
    assert format_countdown(timedelta(seconds=-5)) == "00:00:00"
