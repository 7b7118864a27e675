import math
from datetime import date, datetime

import pytest

from field_attendance.common.geotime import (
    distance_meters,
    is_late,
    is_weekly_off,
    minutes_since_midnight,
    parse_shift_time,
    shift_start_minutes,
)


def test_distance_to_self_is_zero():
    assert distance_meters(10.5, 20.5, 10.5, 20.5) == 0


def test_distance_is_symmetric():
    a = distance_meters(10.0, 20.0, 10.01, 20.02)
    b = distance_meters(10.01, 20.02, 10.0, 20.0)

    assert a == pytest.approx(b)


def test_one_degree_of_latitude():
    # 6,371 km * pi / 180
    assert distance_meters(0, 0, 1, 0) == pytest.approx(111_194.93, rel=1e-6)


def test_nan_propagates():
    assert math.isnan(distance_meters(float("nan"), 0, 0, 0))


@pytest.mark.parametrize("value, expected", [("09:00", (9, 0)), ("00:00", (0, 0)), ("23:59", (23, 59))])
def test_parse_shift_time_accepts_strict_hh_mm(value, expected):
    assert parse_shift_time(value) == expected


@pytest.mark.parametrize("value", ["9:00", "24:00", "12:60", "09:00:00", " 09:00", "", None, "ab:cd"])
def test_parse_shift_time_rejects_everything_else(value):
    assert parse_shift_time(value) is None


def test_shift_start_uses_first_valid_candidate():
    assert shift_start_minutes(None, "bad", "07:30") == 7 * 60 + 30


def test_shift_start_defaults_to_nine():
    assert shift_start_minutes() == 9 * 60
    assert shift_start_minutes("25:00") == 9 * 60


def test_minutes_since_midnight_ignores_seconds():
    assert minutes_since_midnight(datetime(2026, 3, 10, 9, 15, 59)) == 555


@pytest.mark.parametrize(
    "hh, mm, expected",
    [(9, 14, False), (9, 15, False), (9, 16, True)],
)
def test_is_late_is_strict(hh, mm, expected):
    assert is_late(datetime(2026, 3, 10, hh, mm), 9 * 60, 15) is expected


@pytest.mark.parametrize("hh, mm", [(0, 0), (8, 59), (9, 0), (9, 1), (9, 30), (10, 45), (23, 59)])
def test_more_grace_never_makes_clock_in_late(hh, mm):
    clock_in = datetime(2026, 3, 10, hh, mm)
    verdicts = [is_late(clock_in, 9 * 60, grace) for grace in (0, 1, 5, 15, 30, 60, 120, 1440)]

    for earlier, later in zip(verdicts, verdicts[1:]):
        assert not (earlier is False and later is True)


def test_six_day_week_only_sunday_off():
    assert is_weekly_off(6, date(2026, 3, 8)) is True  # Sunday
    assert is_weekly_off(6, date(2026, 3, 7)) is False  # Saturday


def test_five_day_week_weekend_off():
    assert is_weekly_off(5, date(2026, 3, 7)) is True
    assert is_weekly_off(5, date(2026, 3, 8)) is True
    assert is_weekly_off(5, date(2026, 3, 9)) is False


def test_unknown_shift_days_use_six_day_policy():
    assert is_weekly_off(4, date(2026, 3, 7)) is False
    assert is_weekly_off(None, date(2026, 3, 8)) is True
