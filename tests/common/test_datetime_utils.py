from datetime import date

import pytest

from field_attendance.common.datetime_utils import iso_date_range, try_parse_iso_date


def test_try_parse_iso_date():
    assert try_parse_iso_date("2026-03-10") == date(2026, 3, 10)


@pytest.mark.parametrize("value", ["2026-3-10", "2026-02-30", "10/03/2026", "", None])
def test_try_parse_iso_date_rejects_loose_input(value):
    assert try_parse_iso_date(value) is None


def test_iso_date_range_is_inclusive():
    assert iso_date_range("2026-02-27", "2026-03-02") == ["2026-02-27", "2026-02-28", "2026-03-01", "2026-03-02"]


def test_iso_date_range_single_day():
    assert iso_date_range("2026-03-10", "2026-03-10") == ["2026-03-10"]


def test_iso_date_range_reversed_is_empty():
    assert iso_date_range("2026-03-10", "2026-03-09") == []
