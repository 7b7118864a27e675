from datetime import datetime

from field_attendance.attendance.factory import AttendanceStrategyFactory
from field_attendance.attendance.strategies.late_strategy import LateStrategy
from field_attendance.attendance.strategies.present_strategy import PresentStrategy
from field_attendance.core.enums import AttendanceStatus


def test_factory_clock_in_present_within_grace():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_clock_in(clock_in=datetime(2026, 3, 10, 8, 4, 59), shift_start_minutes=8 * 60, grace_minutes=5)

    assert isinstance(strategy, PresentStrategy)


def test_factory_clock_in_late_after_grace():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_clock_in(clock_in=datetime(2026, 3, 10, 8, 6), shift_start_minutes=8 * 60, grace_minutes=5)

    assert isinstance(strategy, LateStrategy)


def test_decide_reports_how_late():
    decision = AttendanceStrategyFactory().decide(
        clock_in=datetime(2026, 3, 10, 9, 40),
        shift_start_minutes=9 * 60,
        grace_minutes=15,
    )

    assert decision.status == AttendanceStatus.LATE
    assert decision.note == "late by 40 min"


def test_zero_grace_is_honoured():
    decision = AttendanceStrategyFactory().decide(
        clock_in=datetime(2026, 3, 10, 9, 1),
        shift_start_minutes=9 * 60,
        grace_minutes=0,
    )

    assert decision.status == AttendanceStatus.LATE
