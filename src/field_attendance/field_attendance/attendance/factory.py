from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.geotime import is_late
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    The caller chooses which shift start applies: the staff member's personal
    shift at clock-in time, the location's shift when a report recomputes.
    """

    def for_clock_in(self, *, clock_in: datetime, shift_start_minutes: int, grace_minutes: int) -> AttendanceStrategy:
        if is_late(clock_in, shift_start_minutes, grace_minutes):
            return LateStrategy()
        return PresentStrategy()

    def decide(self, *, clock_in: datetime, shift_start_minutes: int, grace_minutes: int):
        strategy = self.for_clock_in(
            clock_in=clock_in,
            shift_start_minutes=shift_start_minutes,
            grace_minutes=grace_minutes,
        )
        return strategy.decide_clock_in(
            clock_in=clock_in,
            shift_start_minutes=shift_start_minutes,
            grace_minutes=grace_minutes,
        )
