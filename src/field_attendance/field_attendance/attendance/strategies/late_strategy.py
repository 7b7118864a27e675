from __future__ import annotations

from datetime import datetime

from ...common.geotime import minutes_since_midnight
from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late clock-in."""

    def decide_clock_in(self, *, clock_in: datetime, shift_start_minutes: int, grace_minutes: int) -> StatusDecision:
        late_by = minutes_since_midnight(clock_in) - shift_start_minutes
        return StatusDecision(status=AttendanceStatus.LATE, note=f"late by {late_by} min")
