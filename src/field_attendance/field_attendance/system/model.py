from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_GRACE_PERIOD_MINUTES, DEFAULT_MIN_CLOCK_INTERVAL_HOURS


@dataclass(frozen=True)
class SystemConfig:
    grace_period_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES
    min_clock_interval_hours: float = DEFAULT_MIN_CLOCK_INTERVAL_HOURS

    def as_dict(self) -> dict:
        return {
            "gracePeriodMinutes": self.grace_period_minutes,
            "minClockIntervalHours": self.min_clock_interval_hours,
        }
