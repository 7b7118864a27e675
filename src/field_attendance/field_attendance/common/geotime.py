"""Geofence and shift-time arithmetic.

Pure functions: no repositories, no clock. Callers pass the instants they
want evaluated.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Optional, Tuple

from ..core.constants import DEFAULT_SHIFT_START, EARTH_RADIUS_METERS

_SHIFT_TIME_RE = re.compile(r"^(\d{2}):(\d{2})$")

SUNDAY = 6
SATURDAY = 5


def distance_meters(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance (haversine) in meters."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def parse_shift_time(value: Optional[str]) -> Optional[Tuple[int, int]]:
    """Parse strict ``HH:MM``; anything else is treated as absent."""
    if not value or not isinstance(value, str):
        return None
    m = _SHIFT_TIME_RE.match(value)
    if not m:
        return None
    hour, minute = int(m.group(1)), int(m.group(2))
    if hour > 23 or minute > 59:
        return None
    return hour, minute


def shift_start_minutes(*candidates: Optional[str], default: Tuple[int, int] = DEFAULT_SHIFT_START) -> int:
    """Minutes since midnight of the first parsable candidate, else the default."""
    for value in candidates:
        parsed = parse_shift_time(value)
        if parsed:
            return parsed[0] * 60 + parsed[1]
    return default[0] * 60 + default[1]


def minutes_since_midnight(moment: datetime) -> int:
    return moment.hour * 60 + moment.minute


def is_late(clock_in: datetime, shift_start: int, grace_minutes: int) -> bool:
    """Late iff clock-in minute is strictly after shift start plus grace."""
    return minutes_since_midnight(clock_in) > shift_start + grace_minutes


def is_weekly_off(shift_days: Optional[int], day: date) -> bool:
    # date.weekday(): Monday=0 .. Sunday=6
    weekday = day.weekday()
    if shift_days == 5:
        return weekday in (SATURDAY, SUNDAY)
    return weekday == SUNDAY
