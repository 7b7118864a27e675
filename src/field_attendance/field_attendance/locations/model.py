from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.geotime import shift_start_minutes
from ..core.constants import DEFAULT_GEOFENCE_RADIUS_METERS


@dataclass(frozen=True)
class Location:
    """Work site with a circular geofence and optional named shift windows."""

    location_id: str
    name: str
    code: Optional[str] = None
    center_lat: Optional[float] = None
    center_lng: Optional[float] = None
    radius_meters: Optional[float] = DEFAULT_GEOFENCE_RADIUS_METERS
    morning_shift_start: Optional[str] = None
    morning_shift_end: Optional[str] = None
    night_shift_start: Optional[str] = None
    night_shift_end: Optional[str] = None
    is_office: bool = False

    @property
    def is_office_location(self) -> bool:
        name = (self.name or "").lower()
        code = (self.code or "").lower()
        return self.is_office or "office" in name or "office" in code

    @property
    def has_geocenter(self) -> bool:
        return self.center_lat is not None and self.center_lng is not None

    @property
    def effective_radius_meters(self) -> float:
        return float(self.radius_meters or DEFAULT_GEOFENCE_RADIUS_METERS)

    @property
    def display_name(self) -> str:
        return (self.name or "").strip() or "Unknown Area"

    def shift_start_minutes(self) -> int:
        """Morning start, else night start, else 09:00."""
        return shift_start_minutes(self.morning_shift_start, self.night_shift_start)
