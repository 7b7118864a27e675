from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find_for_staff_date(
        self,
        *,
        staff_id: str,
        attendance_date: str,
        supervisor_id: Optional[str] = None,
        location_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records for the key, newest first."""

        raise NotImplementedError

    def create_clock_in(
        self,
        *,
        staff_id: str,
        supervisor_id: str,
        location_id: str,
        attendance_date: str,
        clock_in: datetime,
        status: AttendanceStatus,
        overtime: bool,
        double_duty: bool,
        is_override: bool,
        clock_in_lat: Optional[float] = None,
        clock_in_lng: Optional[float] = None,
        clock_in_photo_url: Optional[str] = None,
        clocked_in_by: Optional[str] = None,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def update_clock_out(
        self,
        *,
        attendance_id: str,
        clock_out: datetime,
        is_override: bool,
        clock_out_lat: Optional[float] = None,
        clock_out_lng: Optional[float] = None,
        clock_out_photo_url: Optional[str] = None,
        clocked_out_by: Optional[str] = None,
    ) -> Optional[AttendanceRecord]:
        """Close an open record; None when it no longer exists or is already closed."""

        raise NotImplementedError

    def save_review(self, record: AttendanceRecord) -> bool:
        """Persist the approval/overtime/double-duty fields of ``record``."""

        raise NotImplementedError

    def list_between(
        self,
        *,
        date_from: str,
        date_to: str,
        supervisor_id: Optional[str] = None,
        location_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
