from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ApprovalStatus, AttendanceStatus, ExtraDutyApproval


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one clock-in/clock-out cycle keyed by (staff, attendance_date).

    ``attendance_date`` is a YYYY-MM-DD string, never a timestamp.
    """

    attendance_id: str
    staff_id: str
    supervisor_id: str
    location_id: str
    attendance_date: str
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]
    status: AttendanceStatus
    approval_status: ApprovalStatus = ApprovalStatus.PENDING
    overtime: bool = False
    double_duty: bool = False
    is_override: bool = False
    clock_in_lat: Optional[float] = None
    clock_in_lng: Optional[float] = None
    clock_in_photo_url: Optional[str] = None
    clock_out_lat: Optional[float] = None
    clock_out_lng: Optional[float] = None
    clock_out_photo_url: Optional[str] = None
    clocked_in_by: Optional[str] = None
    clocked_out_by: Optional[str] = None
    overtime_approval_status: Optional[ExtraDutyApproval] = None
    double_duty_approval_status: Optional[ExtraDutyApproval] = None
    marked_by_supervisor: Optional[str] = None
    approved_by_manager: Optional[str] = None
    rejected_by: Optional[str] = None
    rejection_reason: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.clock_in is not None and self.clock_out is None

    @property
    def is_closed(self) -> bool:
        return self.clock_out is not None


@dataclass(frozen=True)
class ClockInRequest:
    staff_id: str
    supervisor_id: str
    location_id: str
    geo: Optional[GeoPoint] = None
    photo_url: Optional[str] = None
    overtime: bool = False
    double_duty: bool = False
    is_override: bool = False
    attendance_date: Optional[str] = None


@dataclass(frozen=True)
class ClockOutRequest:
    staff_id: str
    supervisor_id: str
    location_id: str
    geo: Optional[GeoPoint] = None
    photo_url: Optional[str] = None
    is_override: bool = False
    attendance_date: Optional[str] = None


@dataclass(frozen=True)
class AttendanceResult:
    """Outcome of clock-in/out; ``already_processed`` marks an idempotent no-op."""

    record: AttendanceRecord
    already_processed: bool = False
    clocked_by_name: Optional[str] = None

    def as_dict(self) -> dict:
        r = self.record
        return {
            "id": r.attendance_id,
            "staff_id": r.staff_id,
            "supervisor_id": r.supervisor_id,
            "nc_location_id": r.location_id,
            "attendance_date": r.attendance_date,
            "clock_in": r.clock_in.isoformat() if r.clock_in else None,
            "clock_out": r.clock_out.isoformat() if r.clock_out else None,
            "status": r.status.value,
            "approval_status": r.approval_status.value,
            "overtime": r.overtime,
            "double_duty": r.double_duty,
            "clock_in_lat": r.clock_in_lat,
            "clock_in_lng": r.clock_in_lng,
            "clock_in_photo_url": r.clock_in_photo_url,
            "clock_out_lat": r.clock_out_lat,
            "clock_out_lng": r.clock_out_lng,
            "clock_out_photo_url": r.clock_out_photo_url,
            "clocked_by": self.clocked_by_name,
            "is_override": r.is_override,
            "already_processed": self.already_processed,
        }
