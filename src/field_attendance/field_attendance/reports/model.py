from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ReportStatus


@dataclass(frozen=True)
class AttendanceReportRow:
    """One reconciled status for one staff member on one day.

    Rows without an attendance record carry a synthetic ``row_id``
    (``leave-<request>-<date>`` or ``absent-<staff>-<date>``).
    """

    row_id: str
    staff_id: str
    staff_name: str
    attendance_date: str
    status: ReportStatus
    raw_status: Optional[str] = None
    emp_no: Optional[str] = None
    department: Optional[str] = None
    supervisor_id: Optional[str] = None
    supervisor_name: str = "Unknown Supervisor"
    location_id: Optional[str] = None
    location_name: str = "Unknown Area"
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    overtime: bool = False
    double_duty: bool = False
    is_override: bool = False
    approval_status: str = "pending"
    notes: str = ""

    def as_dict(self) -> dict:
        return {
            "id": self.row_id,
            "staff_id": self.staff_id,
            "emp_no": self.emp_no,
            "department": self.department,
            "staff_name": self.staff_name,
            "supervisor_id": self.supervisor_id,
            "supervisor_name": self.supervisor_name,
            "area_id": self.location_id,
            "area_name": self.location_name,
            "attendance_date": self.attendance_date,
            "clock_in": self.clock_in.isoformat() if self.clock_in else None,
            "clock_out": self.clock_out.isoformat() if self.clock_out else None,
            "status": self.status.value,
            "raw_status": self.raw_status,
            "overtime": self.overtime,
            "double_duty": self.double_duty,
            "is_override": self.is_override,
            "approval_status": self.approval_status,
            "notes": self.notes,
        }
