from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Organisation roles, lowest to highest."""

    STAFF = "staff"
    SUPERVISOR = "supervisor"
    SUB_ENGINEER = "sub_engineer"
    MANAGER = "manager"
    GENERAL_MANAGER = "general_manager"
    CEO = "ceo"
    SUPER_ADMIN = "super_admin"


class AttendanceStatus(str, Enum):
    """Status stored on the attendance record at clock-in."""

    PRESENT = "Present"
    LATE = "Late"
    ABSENT = "Absent"


class ReportStatus(str, Enum):
    """Status derived by report reconciliation."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    ON_LEAVE = "on-leave"


class ApprovalStatus(str, Enum):
    """Approval flow shared by attendance records and leave requests."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ExtraDutyApproval(str, Enum):
    """Two-step approval for overtime and double duty."""

    PENDING = "pending"
    SUPERVISOR_APPROVED = "supervisor_approved"
    MANAGER_APPROVED = "manager_approved"
    REJECTED = "rejected"
