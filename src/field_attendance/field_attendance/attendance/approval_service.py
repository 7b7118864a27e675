from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..core.enums import ApprovalStatus, ExtraDutyApproval
from ..core.exceptions import AuthorizationError, InfrastructureError, NotFoundError
from ..users.model import StaffMember
from ..users.repository import DirectoryRepository
from ..users.roles import (
    actor_can_access_department,
    has_field_leadership_privileges,
    has_management_privileges,
)
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

OVERTIME = "overtime"
DOUBLE_DUTY = "double_duty"


class AttendanceApprovalService:
    """Review workflow on top of recorded attendance.

    Supervisors approve or reject the record itself and flag overtime or double
    duty; managers then approve or reject the flagged extra duty for staff in
    departments they can access.
    """

    def __init__(self, attendance: AttendanceRepository, directory: DirectoryRepository):
        self._attendance = attendance
        self._directory = directory

    def _load(self, attendance_id: str) -> AttendanceRecord:
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFoundError("Attendance", attendance_id)
        return record

    def _save(self, record: AttendanceRecord) -> AttendanceRecord:
        if not self._attendance.save_review(record):
            raise InfrastructureError(f"Failed to save review of attendance {record.attendance_id}")
        return record

    @staticmethod
    def _require_field_leadership(actor: StaffMember) -> None:
        if not has_field_leadership_privileges(actor.role):
            raise AuthorizationError(f"User role '{actor.role}' is not authorized to review attendance")

    def _require_manager_for(self, actor: StaffMember, record: AttendanceRecord) -> None:
        if not has_management_privileges(actor.role):
            raise AuthorizationError(f"User role '{actor.role}' is not authorized to approve extra duty")
        staff = self._directory.get_by_id(record.staff_id)
        department = staff.department if staff else None
        if not actor_can_access_department(actor, department):
            raise AuthorizationError("You do not have access to this staff member's department")

    # -- record approval ---------------------------------------------------

    def approve(self, *, actor: StaffMember, attendance_id: str) -> AttendanceRecord:
        self._require_field_leadership(actor)
        record = replace(self._load(attendance_id), approval_status=ApprovalStatus.APPROVED)
        logger.info("Attendance %s approved by %s", attendance_id, actor.user_id)
        return self._save(record)

    def reject(self, *, actor: StaffMember, attendance_id: str, reason: Optional[str] = None) -> AttendanceRecord:
        self._require_field_leadership(actor)
        record = replace(
            self._load(attendance_id),
            approval_status=ApprovalStatus.REJECTED,
            rejected_by=actor.user_id,
            rejection_reason=reason or None,
        )
        logger.info("Attendance %s rejected by %s", attendance_id, actor.user_id)
        return self._save(record)

    # -- overtime / double duty ---------------------------------------------

    def _mark(self, kind: str, *, actor: StaffMember, attendance_id: str) -> AttendanceRecord:
        self._require_field_leadership(actor)
        record = self._load(attendance_id)
        record = replace(
            record,
            **{kind: True, f"{kind}_approval_status": ExtraDutyApproval.PENDING},
            marked_by_supervisor=actor.user_id,
        )
        logger.info("Attendance %s marked %s by %s", attendance_id, kind, actor.user_id)
        return self._save(record)

    def _decide(
        self,
        kind: str,
        *,
        actor: StaffMember,
        attendance_id: str,
        approve: bool,
        reason: Optional[str] = None,
    ) -> AttendanceRecord:
        record = self._load(attendance_id)
        self._require_manager_for(actor, record)
        if approve:
            record = replace(
                record,
                **{f"{kind}_approval_status": ExtraDutyApproval.MANAGER_APPROVED},
                approved_by_manager=actor.user_id,
            )
        else:
            record = replace(
                record,
                **{kind: False, f"{kind}_approval_status": ExtraDutyApproval.REJECTED},
                rejected_by=actor.user_id,
                rejection_reason=reason or None,
            )
        logger.info(
            "Attendance %s %s %s by %s",
            attendance_id,
            kind,
            "approved" if approve else "rejected",
            actor.user_id,
        )
        return self._save(record)

    def mark_overtime(self, *, actor: StaffMember, attendance_id: str) -> AttendanceRecord:
        return self._mark(OVERTIME, actor=actor, attendance_id=attendance_id)

    def mark_double_duty(self, *, actor: StaffMember, attendance_id: str) -> AttendanceRecord:
        return self._mark(DOUBLE_DUTY, actor=actor, attendance_id=attendance_id)

    def approve_overtime(self, *, actor: StaffMember, attendance_id: str) -> AttendanceRecord:
        return self._decide(OVERTIME, actor=actor, attendance_id=attendance_id, approve=True)

    def reject_overtime(self, *, actor: StaffMember, attendance_id: str, reason: Optional[str] = None) -> AttendanceRecord:
        return self._decide(OVERTIME, actor=actor, attendance_id=attendance_id, approve=False, reason=reason)

    def approve_double_duty(self, *, actor: StaffMember, attendance_id: str) -> AttendanceRecord:
        return self._decide(DOUBLE_DUTY, actor=actor, attendance_id=attendance_id, approve=True)

    def reject_double_duty(
        self, *, actor: StaffMember, attendance_id: str, reason: Optional[str] = None
    ) -> AttendanceRecord:
        return self._decide(DOUBLE_DUTY, actor=actor, attendance_id=attendance_id, approve=False, reason=reason)
