from __future__ import annotations

import logging
from typing import Optional

from ..common.datetime_utils import try_parse_iso_date
from ..common.validators import require_fields
from ..core.enums import ApprovalStatus
from ..core.exceptions import AuthorizationError, InvalidDateRangeError, NotFoundError, ValidationError
from ..notifications.sink import NotificationSink, notify_quietly
from ..users.model import StaffMember
from ..users.repository import DirectoryRepository
from ..users.roles import has_field_leadership_privileges
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    """Leave requests and their approval; reconciliation only reads the result."""

    def __init__(
        self,
        leaves: LeaveRepository,
        directory: DirectoryRepository,
        *,
        notifications: Optional[NotificationSink] = None,
    ):
        self._leaves = leaves
        self._directory = directory
        self._notifications = notifications

    def create_leave(
        self,
        *,
        staff_id: str,
        leave_type: str,
        start_date: str,
        end_date: str,
        supervisor_id: Optional[str] = None,
        reason: str = "",
    ) -> LeaveRequest:
        require_fields(staff_id=staff_id, leave_type=leave_type, start_date=start_date, end_date=end_date)

        start = try_parse_iso_date(start_date)
        end = try_parse_iso_date(end_date)
        if start is None or end is None:
            raise InvalidDateRangeError("Dates must use YYYY-MM-DD")
        if end < start:
            raise InvalidDateRangeError("end_date must be on or after start_date")

        created = self._leaves.create(
            staff_id=staff_id,
            supervisor_id=supervisor_id or None,
            leave_type=leave_type.strip(),
            start_date=start_date,
            end_date=end_date,
            reason=(reason or "").strip(),
        )
        logger.info("Leave request %s created for staff %s (%s..%s)", created.request_id, staff_id, start_date, end_date)

        staff = self._directory.get_by_id(staff_id)
        staff_name = staff.display_name if staff else "A staff member"
        notify_quietly(
            self._notifications,
            supervisor_id,
            "New Leave Request",
            f"{staff_name} has submitted a leave request for {start_date} to {end_date}. Please review.",
            {"type": "leave_request", "requestId": created.request_id},
        )
        return created

    def update_status(self, *, actor: StaffMember, request_id: str, status: str) -> LeaveRequest:
        if not has_field_leadership_privileges(actor.role):
            raise AuthorizationError(f"User role '{actor.role}' is not authorized to decide leave requests")

        try:
            new_status = ApprovalStatus((status or "").strip().lower())
        except ValueError:
            raise ValidationError("Status must be approved or rejected")
        if new_status == ApprovalStatus.PENDING:
            raise ValidationError("Status must be approved or rejected")

        if not self._leaves.get_by_id(request_id):
            raise NotFoundError("Leave request", request_id)

        updated = self._leaves.set_status(request_id=request_id, status=new_status, approved_by=actor.user_id)
        if not updated:
            raise NotFoundError("Leave request", request_id)
        logger.info("Leave request %s %s by %s", request_id, new_status.value, actor.user_id)

        notify_quietly(
            self._notifications,
            updated.staff_id,
            f"Leave Request {new_status.value.capitalize()}",
            f"Your leave request from {updated.start_date} to {updated.end_date} has been "
            f"{new_status.value} by {actor.display_name}.",
            {"type": "leave_status_update", "requestId": updated.request_id, "status": new_status.value},
        )
        return updated
