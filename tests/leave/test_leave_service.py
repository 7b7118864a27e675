import logging

import pytest

from field_attendance.core.enums import ApprovalStatus
from field_attendance.core.exceptions import (
    AuthorizationError,
    InvalidDateRangeError,
    MissingRequiredFieldError,
    NotFoundError,
    ValidationError,
)
from field_attendance.leave.service import LeaveService


class ExplodingNotifications:
    def send(self, user_id, title, body, data=None):
        raise RuntimeError("push gateway down")


def test_create_leave_notifies_supervisor(world, container):
    leave = container.leave_service.create_leave(
        staff_id="s1",
        leave_type="annual",
        start_date="2026-03-12",
        end_date="2026-03-13",
        supervisor_id="sup1",
        reason=" family ",
    )

    assert leave.status == ApprovalStatus.PENDING
    assert leave.reason == "family"
    (user_id, title, body, data) = world.notifications.sent[0]
    assert user_id == "sup1"
    assert title == "New Leave Request"
    assert "Sam Staff" in body
    assert data["requestId"] == leave.request_id


def test_create_leave_requires_fields(container):
    with pytest.raises(MissingRequiredFieldError):
        container.leave_service.create_leave(staff_id="s1", leave_type="", start_date="2026-03-12", end_date="")


def test_create_leave_rejects_reversed_range(container):
    with pytest.raises(InvalidDateRangeError):
        container.leave_service.create_leave(
            staff_id="s1", leave_type="annual", start_date="2026-03-13", end_date="2026-03-12"
        )


def test_supervisor_approves_leave_and_staff_is_notified(world, container):
    leave = world.leaves.add("s1", "2026-03-12", "2026-03-12", status=ApprovalStatus.PENDING)

    updated = container.leave_service.update_status(actor=world.user("sup1"), request_id=leave.request_id, status="Approved")

    assert updated.status == ApprovalStatus.APPROVED
    assert updated.approved_by == "sup1"
    assert world.notifications.sent[-1][0] == "s1"
    assert world.notifications.sent[-1][1] == "Leave Request Approved"


@pytest.mark.parametrize("status", ["pending", "cancelled", ""])
def test_update_status_only_accepts_decisions(world, container, status):
    leave = world.leaves.add("s1", "2026-03-12", "2026-03-12", status=ApprovalStatus.PENDING)

    with pytest.raises(ValidationError):
        container.leave_service.update_status(actor=world.user("sup1"), request_id=leave.request_id, status=status)


def test_staff_cannot_decide_leave(world, container):
    leave = world.leaves.add("s2", "2026-03-12", "2026-03-12", status=ApprovalStatus.PENDING)

    with pytest.raises(AuthorizationError):
        container.leave_service.update_status(actor=world.user("s1"), request_id=leave.request_id, status="approved")


def test_unknown_leave_request(world, container):
    with pytest.raises(NotFoundError):
        container.leave_service.update_status(actor=world.user("m1"), request_id="missing", status="rejected")


def test_notification_failure_does_not_fail_approval(world, caplog):
    service = LeaveService(world.leaves, world.directory, notifications=ExplodingNotifications())
    leave = world.leaves.add("s1", "2026-03-12", "2026-03-12", status=ApprovalStatus.PENDING)

    with caplog.at_level(logging.WARNING):
        updated = service.update_status(actor=world.user("m1"), request_id=leave.request_id, status="rejected")

    assert updated.status == ApprovalStatus.REJECTED
    assert "push gateway down" in caplog.text
