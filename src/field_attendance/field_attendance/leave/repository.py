from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ApprovalStatus
from .model import Holiday, LeaveRequest


class LeaveRepository(Protocol):
    def get_by_id(self, request_id: str) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_overlapping(self, *, date_from: str, date_to: str, status: ApprovalStatus) -> Sequence[LeaveRequest]:
        """Requests with ``start_date <= date_to`` and ``end_date >= date_from``."""

        raise NotImplementedError

    def create(
        self,
        *,
        staff_id: str,
        supervisor_id: Optional[str],
        leave_type: str,
        start_date: str,
        end_date: str,
        reason: str,
    ) -> LeaveRequest:
        raise NotImplementedError

    def set_status(self, *, request_id: str, status: ApprovalStatus, approved_by: str) -> Optional[LeaveRequest]:
        raise NotImplementedError


class HolidayRepository(Protocol):
    def get_by_date(self, day: str) -> Optional[Holiday]:
        raise NotImplementedError
