from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ApprovalStatus


@dataclass(frozen=True)
class LeaveRequest:
    request_id: str
    staff_id: str
    leave_type: str
    start_date: str
    end_date: str
    status: ApprovalStatus
    supervisor_id: Optional[str] = None
    reason: str = ""
    approved_by: Optional[str] = None
    created_at: Optional[datetime] = None

    def covers(self, day: str) -> bool:
        # ISO strings compare chronologically.
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class Holiday:
    """Company-wide non-working day."""

    date: str
    name: str
    description: str = ""
