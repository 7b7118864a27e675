from __future__ import annotations

import uuid
from typing import Any, Dict, Optional, Sequence

from ..core.enums import ApprovalStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_iso_date, db_cursor, fetchall, fetchone
from .model import Holiday, LeaveRequest
from .repository import HolidayRepository, LeaveRepository

_LEAVE_COLUMNS = """
    request_id, staff_id, supervisor_id, leave_type, start_date, end_date,
    reason, status, approved_by, created_at
"""


def _row_to_leave(r: Dict[str, Any]) -> LeaveRequest:
    return LeaveRequest(
        request_id=str(r["request_id"]),
        staff_id=str(r["staff_id"]),
        leave_type=r.get("leave_type") or "",
        start_date=as_iso_date(r["start_date"]),
        end_date=as_iso_date(r["end_date"]),
        status=ApprovalStatus(r["status"]),
        supervisor_id=r.get("supervisor_id"),
        reason=r.get("reason") or "",
        approved_by=r.get("approved_by"),
        created_at=r.get("created_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, request_id: str) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_LEAVE_COLUMNS} FROM leave_requests WHERE request_id=%s", (request_id,))
            row = fetchone(cur)
            return _row_to_leave(row) if row else None

    def list_overlapping(self, *, date_from: str, date_to: str, status: ApprovalStatus) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_LEAVE_COLUMNS}
                FROM leave_requests
                WHERE status=%s AND start_date<=%s AND end_date>=%s
                ORDER BY start_date
                """,
                (status.value, date_to, date_from),
            )
            return [_row_to_leave(r) for r in fetchall(cur)]

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
        request_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(request_id, staff_id, supervisor_id, leave_type, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    request_id,
                    staff_id,
                    supervisor_id,
                    leave_type,
                    start_date,
                    end_date,
                    reason,
                    ApprovalStatus.PENDING.value,
                ),
            )
        return LeaveRequest(
            request_id=request_id,
            staff_id=staff_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            status=ApprovalStatus.PENDING,
            supervisor_id=supervisor_id,
            reason=reason,
        )

    def set_status(self, *, request_id: str, status: ApprovalStatus, approved_by: str) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE leave_requests SET status=%s, approved_by=%s WHERE request_id=%s",
                (status.value, approved_by, request_id),
            )
            cur.execute(f"SELECT {_LEAVE_COLUMNS} FROM leave_requests WHERE request_id=%s", (request_id,))
            row = fetchone(cur)
            return _row_to_leave(row) if row else None


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _row_to_holiday(r: Dict[str, Any]) -> Holiday:
        return Holiday(
            date=as_iso_date(r["holiday_date"]),
            name=r.get("name") or "",
            description=r.get("description") or "",
        )

    def get_by_date(self, day: str) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT holiday_date, name, description FROM holidays WHERE holiday_date=%s", (day,))
            row = fetchone(cur)
            return self._row_to_holiday(row) if row else None
