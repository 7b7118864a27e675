from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import ApprovalStatus, AttendanceStatus, ExtraDutyApproval
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, as_iso_date, db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, staff_id, supervisor_id, location_id, attendance_date,
    clock_in, clock_out, clock_in_lat, clock_in_lng, clock_in_photo_url,
    clock_out_lat, clock_out_lng, clock_out_photo_url,
    status, approval_status, overtime, double_duty, is_override,
    clocked_in_by, clocked_out_by,
    overtime_approval_status, double_duty_approval_status,
    marked_by_supervisor, approved_by_manager, rejected_by, rejection_reason,
    created_at
"""


def _extra(value: Optional[str]) -> Optional[ExtraDutyApproval]:
    return ExtraDutyApproval(value) if value else None


def _row_to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=str(r["attendance_id"]),
        staff_id=str(r["staff_id"]),
        supervisor_id=str(r["supervisor_id"]),
        location_id=str(r["location_id"]),
        attendance_date=as_iso_date(r["attendance_date"]),
        clock_in=r.get("clock_in"),
        clock_out=r.get("clock_out"),
        status=AttendanceStatus(r["status"]),
        approval_status=ApprovalStatus(r.get("approval_status") or "pending"),
        overtime=bool(r.get("overtime")),
        double_duty=bool(r.get("double_duty")),
        is_override=bool(r.get("is_override")),
        clock_in_lat=as_float(r.get("clock_in_lat")),
        clock_in_lng=as_float(r.get("clock_in_lng")),
        clock_in_photo_url=r.get("clock_in_photo_url"),
        clock_out_lat=as_float(r.get("clock_out_lat")),
        clock_out_lng=as_float(r.get("clock_out_lng")),
        clock_out_photo_url=r.get("clock_out_photo_url"),
        clocked_in_by=r.get("clocked_in_by"),
        clocked_out_by=r.get("clocked_out_by"),
        overtime_approval_status=_extra(r.get("overtime_approval_status")),
        double_duty_approval_status=_extra(r.get("double_duty_approval_status")),
        marked_by_supervisor=r.get("marked_by_supervisor"),
        approved_by_manager=r.get("approved_by_manager"),
        rejected_by=r.get("rejected_by"),
        rejection_reason=r.get("rejection_reason"),
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE attendance_id=%s", (attendance_id,))
            row = fetchone(cur)
            return _row_to_record(row) if row else None

    def find_for_staff_date(
        self,
        *,
        staff_id: str,
        attendance_date: str,
        supervisor_id: Optional[str] = None,
        location_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["staff_id=%s", "attendance_date=%s"]
        params: list[object] = [staff_id, attendance_date]
        if supervisor_id is not None:
            clauses.append("supervisor_id=%s")
            params.append(supervisor_id)
        if location_id is not None:
            clauses.append("location_id=%s")
            params.append(location_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE {" AND ".join(clauses)}
                ORDER BY created_at DESC, clock_in DESC
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

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
        attendance_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(
                    attendance_id, staff_id, supervisor_id, location_id, attendance_date,
                    clock_in, clock_in_lat, clock_in_lng, clock_in_photo_url,
                    status, approval_status, overtime, double_duty, is_override, clocked_in_by
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    attendance_id,
                    staff_id,
                    supervisor_id,
                    location_id,
                    attendance_date,
                    clock_in,
                    clock_in_lat,
                    clock_in_lng,
                    clock_in_photo_url,
                    status.value,
                    ApprovalStatus.PENDING.value,
                    int(overtime),
                    int(double_duty),
                    int(is_override),
                    clocked_in_by,
                ),
            )
        return AttendanceRecord(
            attendance_id=attendance_id,
            staff_id=staff_id,
            supervisor_id=supervisor_id,
            location_id=location_id,
            attendance_date=attendance_date,
            clock_in=clock_in,
            clock_out=None,
            status=status,
            overtime=overtime,
            double_duty=double_duty,
            is_override=is_override,
            clock_in_lat=clock_in_lat,
            clock_in_lng=clock_in_lng,
            clock_in_photo_url=clock_in_photo_url,
            clocked_in_by=clocked_in_by,
        )

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET clock_out=%s, clock_out_lat=%s, clock_out_lng=%s, clock_out_photo_url=%s,
                    clocked_out_by=%s, is_override=%s
                WHERE attendance_id=%s AND clock_out IS NULL
                """,
                (
                    clock_out,
                    clock_out_lat,
                    clock_out_lng,
                    clock_out_photo_url,
                    clocked_out_by,
                    int(is_override),
                    attendance_id,
                ),
            )
            if cur.rowcount == 0:
                return None
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE attendance_id=%s", (attendance_id,))
            row = fetchone(cur)
            return _row_to_record(row) if row else None

    def save_review(self, record: AttendanceRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET approval_status=%s, overtime=%s, double_duty=%s,
                    overtime_approval_status=%s, double_duty_approval_status=%s,
                    marked_by_supervisor=%s, approved_by_manager=%s,
                    rejected_by=%s, rejection_reason=%s
                WHERE attendance_id=%s
                """,
                (
                    record.approval_status.value,
                    int(record.overtime),
                    int(record.double_duty),
                    record.overtime_approval_status.value if record.overtime_approval_status else None,
                    record.double_duty_approval_status.value if record.double_duty_approval_status else None,
                    record.marked_by_supervisor,
                    record.approved_by_manager,
                    record.rejected_by,
                    record.rejection_reason,
                    record.attendance_id,
                ),
            )
            # rowcount is 0 when nothing changed; existence is what matters here.
            cur.execute("SELECT 1 AS found FROM attendance WHERE attendance_id=%s", (record.attendance_id,))
            return fetchone(cur) is not None

    def list_between(
        self,
        *,
        date_from: str,
        date_to: str,
        supervisor_id: Optional[str] = None,
        location_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["attendance_date BETWEEN %s AND %s"]
        params: list[object] = [date_from, date_to]
        if supervisor_id:
            clauses.append("supervisor_id=%s")
            params.append(supervisor_id)
        if location_id:
            clauses.append("location_id=%s")
            params.append(location_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE {" AND ".join(clauses)}
                ORDER BY attendance_date DESC, clock_in ASC
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]
