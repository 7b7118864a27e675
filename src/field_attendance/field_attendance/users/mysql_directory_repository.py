from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, placeholders
from .model import StaffMember
from .repository import DirectoryRepository

_COLUMNS = """
    user_id, full_name, username, role, department, departments,
    shift_days, shift_start_time, shift_end_time, emp_no, is_active
"""


def _row_to_member(row: Dict[str, Any]) -> StaffMember:
    departments = tuple(d.strip() for d in (row.get("departments") or "").split(",") if d.strip())
    return StaffMember(
        user_id=str(row["user_id"]),
        full_name=row.get("full_name") or "",
        username=row.get("username") or "",
        role=row.get("role") or "",
        department=row.get("department"),
        departments=departments,
        shift_days=int(row.get("shift_days") or 6),
        shift_start_time=row.get("shift_start_time"),
        shift_end_time=row.get("shift_end_time"),
        emp_no=row.get("emp_no"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLDirectoryRepository(DirectoryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[StaffMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_member(row) if row else None

    def get_many(self, user_ids: Sequence[str]) -> Mapping[str, StaffMember]:
        ids = [i for i in user_ids if i]
        if not ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id IN ({placeholders(ids)})", tuple(ids))
            members = (_row_to_member(r) for r in fetchall(cur))
            return {m.user_id: m for m in members}
