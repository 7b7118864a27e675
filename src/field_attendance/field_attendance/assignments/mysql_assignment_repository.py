from __future__ import annotations

import uuid
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import StaffAssignment, SupervisorLocation
from .repository import AssignmentRepository


def _row_to_assignment(row: Dict[str, Any]) -> StaffAssignment:
    return StaffAssignment(
        assignment_id=str(row["assignment_id"]),
        staff_id=str(row["staff_id"]),
        supervisor_id=str(row["supervisor_id"]),
        location_id=str(row["location_id"]),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLAssignmentRepository(AssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_supervisor_location(self, *, supervisor_id: str, location_id: str) -> Optional[SupervisorLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT mapping_id, supervisor_id, location_id
                FROM supervisor_locations
                WHERE supervisor_id=%s AND location_id=%s
                LIMIT 1
                """,
                (supervisor_id, location_id),
            )
            row = fetchone(cur)
            if not row:
                return None
            return SupervisorLocation(
                mapping_id=str(row["mapping_id"]),
                supervisor_id=str(row["supervisor_id"]),
                location_id=str(row["location_id"]),
            )

    def find_active_assignment(
        self,
        *,
        staff_id: str,
        supervisor_id: Optional[str] = None,
        location_id: Optional[str] = None,
    ) -> Optional[StaffAssignment]:
        clauses = ["staff_id=%s", "is_active=1"]
        params: list[object] = [staff_id]
        if supervisor_id is not None:
            clauses.append("supervisor_id=%s")
            params.append(supervisor_id)
        if location_id is not None:
            clauses.append("location_id=%s")
            params.append(location_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT assignment_id, staff_id, supervisor_id, location_id, is_active
                FROM staff_assignments
                WHERE {" AND ".join(clauses)}
                ORDER BY created_at DESC
                LIMIT 1
                """,
                tuple(params),
            )
            row = fetchone(cur)
            return _row_to_assignment(row) if row else None

    def list_active_assignments(self) -> Sequence[StaffAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT assignment_id, staff_id, supervisor_id, location_id, is_active
                FROM staff_assignments
                WHERE is_active=1
                ORDER BY created_at DESC
                """
            )
            return [_row_to_assignment(r) for r in fetchall(cur)]

    def create_assignment(self, *, staff_id: str, supervisor_id: str, location_id: str) -> StaffAssignment:
        assignment_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE staff_assignments SET is_active=0 WHERE staff_id=%s AND is_active=1", (staff_id,))
            cur.execute(
                """
                INSERT INTO staff_assignments(assignment_id, staff_id, supervisor_id, location_id, is_active)
                VALUES(%s,%s,%s,%s,1)
                """,
                (assignment_id, staff_id, supervisor_id, location_id),
            )
        return StaffAssignment(
            assignment_id=assignment_id,
            staff_id=staff_id,
            supervisor_id=supervisor_id,
            location_id=location_id,
        )

    def deactivate_assignment(self, *, assignment_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE staff_assignments SET is_active=0 WHERE assignment_id=%s", (assignment_id,))
            return cur.rowcount > 0

    def replace_supervisor_location(self, *, supervisor_id: str, location_id: str) -> SupervisorLocation:
        mapping_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM supervisor_locations WHERE supervisor_id=%s AND location_id=%s",
                (supervisor_id, location_id),
            )
            cur.execute(
                "INSERT INTO supervisor_locations(mapping_id, supervisor_id, location_id) VALUES(%s,%s,%s)",
                (mapping_id, supervisor_id, location_id),
            )
        return SupervisorLocation(mapping_id=mapping_id, supervisor_id=supervisor_id, location_id=location_id)
