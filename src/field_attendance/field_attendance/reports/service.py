"""Report reconciliation.

Merges attendance records, active assignments and approved leave into one
status per staff member per day. Read only: nothing here writes to any
repository.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from ..assignments.model import StaffAssignment
from ..assignments.repository import AssignmentRepository
from ..attendance.factory import AttendanceStrategyFactory
from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_iso_date, iso_date_range, now_local
from ..common.geotime import minutes_since_midnight, shift_start_minutes
from ..common.validators import require_fields
from ..core.constants import SHIFT_END_CUTOFF_MINUTES
from ..core.enums import ApprovalStatus, AttendanceStatus, ReportStatus
from ..core.exceptions import InvalidDateRangeError
from ..leave.model import LeaveRequest
from ..leave.repository import LeaveRepository
from ..locations.model import Location
from ..locations.repository import LocationRepository
from ..system.service import SystemConfigService
from ..users.model import StaffMember
from ..users.repository import DirectoryRepository
from .model import AttendanceReportRow

logger = logging.getLogger(__name__)

ALL = "all"


def _filter_value(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    if not value or value.lower() == ALL:
        return None
    return value


def _slug(value: str) -> str:
    return "-".join(str(value).strip().lower().split())


def normalize_report_status(raw: Optional[str]) -> ReportStatus:
    """Map a stored status onto the report vocabulary; unknown means absent."""
    if not raw:
        return ReportStatus.ABSENT
    try:
        return ReportStatus(_slug(raw))
    except ValueError:
        return ReportStatus.ABSENT


def _representative(records: Sequence[AttendanceRecord]) -> AttendanceRecord:
    # Non-rejected first, then earliest clock-in.
    return min(
        records,
        key=lambda r: (
            r.approval_status == ApprovalStatus.REJECTED,
            r.clock_in is None,
            r.clock_in or datetime.max,
        ),
    )


class ReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        assignments: AssignmentRepository,
        leaves: LeaveRepository,
        directory: DirectoryRepository,
        locations: LocationRepository,
        configs: SystemConfigService,
        *,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
    ):
        self._attendance = attendance
        self._assignments = assignments
        self._leaves = leaves
        self._directory = directory
        self._locations = locations
        self._configs = configs
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def generate_report(
        self,
        *,
        date_from: str,
        date_to: str,
        supervisor_id: Optional[str] = None,
        location_id: Optional[str] = None,
        status: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> List[AttendanceReportRow]:
        require_fields(date_from=date_from, date_to=date_to)
        dates = iso_date_range(date_from, date_to)
        if not dates:
            raise InvalidDateRangeError("date_from and date_to must be YYYY-MM-DD dates with date_from <= date_to")

        now = now or now_local()
        supervisor_id = _filter_value(supervisor_id)
        location_id = _filter_value(location_id)
        status_filter = _filter_value(status)
        first, last = dates[0], dates[-1]

        assigned = self._assigned_staff(supervisor_id=supervisor_id, location_id=location_id)

        grouped: Dict[Tuple[str, str], List[AttendanceRecord]] = {}
        for record in self._attendance.list_between(
            date_from=first,
            date_to=last,
            supervisor_id=supervisor_id,
            location_id=location_id,
        ):
            grouped.setdefault((record.staff_id, record.attendance_date), []).append(record)
        records = {key: _representative(group) for key, group in grouped.items()}

        leaves = [
            leave
            for leave in self._leaves.list_overlapping(date_from=first, date_to=last, status=ApprovalStatus.APPROVED)
            if leave.staff_id in assigned
        ]

        users = self._directory.get_many(
            sorted(
                {r.staff_id for r in records.values()}
                | {r.supervisor_id for r in records.values()}
                | set(assigned)
                | {a.supervisor_id for a in assigned.values()}
            )
        )
        locations = self._locations.get_many(
            sorted({r.location_id for r in records.values()} | {a.location_id for a in assigned.values()})
        )
        grace = self._configs.get_config().grace_period_minutes

        rows: List[AttendanceReportRow] = []
        covered: Set[Tuple[str, str]] = set(records)

        for record in records.values():
            rows.append(self._record_row(record, assigned.get(record.staff_id), users, locations, grace))

        for leave in leaves:
            assignment = assigned[leave.staff_id]
            for day in self._leave_days(leave, first, last):
                if (leave.staff_id, day) in covered:
                    continue
                covered.add((leave.staff_id, day))
                rows.append(self._leave_row(leave, day, assignment, users, locations))

        today = format_iso_date(now.date())
        past_cutoff = minutes_since_midnight(now) >= SHIFT_END_CUTOFF_MINUTES

        for staff_id, assignment in assigned.items():
            for day in dates:
                if (staff_id, day) in covered:
                    continue
                if day > today or (day == today and not past_cutoff):
                    continue
                rows.append(self._absent_row(assignment, day, users, locations))

        if status_filter:
            wanted = _slug(status_filter)
            rows = [row for row in rows if row.status.value == wanted]

        rows.sort(key=lambda row: row.staff_name.lower())
        rows.sort(key=lambda row: row.attendance_date, reverse=True)

        logger.debug(
            "Report %s..%s supervisor=%s location=%s status=%s: %d rows",
            first,
            last,
            supervisor_id,
            location_id,
            status_filter,
            len(rows),
        )
        return rows

    # -- helpers -----------------------------------------------------------

    def _assigned_staff(self, *, supervisor_id: Optional[str], location_id: Optional[str]) -> Dict[str, StaffAssignment]:
        assigned: Dict[str, StaffAssignment] = {}
        for assignment in self._assignments.list_active_assignments():
            if supervisor_id and assignment.supervisor_id != supervisor_id:
                continue
            if location_id and assignment.location_id != location_id:
                continue
            assigned.setdefault(assignment.staff_id, assignment)
        return assigned

    @staticmethod
    def _leave_days(leave: LeaveRequest, first: str, last: str) -> Iterable[str]:
        return iso_date_range(max(leave.start_date, first), min(leave.end_date, last))

    def _derive_status(self, record: AttendanceRecord, location: Optional[Location], grace: int) -> ReportStatus:
        if record.approval_status == ApprovalStatus.REJECTED:
            return ReportStatus.ABSENT
        if record.clock_in is not None:
            shift_start = location.shift_start_minutes() if location else shift_start_minutes()
            decision = self._factory.decide(
                clock_in=record.clock_in,
                shift_start_minutes=shift_start,
                grace_minutes=grace,
            )
            return ReportStatus.LATE if decision.status == AttendanceStatus.LATE else ReportStatus.PRESENT
        return normalize_report_status(record.status.value if record.status else None)

    def _record_row(
        self,
        record: AttendanceRecord,
        assignment: Optional[StaffAssignment],
        users: Mapping[str, StaffMember],
        locations: Mapping[str, Location],
        grace: int,
    ) -> AttendanceReportRow:
        staff = users.get(record.staff_id)
        supervisor = users.get(record.supervisor_id)
        location = locations.get(record.location_id)
        if location is None and assignment is not None:
            location = locations.get(assignment.location_id)

        return AttendanceReportRow(
            row_id=record.attendance_id,
            staff_id=record.staff_id,
            staff_name=staff.display_name if staff else "Unknown Staff",
            attendance_date=record.attendance_date,
            status=self._derive_status(record, location, grace),
            raw_status=record.status.value if record.status else None,
            emp_no=staff.emp_no if staff else None,
            department=staff.department if staff else None,
            supervisor_id=record.supervisor_id,
            supervisor_name=supervisor.display_name if supervisor else "Unknown Supervisor",
            location_id=record.location_id,
            location_name=location.display_name if location else "Unknown Area",
            clock_in=record.clock_in,
            clock_out=record.clock_out,
            overtime=record.overtime,
            double_duty=record.double_duty,
            is_override=record.is_override,
            approval_status=record.approval_status.value,
        )

    @staticmethod
    def _synthetic_row(
        *,
        row_id: str,
        assignment: StaffAssignment,
        day: str,
        status: ReportStatus,
        raw_status: str,
        users: Mapping[str, StaffMember],
        locations: Mapping[str, Location],
        notes: str = "",
    ) -> AttendanceReportRow:
        staff = users.get(assignment.staff_id)
        supervisor = users.get(assignment.supervisor_id)
        location = locations.get(assignment.location_id)
        return AttendanceReportRow(
            row_id=row_id,
            staff_id=assignment.staff_id,
            staff_name=staff.display_name if staff else "Unknown Staff",
            attendance_date=day,
            status=status,
            raw_status=raw_status,
            emp_no=staff.emp_no if staff else None,
            department=staff.department if staff else None,
            supervisor_id=assignment.supervisor_id,
            supervisor_name=supervisor.display_name if supervisor else "Unknown Supervisor",
            location_id=assignment.location_id,
            location_name=location.display_name if location else "Unknown Area",
            approval_status=ApprovalStatus.APPROVED.value,
            notes=notes,
        )

    def _leave_row(self, leave, day, assignment, users, locations) -> AttendanceReportRow:
        return self._synthetic_row(
            row_id=f"leave-{leave.request_id}-{day}",
            assignment=assignment,
            day=day,
            status=ReportStatus.ON_LEAVE,
            raw_status="On Leave",
            users=users,
            locations=locations,
            notes=f"{leave.leave_type} leave",
        )

    def _absent_row(self, assignment, day, users, locations) -> AttendanceReportRow:
        return self._synthetic_row(
            row_id=f"absent-{assignment.staff_id}-{day}",
            assignment=assignment,
            day=day,
            status=ReportStatus.ABSENT,
            raw_status=AttendanceStatus.ABSENT.value,
            users=users,
            locations=locations,
        )
