from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Dict, List, Optional

import pytest

from field_attendance.assignments.model import StaffAssignment, SupervisorLocation
from field_attendance.attendance.model import AttendanceRecord
from field_attendance.container import Container, assemble_container
from field_attendance.core.enums import ApprovalStatus, AttendanceStatus
from field_attendance.leave.model import Holiday, LeaveRequest
from field_attendance.locations.model import Location
from field_attendance.system.model import SystemConfig
from field_attendance.users.model import StaffMember

# Tuesday; 2026-03-08 is a Sunday.
TODAY = "2026-03-10"


def at(day: str, hh: int, mm: int, ss: int = 0) -> datetime:
    return datetime.strptime(day, "%Y-%m-%d").replace(hour=hh, minute=mm, second=ss)


class InMemoryDirectory:
    def __init__(self, members: List[StaffMember]):
        self.members: Dict[str, StaffMember] = {m.user_id: m for m in members}

    def get_by_id(self, user_id: str) -> Optional[StaffMember]:
        return self.members.get(user_id)

    def get_many(self, user_ids):
        return {i: self.members[i] for i in user_ids if i in self.members}


class InMemoryLocations:
    def __init__(self, locations: List[Location]):
        self.locations: Dict[str, Location] = {loc.location_id: loc for loc in locations}

    def get_by_id(self, location_id: str) -> Optional[Location]:
        return self.locations.get(location_id)

    def get_many(self, location_ids):
        return {i: self.locations[i] for i in location_ids if i in self.locations}


class InMemoryAssignments:
    def __init__(self):
        self.assignments: List[StaffAssignment] = []
        self.mappings: List[SupervisorLocation] = []
        self._seq = 0

    def _next(self, prefix: str) -> str:
        self._seq += 1
        return f"{prefix}-{self._seq}"

    def add_assignment(self, staff_id: str, supervisor_id: str, location_id: str) -> StaffAssignment:
        assignment = StaffAssignment(self._next("asg"), staff_id, supervisor_id, location_id)
        self.assignments.append(assignment)
        return assignment

    def add_mapping(self, supervisor_id: str, location_id: str) -> SupervisorLocation:
        mapping = SupervisorLocation(self._next("map"), supervisor_id, location_id)
        self.mappings.append(mapping)
        return mapping

    def find_supervisor_location(self, *, supervisor_id, location_id):
        return next(
            (m for m in self.mappings if m.supervisor_id == supervisor_id and m.location_id == location_id),
            None,
        )

    def find_active_assignment(self, *, staff_id, supervisor_id=None, location_id=None):
        for a in reversed(self.assignments):
            if not a.is_active or a.staff_id != staff_id:
                continue
            if supervisor_id is not None and a.supervisor_id != supervisor_id:
                continue
            if location_id is not None and a.location_id != location_id:
                continue
            return a
        return None

    def list_active_assignments(self):
        return [a for a in self.assignments if a.is_active]

    def create_assignment(self, *, staff_id, supervisor_id, location_id):
        self.assignments = [
            replace(a, is_active=False) if a.staff_id == staff_id else a for a in self.assignments
        ]
        return self.add_assignment(staff_id, supervisor_id, location_id)

    def deactivate_assignment(self, *, assignment_id):
        for i, a in enumerate(self.assignments):
            if a.assignment_id == assignment_id:
                self.assignments[i] = replace(a, is_active=False)
                return True
        return False

    def replace_supervisor_location(self, *, supervisor_id, location_id):
        self.mappings = [
            m for m in self.mappings if not (m.supervisor_id == supervisor_id and m.location_id == location_id)
        ]
        return self.add_mapping(supervisor_id, location_id)


class InMemoryAttendance:
    def __init__(self):
        self.records: Dict[str, AttendanceRecord] = {}
        self._seq = 0

    def add(self, **fields) -> AttendanceRecord:
        self._seq += 1
        fields.setdefault("attendance_id", f"att-{self._seq}")
        fields.setdefault("clock_out", None)
        fields.setdefault("status", AttendanceStatus.PRESENT)
        record = AttendanceRecord(**fields)
        self.records[record.attendance_id] = record
        return record

    def get_by_id(self, attendance_id):
        return self.records.get(attendance_id)

    def find_for_staff_date(self, *, staff_id, attendance_date, supervisor_id=None, location_id=None):
        found = [
            r
            for r in self.records.values()
            if r.staff_id == staff_id
            and r.attendance_date == attendance_date
            and (supervisor_id is None or r.supervisor_id == supervisor_id)
            and (location_id is None or r.location_id == location_id)
        ]
        return list(reversed(found))

    def create_clock_in(self, **fields):
        return self.add(**fields)

    def update_clock_out(self, *, attendance_id, clock_out, is_override, **fields):
        record = self.records.get(attendance_id)
        if record is None or record.clock_out is not None:
            return None
        record = replace(record, clock_out=clock_out, is_override=is_override, **fields)
        self.records[attendance_id] = record
        return record

    def save_review(self, record):
        if record.attendance_id not in self.records:
            return False
        self.records[record.attendance_id] = record
        return True

    def list_between(self, *, date_from, date_to, supervisor_id=None, location_id=None):
        return [
            r
            for r in self.records.values()
            if date_from <= r.attendance_date <= date_to
            and (not supervisor_id or r.supervisor_id == supervisor_id)
            and (not location_id or r.location_id == location_id)
        ]


class InMemoryLeaves:
    def __init__(self):
        self.requests: Dict[str, LeaveRequest] = {}
        self._seq = 0

    def add(self, staff_id, start_date, end_date, *, status=ApprovalStatus.APPROVED, leave_type="annual", **extra):
        self._seq += 1
        request_id = extra.pop("request_id", f"L{self._seq}")
        leave = LeaveRequest(request_id, staff_id, leave_type, start_date, end_date, status, **extra)
        self.requests[request_id] = leave
        return leave

    def get_by_id(self, request_id):
        return self.requests.get(request_id)

    def list_overlapping(self, *, date_from, date_to, status):
        return [
            r
            for r in self.requests.values()
            if r.status == status and r.start_date <= date_to and r.end_date >= date_from
        ]

    def create(self, *, staff_id, supervisor_id, leave_type, start_date, end_date, reason):
        return self.add(
            staff_id,
            start_date,
            end_date,
            status=ApprovalStatus.PENDING,
            leave_type=leave_type,
            supervisor_id=supervisor_id,
            reason=reason,
        )

    def set_status(self, *, request_id, status, approved_by):
        leave = self.requests.get(request_id)
        if leave is None:
            return None
        leave = replace(leave, status=status, approved_by=approved_by)
        self.requests[request_id] = leave
        return leave


class InMemoryHolidays:
    def __init__(self):
        self.holidays: Dict[str, Holiday] = {}

    def add(self, day: str, name: str = "Holiday") -> Holiday:
        self.holidays[day] = Holiday(date=day, name=name)
        return self.holidays[day]

    def get_by_date(self, day):
        return self.holidays.get(day)


class InMemorySystemConfig:
    def __init__(self, config: Optional[SystemConfig] = None):
        self.config = config
        self.saves = 0

    def load(self):
        return self.config

    def save(self, config):
        self.config = config
        self.saves += 1


class RecordingNotifications:
    def __init__(self):
        self.sent = []

    def send(self, user_id, title, body, data=None):
        self.sent.append((user_id, title, body, dict(data or {})))


@dataclass
class World:
    directory: InMemoryDirectory
    locations: InMemoryLocations
    assignments: InMemoryAssignments
    attendance: InMemoryAttendance
    leaves: InMemoryLeaves
    holidays: InMemoryHolidays
    configs: InMemorySystemConfig
    notifications: RecordingNotifications

    def container(self) -> Container:
        return assemble_container(
            directory=self.directory,
            locations=self.locations,
            assignments=self.assignments,
            attendance=self.attendance,
            leaves=self.leaves,
            holidays=self.holidays,
            system_configs=self.configs,
            notifications=self.notifications,
        )

    def user(self, user_id: str) -> StaffMember:
        return self.directory.members[user_id]


def _members() -> List[StaffMember]:
    return [
        StaffMember("s1", "Sam Staff", "sam", "staff", department="Operations", shift_start_time="09:00", emp_no="E-1"),
        StaffMember("s2", "Ana Staff", "ana", "staff", department="Logistics", shift_days=5, shift_start_time="08:00"),
        StaffMember("s3", "Ned Unassigned", "ned", "staff", department="Operations"),
        StaffMember("sup1", "Sue Supervisor", "sue", "supervisor", department="Operations"),
        StaffMember("sup2", "Sid Supervisor", "sid", "supervisor", department="Logistics"),
        StaffMember("m1", "Mia Manager", "mia", "manager", department="Operations"),
        StaffMember("gm1", "Gil General", "gil", "general_manager", departments=("Operations",)),
        StaffMember("ceo1", "Cara Chief", "cara", "ceo"),
    ]


def _locations() -> List[Location]:
    return [
        Location("site1", "North Site", code="NS", center_lat=10.0, center_lng=20.0, morning_shift_start="08:00"),
        Location("site2", "South Yard", code="SY"),
        Location("office", "Head Office", code="HQ", center_lat=10.5, center_lng=20.5, radius_meters=100),
    ]


@pytest.fixture()
def world() -> World:
    assignments = InMemoryAssignments()
    assignments.add_mapping("sup1", "site1")
    assignments.add_mapping("sup2", "site2")
    assignments.add_mapping("m1", "office")
    assignments.add_mapping("gm1", "office")
    assignments.add_assignment("s1", "sup1", "site1")
    assignments.add_assignment("s2", "sup2", "site2")

    return World(
        directory=InMemoryDirectory(_members()),
        locations=InMemoryLocations(_locations()),
        assignments=assignments,
        attendance=InMemoryAttendance(),
        leaves=InMemoryLeaves(),
        holidays=InMemoryHolidays(),
        configs=InMemorySystemConfig(),
        notifications=RecordingNotifications(),
    )


@pytest.fixture()
def container(world: World) -> Container:
    return world.container()
