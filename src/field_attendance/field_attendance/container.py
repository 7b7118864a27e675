from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .assignments.mysql_assignment_repository import MySQLAssignmentRepository
from .assignments.repository import AssignmentRepository
from .assignments.resolver import AssignmentResolver
from .assignments.service import AssignmentService
from .attendance.approval_service import AttendanceApprovalService
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.locks import KeyedLocks, LockProvider
from .core.constants import DEFAULT_DB_TIMEOUT_SECONDS, DEFAULT_LOCK_TIMEOUT_SECONDS
from .database.connection import DatabaseConnection, DBConfig
from .database.locks import MySQLAdvisoryLocks
from .leave.mysql_leave_repository import MySQLHolidayRepository, MySQLLeaveRepository
from .leave.repository import HolidayRepository, LeaveRepository
from .leave.service import LeaveService
from .locations.mysql_location_repository import MySQLLocationRepository
from .locations.repository import LocationRepository
from .notifications.sink import LoggingNotificationSink, NotificationSink
from .reports.service import ReportService
from .system.mysql_system_config_repository import MySQLSystemConfigRepository
from .system.repository import SystemConfigRepository
from .system.service import SystemConfigService
from .users.mysql_directory_repository import MySQLDirectoryRepository
from .users.repository import DirectoryRepository


@dataclass(frozen=True)
class Container:
    directory_repo: DirectoryRepository
    locations_repo: LocationRepository
    assignments_repo: AssignmentRepository
    attendance_repo: AttendanceRepository
    leave_repo: LeaveRepository
    holidays_repo: HolidayRepository
    system_config_repo: SystemConfigRepository

    system_config_service: SystemConfigService
    attendance_service: AttendanceService
    approval_service: AttendanceApprovalService
    report_service: ReportService
    leave_service: LeaveService
    assignment_service: AssignmentService

    conn: Optional[DatabaseConnection] = None


def assemble_container(
    *,
    directory: DirectoryRepository,
    locations: LocationRepository,
    assignments: AssignmentRepository,
    attendance: AttendanceRepository,
    leaves: LeaveRepository,
    holidays: HolidayRepository,
    system_configs: SystemConfigRepository,
    locks: Optional[LockProvider] = None,
    notifications: Optional[NotificationSink] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any set of repositories (MySQL in the app, fakes in tests)."""
    factory = AttendanceStrategyFactory()
    system_config_service = SystemConfigService(system_configs)
    resolver = AssignmentResolver(assignments)

    attendance_service = AttendanceService(
        attendance,
        directory,
        locations,
        resolver,
        holidays,
        system_config_service,
        strategy_factory=factory,
        locks=locks or KeyedLocks(),
    )
    report_service = ReportService(
        attendance,
        assignments,
        leaves,
        directory,
        locations,
        system_config_service,
        strategy_factory=factory,
    )

    return Container(
        directory_repo=directory,
        locations_repo=locations,
        assignments_repo=assignments,
        attendance_repo=attendance,
        leave_repo=leaves,
        holidays_repo=holidays,
        system_config_repo=system_configs,
        system_config_service=system_config_service,
        attendance_service=attendance_service,
        approval_service=AttendanceApprovalService(attendance, directory),
        report_service=report_service,
        leave_service=LeaveService(leaves, directory, notifications=notifications or LoggingNotificationSink()),
        assignment_service=AssignmentService(assignments),
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    db_timeout_seconds: int = DEFAULT_DB_TIMEOUT_SECONDS,
    lock_timeout_seconds: int = DEFAULT_LOCK_TIMEOUT_SECONDS,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config, connection_timeout=db_timeout_seconds))

    return assemble_container(
        directory=MySQLDirectoryRepository(conn),
        locations=MySQLLocationRepository(conn),
        assignments=MySQLAssignmentRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        leaves=MySQLLeaveRepository(conn),
        holidays=MySQLHolidayRepository(conn),
        system_configs=MySQLSystemConfigRepository(conn),
        locks=MySQLAdvisoryLocks(conn, timeout_seconds=lock_timeout_seconds),
        conn=conn,
    )
