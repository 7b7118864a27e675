from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..assignments.resolver import AssignmentResolver
from ..common.datetime_utils import format_iso_date, now_local, try_parse_iso_date
from ..common.geotime import distance_meters, is_weekly_off, shift_start_minutes
from ..common.locks import KeyedLocks, LockProvider
from ..common.validators import require_fields
from ..core.enums import Role
from ..core.exceptions import (
    InfrastructureError,
    InvalidDateRangeError,
    NotFoundError,
    PolicyViolationError,
    RateLimitedError,
)
from ..leave.repository import HolidayRepository
from ..locations.model import Location
from ..locations.repository import LocationRepository
from ..system.service import SystemConfigService
from ..users.model import StaffMember
from ..users.repository import DirectoryRepository
from ..users.roles import has_management_privileges, normalize_role
from .factory import AttendanceStrategyFactory
from .model import AttendanceResult, ClockInRequest, ClockOutRequest, GeoPoint
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ActionContext:
    staff: StaffMember
    supervisor: StaffMember
    location: Location
    is_self_action: bool
    override_mode: bool


class AttendanceService:
    """Clock-in/clock-out state machine for one staff member on one attendance date.

    States per (staff, date): no record -> open (clocked in) -> closed. Repeating
    an action that already happened returns the stored record with
    ``already_processed`` set and writes nothing.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        directory: DirectoryRepository,
        locations: LocationRepository,
        resolver: AssignmentResolver,
        holidays: HolidayRepository,
        configs: SystemConfigService,
        *,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        locks: Optional[LockProvider] = None,
    ):
        self._attendance = attendance
        self._directory = directory
        self._locations = locations
        self._resolver = resolver
        self._holidays = holidays
        self._configs = configs
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._locks = locks or KeyedLocks()

    # -- shared validation -------------------------------------------------

    def _prepare(
        self,
        *,
        staff_id: str,
        supervisor_id: str,
        location_id: str,
        actor: StaffMember,
        geo: Optional[GeoPoint],
        is_override_requested: bool,
        action: str,
    ) -> _ActionContext:
        require_fields(staff_id=staff_id, supervisor_id=supervisor_id, location_id=location_id)

        supervisor = self._directory.get_by_id(supervisor_id)
        if not supervisor:
            raise NotFoundError("Supervisor", supervisor_id)
        location = self._locations.get_by_id(location_id)
        if not location:
            raise NotFoundError("Location", location_id)
        staff = supervisor if staff_id == supervisor_id else self._directory.get_by_id(staff_id)
        if not staff:
            raise NotFoundError("Staff", staff_id)

        actor_role = normalize_role(actor.role)
        is_self_action = actor.user_id == staff_id
        override_mode = bool(is_override_requested) and actor_role == Role.GENERAL_MANAGER and not is_self_action

        if actor_role in (Role.MANAGER, Role.GENERAL_MANAGER) and is_self_action:
            self._enforce_office(location, geo, action)

        return _ActionContext(
            staff=staff,
            supervisor=supervisor,
            location=location,
            is_self_action=is_self_action,
            override_mode=override_mode,
        )

    @staticmethod
    def _enforce_office(location: Location, geo: Optional[GeoPoint], action: str) -> None:
        if not location.is_office_location:
            raise PolicyViolationError(f"Managers and General Managers must clock {action} at office location")
        if geo is not None and location.has_geocenter:
            distance = distance_meters(geo.lat, geo.lng, location.center_lat, location.center_lng)
            if distance > location.effective_radius_meters:
                raise PolicyViolationError(f"You must be at the office location to clock {action}")

    @staticmethod
    def _resolve_attendance_date(
        requested: Optional[str],
        *,
        actor: StaffMember,
        is_self_action: bool,
        now: datetime,
    ) -> str:
        today = now.date()
        if requested is None or not str(requested).strip():
            return format_iso_date(today)

        parsed = try_parse_iso_date(requested)
        if parsed is None:
            raise InvalidDateRangeError("attendance_date must use the YYYY-MM-DD format")
        if parsed == today:
            return format_iso_date(today)

        if is_self_action or not has_management_privileges(actor.role):
            raise InvalidDateRangeError("Only managers acting for another staff member may set the attendance date")
        if parsed > today:
            raise InvalidDateRangeError("attendance_date cannot be in the future")
        if parsed < today - timedelta(days=1):
            raise InvalidDateRangeError("attendance_date may be at most one day in the past")
        return format_iso_date(parsed)

    @staticmethod
    def _lock_key(staff_id: str, attendance_date: str) -> str:
        return f"attendance:{staff_id}:{attendance_date}"

    def _clocked_by_name(self, clocked_by: Optional[str], *, staff_id: str, actor: StaffMember) -> Optional[str]:
        if not clocked_by or clocked_by == staff_id:
            return None
        if clocked_by == actor.user_id:
            return actor.display_name
        user = self._directory.get_by_id(clocked_by)
        return user.display_name if user else "Unknown"

    def _is_non_working_day(self, staff: StaffMember, attendance_date: str) -> bool:
        day = try_parse_iso_date(attendance_date)
        if day is not None and is_weekly_off(staff.shift_days, day):
            return True
        return self._holidays.get_by_date(attendance_date) is not None

    # -- operations --------------------------------------------------------

    def clock_in(self, request: ClockInRequest, *, actor: StaffMember, now: Optional[datetime] = None) -> AttendanceResult:
        now = now or now_local()
        ctx = self._prepare(
            staff_id=request.staff_id,
            supervisor_id=request.supervisor_id,
            location_id=request.location_id,
            actor=actor,
            geo=request.geo,
            is_override_requested=request.is_override,
            action="in",
        )

        if ctx.override_mode:
            self._resolver.verify_override_target(
                staff=ctx.staff,
                supervisor_id=request.supervisor_id,
                location_id=request.location_id,
            )
        else:
            self._resolver.resolve(
                staff_id=request.staff_id,
                supervisor_id=request.supervisor_id,
                location_id=request.location_id,
            )

        attendance_date = self._resolve_attendance_date(
            request.attendance_date,
            actor=actor,
            is_self_action=ctx.is_self_action,
            now=now,
        )

        with self._locks.hold(self._lock_key(request.staff_id, attendance_date)):
            existing = self._attendance.find_for_staff_date(staff_id=request.staff_id, attendance_date=attendance_date)
            open_record = next((r for r in existing if r.is_open), None)
            if open_record:
                logger.debug("Staff %s already clocked in on %s", request.staff_id, attendance_date)
                return AttendanceResult(
                    record=open_record,
                    already_processed=True,
                    clocked_by_name=self._clocked_by_name(
                        open_record.clocked_in_by, staff_id=request.staff_id, actor=actor
                    ),
                )

            config = self._configs.get_config()
            decision = self._factory.decide(
                clock_in=now,
                shift_start_minutes=shift_start_minutes(ctx.staff.shift_start_time),
                grace_minutes=config.grace_period_minutes,
            )
            overtime = bool(request.overtime) or self._is_non_working_day(ctx.staff, attendance_date)

            clocked_in_by = None if ctx.is_self_action else actor.user_id
            geo = request.geo
            record = self._attendance.create_clock_in(
                staff_id=request.staff_id,
                supervisor_id=request.supervisor_id,
                location_id=request.location_id,
                attendance_date=attendance_date,
                clock_in=now,
                status=decision.status,
                overtime=overtime,
                double_duty=bool(request.double_duty),
                is_override=ctx.override_mode,
                clock_in_lat=geo.lat if geo else None,
                clock_in_lng=geo.lng if geo else None,
                clock_in_photo_url=request.photo_url or None,
                clocked_in_by=clocked_in_by,
            )

        logger.info(
            "Clock-in %s: staff=%s date=%s status=%s overtime=%s override=%s by=%s",
            record.attendance_id,
            record.staff_id,
            attendance_date,
            record.status.value,
            record.overtime,
            record.is_override,
            actor.user_id,
        )
        return AttendanceResult(
            record=record,
            clocked_by_name=actor.display_name if clocked_in_by else None,
        )

    def clock_out(self, request: ClockOutRequest, *, actor: StaffMember, now: Optional[datetime] = None) -> AttendanceResult:
        now = now or now_local()
        ctx = self._prepare(
            staff_id=request.staff_id,
            supervisor_id=request.supervisor_id,
            location_id=request.location_id,
            actor=actor,
            geo=request.geo,
            is_override_requested=request.is_override,
            action="out",
        )

        if ctx.override_mode:
            self._resolver.verify_override_target(
                staff=ctx.staff,
                supervisor_id=request.supervisor_id,
                location_id=request.location_id,
            )
        else:
            # Staff-to-supervisor assignment is not re-checked on the way out.
            self._resolver.resolve_supervisor_location(
                supervisor_id=request.supervisor_id,
                location_id=request.location_id,
            )

        attendance_date = self._resolve_attendance_date(
            request.attendance_date,
            actor=actor,
            is_self_action=ctx.is_self_action,
            now=now,
        )

        with self._locks.hold(self._lock_key(request.staff_id, attendance_date)):
            candidates = self._attendance.find_for_staff_date(
                staff_id=request.staff_id,
                attendance_date=attendance_date,
                supervisor_id=request.supervisor_id,
                location_id=request.location_id,
            )
            record = next((r for r in candidates if r.is_open), None)
            if record is None:
                closed = next((r for r in candidates if r.is_closed), None)
                if closed is None:
                    raise NotFoundError(
                        "Attendance",
                        message=f"No open attendance record found for {attendance_date}",
                    )
                logger.debug("Staff %s already clocked out on %s", request.staff_id, attendance_date)
                return AttendanceResult(
                    record=closed,
                    already_processed=True,
                    clocked_by_name=self._clocked_by_name(closed.clocked_out_by, staff_id=request.staff_id, actor=actor),
                )

            if not ctx.override_mode and record.clock_in is not None:
                interval_hours = float(self._configs.get_config().min_clock_interval_hours)
                elapsed_hours = (now - record.clock_in).total_seconds() / 3600
                if elapsed_hours < interval_hours:
                    raise RateLimitedError(
                        remaining_minutes=math.ceil((interval_hours - elapsed_hours) * 60),
                        interval_hours=interval_hours,
                    )

            clocked_out_by = None if ctx.is_self_action else actor.user_id
            geo = request.geo
            updated = self._attendance.update_clock_out(
                attendance_id=record.attendance_id,
                clock_out=now,
                is_override=record.is_override or ctx.override_mode,
                clock_out_lat=geo.lat if geo else None,
                clock_out_lng=geo.lng if geo else None,
                clock_out_photo_url=request.photo_url or None,
                clocked_out_by=clocked_out_by,
            )
            if updated is None:
                raise InfrastructureError(f"Attendance record {record.attendance_id} changed during clock-out")

        logger.info(
            "Clock-out %s: staff=%s date=%s override=%s by=%s",
            updated.attendance_id,
            updated.staff_id,
            attendance_date,
            updated.is_override,
            actor.user_id,
        )
        return AttendanceResult(
            record=updated,
            clocked_by_name=actor.display_name if clocked_out_by else None,
        )
