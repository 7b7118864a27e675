from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from field_attendance.attendance.model import ClockInRequest, ClockOutRequest, GeoPoint
from field_attendance.core.exceptions import AuthorizationError, NotFoundError, PolicyViolationError, RateLimitedError
from field_attendance.system.model import SystemConfig

from conftest import TODAY, at


def _in(**overrides) -> ClockInRequest:
    values = dict(staff_id="s1", supervisor_id="sup1", location_id="site1")
    values.update(overrides)
    return ClockInRequest(**values)


def _out(**overrides) -> ClockOutRequest:
    values = dict(staff_id="s1", supervisor_id="sup1", location_id="site1")
    values.update(overrides)
    return ClockOutRequest(**values)


def test_clock_out_after_minimum_interval(world, container):
    svc = container.attendance_service
    svc.clock_in(_in(), actor=world.user("s1"), now=at(TODAY, 9, 0))

    result = svc.clock_out(
        _out(geo=GeoPoint(10.0, 20.0), photo_url="photos/out.jpg"),
        actor=world.user("s1"),
        now=at(TODAY, 17, 30),
    )

    assert result.already_processed is False
    assert result.record.clock_out == at(TODAY, 17, 30)
    assert result.record.clock_out_photo_url == "photos/out.jpg"
    assert result.record.clocked_out_by is None


def test_clock_out_too_early_reports_remaining_minutes(world, container):
    svc = container.attendance_service
    svc.clock_in(_in(), actor=world.user("s1"), now=at(TODAY, 9, 0))

    with pytest.raises(RateLimitedError) as exc:
        svc.clock_out(_out(), actor=world.user("s1"), now=at(TODAY, 12, 0))

    assert exc.value.remaining_minutes == 180
    assert "Please wait 180 more minute(s)" in str(exc.value)
    assert next(iter(world.attendance.records.values())).clock_out is None


def test_remaining_minutes_round_up(world, container):
    svc = container.attendance_service
    svc.clock_in(_in(), actor=world.user("s1"), now=at(TODAY, 9, 0))

    with pytest.raises(RateLimitedError) as exc:
        svc.clock_out(_out(), actor=world.user("s1"), now=at(TODAY, 14, 59, 30))

    assert exc.value.remaining_minutes == 1


def test_minimum_interval_comes_from_system_config(world):
    world.configs.config = SystemConfig(min_clock_interval_hours=0.5)
    svc = world.container().attendance_service
    svc.clock_in(_in(), actor=world.user("s1"), now=at(TODAY, 9, 0))

    result = svc.clock_out(_out(), actor=world.user("s1"), now=at(TODAY, 9, 30))

    assert result.record.clock_out == at(TODAY, 9, 30)


def test_second_clock_out_is_idempotent(world, container):
    svc = container.attendance_service
    svc.clock_in(_in(), actor=world.user("s1"), now=at(TODAY, 9, 0))
    first = svc.clock_out(_out(), actor=world.user("s1"), now=at(TODAY, 17, 0))

    second = svc.clock_out(_out(), actor=world.user("s1"), now=at(TODAY, 18, 0))

    assert second.already_processed is True
    assert second.record.clock_out == first.record.clock_out


def test_clock_out_without_clock_in_is_not_found(world, container):
    with pytest.raises(NotFoundError):
        container.attendance_service.clock_out(_out(), actor=world.user("s1"), now=at(TODAY, 17, 0))


def test_clock_out_checks_only_supervisor_location(world, container):
    svc = container.attendance_service
    svc.clock_in(_in(), actor=world.user("s1"), now=at(TODAY, 9, 0))
    world.assignments.create_assignment(staff_id="s1", supervisor_id="sup2", location_id="site2")

    result = svc.clock_out(_out(), actor=world.user("sup1"), now=at(TODAY, 17, 0))

    assert result.record.clocked_out_by == "sup1"
    assert result.clocked_by_name == "Sue Supervisor"


def test_clock_out_rejects_unmapped_supervisor(world, container):
    svc = container.attendance_service
    svc.clock_in(_in(), actor=world.user("s1"), now=at(TODAY, 9, 0))

    with pytest.raises(AuthorizationError):
        svc.clock_out(_out(location_id="site2"), actor=world.user("sup1"), now=at(TODAY, 17, 0))


def test_manager_self_clock_out_requires_office(world, container):
    world.assignments.add_mapping("m1", "site1")

    with pytest.raises(PolicyViolationError, match="must clock out at office location"):
        container.attendance_service.clock_out(
            _out(staff_id="m1", supervisor_id="m1"), actor=world.user("m1"), now=at(TODAY, 17, 0)
        )


def test_gm_override_skips_minimum_interval(world, container):
    svc = container.attendance_service
    svc.clock_in(_in(), actor=world.user("s1"), now=at(TODAY, 9, 0))

    result = svc.clock_out(_out(is_override=True), actor=world.user("gm1"), now=at(TODAY, 10, 0))

    assert result.record.is_override is True
    assert result.record.clocked_out_by == "gm1"


def test_gm_override_clock_out_requires_assigned_staff(world, container):
    svc = container.attendance_service
    svc.clock_in(_in(), actor=world.user("s1"), now=at(TODAY, 9, 0))
    for assignment in list(world.assignments.assignments):
        if assignment.staff_id == "s1":
            world.assignments.deactivate_assignment(assignment_id=assignment.assignment_id)

    with pytest.raises(AuthorizationError):
        svc.clock_out(_out(is_override=True), actor=world.user("gm1"), now=at(TODAY, 10, 0))

    assert next(iter(world.attendance.records.values())).clock_out is None


def test_override_flag_is_never_downgraded(world, container):
    svc = container.attendance_service
    svc.clock_in(_in(is_override=True), actor=world.user("gm1"), now=at(TODAY, 9, 0))

    result = svc.clock_out(_out(), actor=world.user("sup1"), now=at(TODAY, 16, 0))

    assert result.record.is_override is True


def test_clock_out_closes_backdated_record(world, container):
    svc = container.attendance_service
    svc.clock_in(_in(attendance_date="2026-03-09"), actor=world.user("m1"), now=at(TODAY, 1, 0))

    result = svc.clock_out(_out(attendance_date="2026-03-09"), actor=world.user("m1"), now=at(TODAY, 8, 0))

    assert result.record.attendance_date == "2026-03-09"
    assert result.record.clock_out == at(TODAY, 8, 0)


def test_new_clock_in_allowed_after_previous_closed(world, container):
    svc = container.attendance_service
    svc.clock_in(_in(), actor=world.user("s1"), now=at(TODAY, 6, 0))
    svc.clock_out(_out(), actor=world.user("s1"), now=at(TODAY, 12, 0))

    again = svc.clock_in(_in(), actor=world.user("s1"), now=at(TODAY, 13, 0))

    assert again.already_processed is False
    assert len(world.attendance.records) == 2
    assert sum(1 for r in world.attendance.records.values() if r.is_open) == 1


def test_concurrent_clock_ins_create_one_open_record(world, container):
    svc = container.attendance_service
    staff = world.user("s1")

    def attempt(_):
        return svc.clock_in(_in(), actor=staff, now=at(TODAY, 9, 0))

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(attempt, range(16)))

    assert len(world.attendance.records) == 1
    assert sum(1 for r in results if not r.already_processed) == 1
