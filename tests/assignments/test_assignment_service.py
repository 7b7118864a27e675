import pytest

from field_attendance.core.exceptions import AuthorizationError, MissingRequiredFieldError, NotFoundError


def test_new_assignment_deactivates_previous(world, container):
    svc = container.assignment_service

    created = svc.assign_staff(actor=world.user("m1"), staff_id="s1", supervisor_id="sup2", location_id="site2")

    active = [a for a in world.assignments.list_active_assignments() if a.staff_id == "s1"]
    assert active == [created]


def test_assignments_require_management(world, container):
    with pytest.raises(AuthorizationError):
        container.assignment_service.assign_staff(
            actor=world.user("sup1"), staff_id="s3", supervisor_id="sup1", location_id="site1"
        )


def test_assignment_requires_all_ids(world, container):
    with pytest.raises(MissingRequiredFieldError):
        container.assignment_service.assign_staff(
            actor=world.user("m1"), staff_id="s3", supervisor_id="", location_id="site1"
        )


def test_deactivate_unknown_assignment(world, container):
    with pytest.raises(NotFoundError):
        container.assignment_service.deactivate(actor=world.user("m1"), assignment_id="missing")


def test_deactivate_assignment(world, container):
    asg = world.assignments.find_active_assignment(staff_id="s1")

    container.assignment_service.deactivate(actor=world.user("gm1"), assignment_id=asg.assignment_id)

    assert world.assignments.find_active_assignment(staff_id="s1") is None


def test_supervisor_location_mapping_is_replaced(world, container):
    before = world.assignments.find_supervisor_location(supervisor_id="sup1", location_id="site1")

    mapping = container.assignment_service.assign_supervisor_location(
        actor=world.user("m1"), supervisor_id="sup1", location_id="site1"
    )

    pairs = [(m.supervisor_id, m.location_id) for m in world.assignments.mappings]
    assert pairs.count(("sup1", "site1")) == 1
    assert mapping.mapping_id != before.mapping_id
