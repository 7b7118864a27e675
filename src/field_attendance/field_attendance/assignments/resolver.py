from __future__ import annotations

import logging

from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..users.model import StaffMember
from ..users.roles import normalize_role
from .repository import AssignmentRepository

logger = logging.getLogger(__name__)


class AssignmentResolver:
    """Decides whether a supervisor/staff/location relationship may be acted on."""

    def __init__(self, assignments: AssignmentRepository):
        self._assignments = assignments

    def resolve_supervisor_location(self, *, supervisor_id: str, location_id: str) -> None:
        mapping = self._assignments.find_supervisor_location(supervisor_id=supervisor_id, location_id=location_id)
        if not mapping:
            raise AuthorizationError("Supervisor is not assigned to this location")

    def resolve_staff_assignment(self, *, staff_id: str, supervisor_id: str, location_id: str) -> None:
        # A supervisor clocking themselves has no staff assignment to check.
        if staff_id == supervisor_id:
            return
        assignment = self._assignments.find_active_assignment(
            staff_id=staff_id,
            supervisor_id=supervisor_id,
            location_id=location_id,
        )
        if not assignment:
            raise AuthorizationError("Staff is not assigned to this supervisor at this location")

    def resolve(self, *, staff_id: str, supervisor_id: str, location_id: str) -> None:
        self.resolve_supervisor_location(supervisor_id=supervisor_id, location_id=location_id)
        self.resolve_staff_assignment(staff_id=staff_id, supervisor_id=supervisor_id, location_id=location_id)

    def verify_override_target(self, *, staff: StaffMember, supervisor_id: str, location_id: str) -> None:
        """Residual check when a general manager overrides the normal rules.

        Staff must be assigned somewhere; supervisors must cover the location.
        Other roles pass.
        """
        if staff.user_id == supervisor_id:
            return

        role = normalize_role(staff.role)
        if role == Role.STAFF:
            if not self._assignments.find_active_assignment(staff_id=staff.user_id):
                raise AuthorizationError("Staff member not found or not assigned")
        elif role in (Role.SUPERVISOR, Role.SUB_ENGINEER):
            if not self._assignments.find_supervisor_location(supervisor_id=staff.user_id, location_id=location_id):
                raise AuthorizationError("Supervisor is not assigned to this location")
        else:
            logger.debug("Override target %s has role %r; no residual assignment check", staff.user_id, staff.role)
