from __future__ import annotations

import logging

from ..common.validators import require_fields
from ..core.exceptions import AuthorizationError, NotFoundError
from ..users.model import StaffMember
from ..users.roles import has_management_privileges
from .model import StaffAssignment, SupervisorLocation
from .repository import AssignmentRepository

logger = logging.getLogger(__name__)


class AssignmentService:
    """Use case: place staff under supervisors and supervisors at locations."""

    def __init__(self, assignments: AssignmentRepository):
        self._assignments = assignments

    @staticmethod
    def _require_management(actor: StaffMember) -> None:
        if not has_management_privileges(actor.role):
            raise AuthorizationError(f"User role '{actor.role}' is not authorized to manage assignments")

    def assign_staff(self, *, actor: StaffMember, staff_id: str, supervisor_id: str, location_id: str) -> StaffAssignment:
        self._require_management(actor)
        require_fields(staff_id=staff_id, supervisor_id=supervisor_id, location_id=location_id)

        assignment = self._assignments.create_assignment(
            staff_id=staff_id,
            supervisor_id=supervisor_id,
            location_id=location_id,
        )
        logger.info(
            "Assigned staff %s to supervisor %s at location %s (by %s)",
            staff_id,
            supervisor_id,
            location_id,
            actor.user_id,
        )
        return assignment

    def deactivate(self, *, actor: StaffMember, assignment_id: str) -> None:
        self._require_management(actor)
        if not self._assignments.deactivate_assignment(assignment_id=assignment_id):
            raise NotFoundError("Assignment", assignment_id)
        logger.info("Deactivated assignment %s (by %s)", assignment_id, actor.user_id)

    def assign_supervisor_location(self, *, actor: StaffMember, supervisor_id: str, location_id: str) -> SupervisorLocation:
        self._require_management(actor)
        require_fields(supervisor_id=supervisor_id, location_id=location_id)
        return self._assignments.replace_supervisor_location(supervisor_id=supervisor_id, location_id=location_id)
