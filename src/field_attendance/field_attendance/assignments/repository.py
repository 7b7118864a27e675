from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import StaffAssignment, SupervisorLocation


class AssignmentRepository(Protocol):
    def find_supervisor_location(self, *, supervisor_id: str, location_id: str) -> Optional[SupervisorLocation]:
        raise NotImplementedError

    def find_active_assignment(
        self,
        *,
        staff_id: str,
        supervisor_id: Optional[str] = None,
        location_id: Optional[str] = None,
    ) -> Optional[StaffAssignment]:
        """First active assignment of ``staff_id`` matching the given keys."""

        raise NotImplementedError

    def list_active_assignments(self) -> Sequence[StaffAssignment]:
        raise NotImplementedError

    def create_assignment(self, *, staff_id: str, supervisor_id: str, location_id: str) -> StaffAssignment:
        """Insert an active assignment, deactivating any active one for the staff."""

        raise NotImplementedError

    def deactivate_assignment(self, *, assignment_id: str) -> bool:
        raise NotImplementedError

    def replace_supervisor_location(self, *, supervisor_id: str, location_id: str) -> SupervisorLocation:
        """Drop existing mappings for the pair and create a fresh one."""

        raise NotImplementedError
