from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StaffAssignment:
    """Staff member placed under a supervisor at a location."""

    assignment_id: str
    staff_id: str
    supervisor_id: str
    location_id: str
    is_active: bool = True


@dataclass(frozen=True)
class SupervisorLocation:
    mapping_id: str
    supervisor_id: str
    location_id: str
