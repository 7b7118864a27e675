"""Role hierarchy and authorization predicates.

Every predicate normalises the role string first (trim + lowercase); an empty
or unknown role ranks below everyone and has no access.
"""

from __future__ import annotations

from typing import Iterable, Optional, Union

from ..core.enums import Role

ROLE_RANK = {
    Role.STAFF: 0,
    Role.SUPERVISOR: 1,
    Role.SUB_ENGINEER: 1,
    Role.MANAGER: 2,
    Role.GENERAL_MANAGER: 3,
    Role.CEO: 4,
    Role.SUPER_ADMIN: 5,
}

NO_ACCESS_RANK = -1

RoleLike = Union[Role, str, None]


def normalize_role(role: RoleLike) -> Optional[Role]:
    if isinstance(role, Role):
        return role
    if not role or not isinstance(role, str):
        return None
    try:
        return Role(role.strip().lower())
    except ValueError:
        return None


def role_rank(role: RoleLike) -> int:
    normalized = normalize_role(role)
    if normalized is None:
        return NO_ACCESS_RANK
    return ROLE_RANK[normalized]


def has_full_control(role: RoleLike) -> bool:
    return role_rank(role) >= ROLE_RANK[Role.CEO]


def has_executive_privileges(role: RoleLike) -> bool:
    return role_rank(role) >= ROLE_RANK[Role.GENERAL_MANAGER]


def has_management_privileges(role: RoleLike) -> bool:
    return role_rank(role) >= ROLE_RANK[Role.MANAGER]


def has_field_leadership_privileges(role: RoleLike) -> bool:
    return role_rank(role) >= ROLE_RANK[Role.SUPERVISOR]


def _norm_dept(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def check_department_access(
    role: RoleLike,
    target_department: Optional[str],
    *,
    department: Optional[str] = None,
    departments: Iterable[str] = (),
) -> bool:
    """Whether an actor with ``role`` may see ``target_department``."""
    if has_full_control(role):
        return True

    normalized = normalize_role(role)
    target = _norm_dept(target_department)

    if normalized == Role.GENERAL_MANAGER:
        if not target:
            return True
        owned = [_norm_dept(d) for d in departments]
        owned.append(_norm_dept(department))
        return target in [d for d in owned if d]

    if normalized == Role.MANAGER:
        own = _norm_dept(department)
        return bool(target) and bool(own) and own == target

    return False


def actor_can_access_department(actor, target_department: Optional[str]) -> bool:
    """Convenience wrapper taking a ``StaffMember``."""
    return check_department_access(
        actor.role,
        target_department,
        department=actor.department,
        departments=actor.departments,
    )
