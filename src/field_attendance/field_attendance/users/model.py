from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class StaffMember:
    """Directory entry as seen by the engine (read-only reference data).

    ``role`` is kept as the raw directory string; ``users.roles`` normalises it.
    """

    user_id: str
    full_name: str
    username: str
    role: str
    department: Optional[str] = None
    departments: Tuple[str, ...] = ()
    shift_days: int = 6
    shift_start_time: Optional[str] = None
    shift_end_time: Optional[str] = None
    emp_no: Optional[str] = None
    is_active: bool = True

    @property
    def display_name(self) -> str:
        for value in (self.full_name, self.username):
            if value and value.strip():
                return value.strip()
        return "Unknown"
