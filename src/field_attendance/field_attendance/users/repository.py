from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence

from .model import StaffMember


class DirectoryRepository(Protocol):
    """Read-only view of the user directory.

    Note (DIP): services depend on this interface, never on a concrete store.
    """

    def get_by_id(self, user_id: str) -> Optional[StaffMember]:
        raise NotImplementedError

    def get_many(self, user_ids: Sequence[str]) -> Mapping[str, StaffMember]:
        raise NotImplementedError
