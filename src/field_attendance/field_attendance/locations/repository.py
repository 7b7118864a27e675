from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence

from .model import Location


class LocationRepository(Protocol):
    def get_by_id(self, location_id: str) -> Optional[Location]:
        raise NotImplementedError

    def get_many(self, location_ids: Sequence[str]) -> Mapping[str, Location]:
        raise NotImplementedError
