from __future__ import annotations

from typing import Optional, Protocol

from .model import SystemConfig


class SystemConfigRepository(Protocol):
    def load(self) -> Optional[SystemConfig]:
        """Stored singleton, or None when never saved."""

        raise NotImplementedError

    def save(self, config: SystemConfig) -> None:
        raise NotImplementedError
