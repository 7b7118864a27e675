from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import ContextManager, Dict, Hashable, Iterator, Protocol

from ..core.constants import DEFAULT_LOCK_TIMEOUT_SECONDS
from ..core.exceptions import InfrastructureError


class LockProvider(Protocol):
    def hold(self, key: str) -> ContextManager[None]:
        raise NotImplementedError


class KeyedLocks:
    """In-process lock per key.

    Entries are reference counted and dropped when the last holder leaves, so
    the table only contains keys that are currently contended.
    """

    def __init__(self, *, timeout_seconds: float = DEFAULT_LOCK_TIMEOUT_SECONDS):
        self._timeout = float(timeout_seconds)
        self._guard = threading.Lock()
        self._locks: Dict[Hashable, list] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            if not entry[0].acquire(timeout=self._timeout):
                raise InfrastructureError(f"Timed out waiting for lock {key!r}")
            try:
                yield
            finally:
                entry[0].release()
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    self._locks.pop(key, None)
