from __future__ import annotations

import hashlib
import logging
from contextlib import contextmanager
from typing import Iterator

from ..core.constants import DEFAULT_LOCK_TIMEOUT_SECONDS
from ..core.exceptions import InfrastructureError
from .connection import DatabaseConnection
from .mysql_base import db_cursor

logger = logging.getLogger(__name__)

# MySQL limits user lock names to 64 characters.
_MAX_LOCK_NAME = 64


def _lock_name(key: str) -> str:
    if len(key) <= _MAX_LOCK_NAME:
        return key
    return "fa:" + hashlib.sha1(key.encode("utf-8")).hexdigest()


class MySQLAdvisoryLocks:
    """Per-key lock shared by every process using the same database (``GET_LOCK``)."""

    def __init__(self, conn_factory: DatabaseConnection, *, timeout_seconds: int = DEFAULT_LOCK_TIMEOUT_SECONDS):
        self._conn_factory = conn_factory
        self._timeout = int(timeout_seconds)

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        name = _lock_name(key)
        # The lock belongs to the session, so keep this connection open while held.
        with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
            cur.execute("SELECT GET_LOCK(%s, %s)", (name, self._timeout))
            row = cur.fetchone()
            if not row or row[0] != 1:
                raise InfrastructureError(f"Timed out waiting for lock {key!r}")
            try:
                yield
            finally:
                cur.execute("SELECT RELEASE_LOCK(%s)", (name,))
                cur.fetchone()
                logger.debug("Released lock %s", key)
