from __future__ import annotations

from typing import Optional

from ..core.constants import SYSTEM_CONFIG_KEY
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import SystemConfig
from .repository import SystemConfigRepository


class MySQLSystemConfigRepository(SystemConfigRepository):
    """Single row keyed by ``SYSTEM_CONFIG_KEY``."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load(self) -> Optional[SystemConfig]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT grace_period_minutes, min_clock_interval_hours
                FROM system_config
                WHERE config_key=%s
                """,
                (SYSTEM_CONFIG_KEY,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return SystemConfig(
                grace_period_minutes=int(row["grace_period_minutes"]),
                min_clock_interval_hours=float(row["min_clock_interval_hours"]),
            )

    def save(self, config: SystemConfig) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO system_config(config_key, grace_period_minutes, min_clock_interval_hours)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    grace_period_minutes=VALUES(grace_period_minutes),
                    min_clock_interval_hours=VALUES(min_clock_interval_hours)
                """,
                (SYSTEM_CONFIG_KEY, config.grace_period_minutes, config.min_clock_interval_hours),
            )
