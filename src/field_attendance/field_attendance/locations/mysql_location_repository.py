from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone, placeholders
from .model import Location
from .repository import LocationRepository

_COLUMNS = """
    location_id, name, code, center_lat, center_lng, radius_meters,
    morning_shift_start, morning_shift_end, night_shift_start, night_shift_end, is_office
"""


def _row_to_location(row: Dict[str, Any]) -> Location:
    return Location(
        location_id=str(row["location_id"]),
        name=row.get("name") or "",
        code=row.get("code"),
        center_lat=as_float(row.get("center_lat")),
        center_lng=as_float(row.get("center_lng")),
        radius_meters=as_float(row.get("radius_meters")),
        morning_shift_start=row.get("morning_shift_start"),
        morning_shift_end=row.get("morning_shift_end"),
        night_shift_start=row.get("night_shift_start"),
        night_shift_end=row.get("night_shift_end"),
        is_office=bool(row.get("is_office")),
    )


class MySQLLocationRepository(LocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, location_id: str) -> Optional[Location]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM locations WHERE location_id=%s", (location_id,))
            row = fetchone(cur)
            return _row_to_location(row) if row else None

    def get_many(self, location_ids: Sequence[str]) -> Mapping[str, Location]:
        ids = [i for i in location_ids if i]
        if not ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM locations WHERE location_id IN ({placeholders(ids)})", tuple(ids))
            return {loc.location_id: loc for loc in map(_row_to_location, fetchall(cur))}
