from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import List, Optional

ISO_DATE_FORMAT = "%Y-%m-%d"
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def try_parse_iso_date(value: Optional[str]) -> Optional[date]:
    """Strict YYYY-MM-DD parse; None for anything else."""
    if not value or not isinstance(value, str):
        return None
    value = value.strip()
    if not _ISO_DATE_RE.match(value):
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        return None


def format_iso_date(value: date) -> str:
    return value.strftime(ISO_DATE_FORMAT)


def iso_date_range(start: str, end: str) -> List[str]:
    """Inclusive list of YYYY-MM-DD strings; empty when unparsable or reversed."""
    start_d = try_parse_iso_date(start)
    end_d = try_parse_iso_date(end)
    if start_d is None or end_d is None or start_d > end_d:
        return []
    days = (end_d - start_d).days
    return [format_iso_date(start_d + timedelta(days=i)) for i in range(days + 1)]


def now_local() -> datetime:
    """Current local time.

    Services accept an explicit ``now`` instead of calling this in tests.
    """
    return datetime.now()
