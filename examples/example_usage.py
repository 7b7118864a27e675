"""Example: call the engine directly (no Flask).

Controllers are thin; every rule lives in the services wired by the container.
"""

import importlib
import sys

from dotenv import load_dotenv

from field_attendance.config import configure_logging, get_settings_module
from field_attendance.container import build_container


def main(date_from: str, date_to: str) -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(db_config=settings.DB_CONFIG)
    for row in container.report_service.generate_report(date_from=date_from, date_to=date_to):
        print(f"{row.attendance_date}  {row.staff_name:<30} {row.status.value:<9} {row.location_name}")


if __name__ == "__main__":
    main(*sys.argv[1:3])
