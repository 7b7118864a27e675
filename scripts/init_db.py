from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv

from field_attendance.config import configure_logging, get_settings_module
from field_attendance.database.bootstrap import apply_schema, list_tables
from field_attendance.database.connection import DatabaseConnection, DBConfig

logger = logging.getLogger("init_db")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    conn = DatabaseConnection(
        DBConfig.from_dict(dict(settings.DB_CONFIG), connection_timeout=getattr(settings, "DB_TIMEOUT_SECONDS", None))
    )
    schema_path = Path(__file__).resolve().parents[1] / "database" / "schema.sql"
    apply_schema(conn, schema_path=schema_path)

    cfg = conn.config
    logger.info(
        "Applied schema.sql -> %s@%s:%s/%s (tables=%d)",
        cfg.user,
        cfg.host,
        cfg.port,
        cfg.database,
        len(list_tables(conn)),
    )


if __name__ == "__main__":
    main()
