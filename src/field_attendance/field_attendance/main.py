from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .assignments.controller import register as register_assignments
from .attendance.controller import register as register_attendance
from .config import configure_logging, get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_DB_TIMEOUT_SECONDS, DEFAULT_LOCK_TIMEOUT_SECONDS
from .database.bootstrap import apply_schema, list_tables
from .leave.controller import register as register_leave
from .reports.controller import register as register_reports
from .system.controller import register as register_system

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None) -> Flask:
    """App factory. Pass a prepared ``container`` to skip MySQL wiring."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        container = build_container(
            db_config=db_config,
            db_timeout_seconds=int(getattr(settings, "DB_TIMEOUT_SECONDS", DEFAULT_DB_TIMEOUT_SECONDS)),
            lock_timeout_seconds=int(getattr(settings, "LOCK_TIMEOUT_SECONDS", DEFAULT_LOCK_TIMEOUT_SECONDS)),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn, schema_path=SCHEMA_PATH)
            logger.info("Schema ready (tables=%d)", len(list_tables(container.conn)))

    register_attendance(app, container)
    register_reports(app, container)
    register_system(app, container)
    register_leave(app, container)
    register_assignments(app, container)

    return app
