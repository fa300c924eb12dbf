from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .clock.controller import register as register_clock
from .common.http import register_error_handlers
from .common.logger import configure_logging, get_logger
from .config import get_settings_module
from .container import Container, build_container_from_settings
from .database.bootstrap import apply_schema, list_tables
from .presence.controller import register as register_presence
from .reports.controller import register as register_reports

logger = get_logger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_DIR", "") or None)

    if container is None:
        backend = getattr(settings, "STORAGE_BACKEND", "mysql")
        db_config = dict(getattr(settings, "DB_CONFIG", {}))
        logger.info(
            "settings=%s backend=%s db=%s@%s:%s/%s",
            settings_module, backend,
            db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
        )
        if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container_from_settings(settings)

    app.extensions["staff_presence"] = container

    register_error_handlers(app)
    register_clock(app, container)
    register_reports(app, container)
    register_presence(app, container)

    return app
