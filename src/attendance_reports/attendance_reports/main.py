from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import RequestEntityTooLarge

from config import get_settings_module

from .core.constants import ADJACENT_DAY_CALENDAR, DEFAULT_MAX_UPLOAD_MB
from .core.enums import ReportStoreKind
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig

from .container import build_container
from .reports.controller import register as register_reports
from .overrides.controller import register as register_overrides

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    max_upload_mb = int(getattr(settings, "MAX_UPLOAD_MB", DEFAULT_MAX_UPLOAD_MB))
    app.config["MAX_CONTENT_LENGTH"] = max_upload_mb * 1024 * 1024

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = str(getattr(settings, "REPORT_STORE", ReportStoreKind.MYSQL.value))
    db_config = dict(getattr(settings, "DB_CONFIG", {}))
    logger.info("settings=%s store=%s", settings_module, store)

    auto_init_db = bool(getattr(settings, "AUTO_INIT_DB", False))
    if auto_init_db and store.lower() == ReportStoreKind.MYSQL.value:
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("Schema ready on %s (tables=%d)", DBConfig.from_mapping(db_config).describe(), len(list_tables(db_config)))

    container = build_container(
        store=store,
        db_config=db_config,
        adjacent_day_mode=str(getattr(settings, "ADJACENT_DAY_MODE", ADJACENT_DAY_CALENDAR)),
    )
    app.extensions["attendance_reports"] = container

    register_reports(app, container)
    register_overrides(app, container)

    @app.errorhandler(RequestEntityTooLarge)
    def upload_too_large(_e):
        logger.warning("Rejected request over the %d MB upload limit", max_upload_mb)
        return jsonify({"success": False, "message": f"File exceeds the {max_upload_mb} MB upload limit"}), 413

    return app
