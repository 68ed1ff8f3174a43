from __future__ import annotations

import importlib
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask
from werkzeug.exceptions import HTTPException

from .attendance.controller import register as register_attendance
from .businesses.controller import register as register_businesses
from .common.http import fail, ok
from .common.logging_config import configure_logging
from .config import get_settings_module
from .container import Container, build_container
from .core.exceptions import DomainError
from .database.bootstrap import apply_schema, ensure_demo_business, list_tables
from .database.connection import DatabaseConnection
from .employees.controller import register as register_employees
from .payments.controller import register as register_payments
from .payroll.controller import register as register_payroll
from .shifts.controller import register as register_shifts

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(err: DomainError):
        return fail(err.message, err.status_code, err.details)

    @app.errorhandler(HTTPException)
    def handle_http_error(err: HTTPException):
        message = "Route not found" if err.code == 404 else (err.description or err.name)
        return fail(message, err.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        logger.exception("unhandled error: %s", err)
        return fail("Internal server error", 500)


def _register_health(app: Flask, container: Container) -> None:
    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return ok(status="ok", timestamp=datetime.now(timezone.utc).isoformat())

    @app.route("/health/db", methods=["GET"], endpoint="health_db")
    def health_db():
        try:
            count = container.businesses_repo.count()
        except Exception:
            logger.exception("database health check failed")
            return fail("Database connection failed", 503, {"database": "disconnected"})
        return ok({"database": "connected", "businessCount": count})


def create_app(container: Optional[Container] = None, settings: Any = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = None
    if settings is None:
        settings_module = get_settings_module()
        settings = importlib.import_module(settings_module)

    debug = bool(getattr(settings, "DEBUG", False))
    configure_logging(debug=debug, level=getattr(settings, "LOG_LEVEL", None))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = debug
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False
    prefix = getattr(settings, "API_PREFIX", "/api/v1")

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info("settings=%s db=%s", settings_module, DatabaseConnection.from_settings(db_config).describe())

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            ensure_demo_business(db_config)

        container = build_container(db_config=db_config)

    register_businesses(app, container, prefix=prefix)
    register_employees(app, container, prefix=prefix)
    register_shifts(app, container, prefix=prefix)
    register_payments(app, container, prefix=prefix)
    register_attendance(app, container, prefix=prefix)
    register_payroll(app, container, prefix=prefix)
    _register_health(app, container)
    _register_error_handlers(app)

    return app
