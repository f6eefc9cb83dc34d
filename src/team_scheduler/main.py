from __future__ import annotations

import importlib
import time
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, g, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container
from .core.exceptions import AuthorizationError, IntegrationError, NotFoundError, ValidationError
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .events.controller import register as register_events
from .exports.controller import register as register_exports
from .imports.controller import register as register_imports
from .logging_config import configure_logging, get_logger
from .projects.controller import register as register_projects
from .push.controller import register as register_push
from .reports.controller import register as register_reports
from .tasks.controller import register as register_tasks
from .users.controller import register as register_users

logger = get_logger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"

ERROR_STATUS = {
    ValidationError: 400,
    AuthorizationError: 403,
    NotFoundError: 404,
    IntegrationError: 502,
}


def _register_error_handlers(app: Flask) -> None:
    def _domain_error(status: int):
        def handler(e):
            return jsonify({"success": False, "error": str(e)}), status

        return handler

    for exc_cls, status in ERROR_STATUS.items():
        app.register_error_handler(exc_cls, _domain_error(status))

    @app.errorhandler(Exception)
    def unexpected(e):
        if isinstance(e, HTTPException):
            return jsonify({"success": False, "error": e.description or e.name}), e.code
        logger.exception("Unhandled error", path=request.path, method=request.method)
        return jsonify({"success": False, "error": "Internal server error"}), 500


def _register_request_logging(app: Flask) -> None:
    @app.before_request
    def start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def log_request(response):
        started = g.get("request_started")
        duration_ms = round((time.perf_counter() - started) * 1000, 1) if started else None
        logger.info(
            "API request",
            method=request.method,
            path=request.path,
            status=response.status_code,
            duration_ms=duration_ms,
        )
        return response


def create_app(**overrides) -> Flask:
    """Application factory.

    `overrides` are passed to build_container (sheets, calendar, push_sender).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.json.ensure_ascii = False

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))
    CORS(app, resources={r"/api/*": {"origins": getattr(settings, "CORS_ORIGINS", "*")}})

    backend = str(getattr(settings, "STORAGE_BACKEND", "mysql")).lower()
    db_config = getattr(settings, "DB_CONFIG", {})
    logger.info("Starting app", settings=settings_module, storage=backend)

    if backend == "mysql":
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("Schema ready", tables=len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            logger.info("Seed data applied")

    container = build_container(settings=settings, **overrides)
    app.extensions["container"] = container

    _register_error_handlers(app)
    _register_request_logging(app)

    register_users(app, container)
    register_events(app, container)
    register_tasks(app, container)
    register_projects(app, container)
    register_attendance(app, container)
    register_reports(app, container)
    register_imports(app, container)
    register_exports(app, container)
    register_push(app, container)

    return app
