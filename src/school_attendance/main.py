from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .core.constants import MAX_BODY_BYTES
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .attendance.controller import register as register_attendance
from .profiles.controller import register as register_profiles
from .reports.controller import register as register_reports
from .users.controller import register as register_users
from .web.errors import register_error_handlers
from .web.extensions import cors, limiter
from .web.logging_setup import configure_logging, register_request_logging

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))

    secret_key = getattr(settings, "SECRET_KEY")
    if settings_module.endswith("production") and secret_key == getattr(settings, "PLACEHOLDER_SECRET", None):
        raise RuntimeError("SECRET_KEY must be set in production")

    app.secret_key = secret_key
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = MAX_BODY_BYTES
    app.config["COOKIE_SECURE"] = bool(getattr(settings, "COOKIE_SECURE", False))
    app.config["RATELIMIT_ENABLED"] = bool(getattr(settings, "RATELIMIT_ENABLED", True))
    app.config["RATE_LIMIT_AUTH"] = getattr(settings, "RATE_LIMIT_AUTH")
    app.config["RATE_LIMIT_TEACHER"] = getattr(settings, "RATE_LIMIT_TEACHER")
    app.config["RATE_LIMIT_STUDENT"] = getattr(settings, "RATE_LIMIT_STUDENT")

    db_config = getattr(settings, "DB_CONFIG")
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        container = build_container(
            db_config=db_config,
            secret_key=secret_key,
            token_ttl_hours=int(getattr(settings, "TOKEN_TTL_HOURS", 24)),
        )

    limiter.init_app(app)
    cors.init_app(app, resources={r"/api/*": {"origins": getattr(settings, "CORS_ORIGINS", [])}}, supports_credentials=True)
    register_error_handlers(app)
    register_request_logging(app)

    register_users(app, container)
    register_profiles(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    app.extensions["container"] = container
    return app
