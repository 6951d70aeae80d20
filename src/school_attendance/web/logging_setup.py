from __future__ import annotations

import logging
import time
from logging.handlers import RotatingFileHandler
from typing import Optional

from flask import Flask, g, request

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
SLOW_REQUEST_MS = 500

logger = logging.getLogger("school_attendance.requests")


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT, handlers=handlers)

    # werkzeug logs every request line; we log our own summary instead
    logging.getLogger("werkzeug").setLevel(logging.WARNING)


def register_request_logging(app: Flask) -> None:
    @app.before_request
    def _start_timer():
        g.request_started = time.monotonic()

    @app.after_request
    def _log_response(response):
        started = g.get("request_started")
        duration = (time.monotonic() - started) * 1000 if started is not None else 0.0
        # Only non-200 or slow responses, to keep the log readable
        if response.status_code != 200 or duration > SLOW_REQUEST_MS:
            logger.info(
                "%s %s -> %s (%.0fms) client=%s",
                request.method,
                request.path,
                response.status_code,
                duration,
                request.remote_addr,
            )
        return response
