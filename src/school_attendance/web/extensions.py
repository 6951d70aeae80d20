from __future__ import annotations

from flask import current_app
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")
cors = CORS()


def _configured(key: str):
    return lambda: current_app.config[key]


# One shared bucket per route class, so e.g. every teacher endpoint draws from the same quota.
auth_limit = limiter.shared_limit(_configured("RATE_LIMIT_AUTH"), scope="auth")
teacher_limit = limiter.shared_limit(_configured("RATE_LIMIT_TEACHER"), scope="teacher")
student_limit = limiter.shared_limit(_configured("RATE_LIMIT_STUDENT"), scope="student")
